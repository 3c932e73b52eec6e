"""
Monopoly board economy simulation.

One tick processes one player turn: jail handling, dice, movement, landing
resolution, doubles and the end-of-game checks. The bank is the counterparty
of salaries, purchases, card payouts and jail fines, so the money total of
bank + players + free parking pot never changes.
"""

from __future__ import annotations

from collections.abc import Sequence

import structlog

from games.logic.engine import BaseEngine, UpdateListener
from games.logic.enums import GameMode
from games.logic.rng import roll_dice
from games.logic.settings import (
    DEFAULT_MONOPOLY_SEATS,
    MonopolySettings,
    SeatConfig,
    validate_monopoly_settings,
)
from games.logic.state import Player
from games.monopoly.board import (
    BOARD_SIZE,
    GO_POSITION,
    JAIL_POSITION,
    Property,
    SquareKind,
    calculate_net_worth,
    calculate_rent,
    create_board,
)
from games.monopoly.state import CardOutcome, MonopolyAction, MonopolyState

logger = structlog.get_logger()


class MonopolyEngine(BaseEngine[MonopolyState]):
    """Autonomous four-player Monopoly with a simple buy heuristic."""

    game_mode = GameMode.MONOPOLY
    display_name = "Monopoly"

    def __init__(
        self,
        on_update: UpdateListener | None = None,
        *,
        seed: str | None = None,
        seats: Sequence[SeatConfig] = DEFAULT_MONOPOLY_SEATS,
        settings: MonopolySettings | None = None,
    ) -> None:
        self._settings = settings or MonopolySettings()
        validate_monopoly_settings(self._settings)
        self._seats = tuple(seats)
        super().__init__(on_update, seed=seed)

    @property
    def settings(self) -> MonopolySettings:
        return self._settings

    def initialize_state(self) -> MonopolyState:
        players = [
            Player(id=seat.id, name=seat.name, color=seat.color, money=self._settings.starting_money)
            for seat in self._seats
        ]
        return MonopolyState(
            players=players,
            properties=create_board(),
            bank_money=self._settings.bank_money,
        )

    # ------------------------------------------------------------------
    # turn processing
    # ------------------------------------------------------------------

    def _advance(self) -> None:
        state = self._state
        player = state.current_player
        if player is None:
            self._end_game(None, "No players remain; the game is over")
            return

        if player.in_jail and not self._handle_jail_turn(player):
            self._finish_turn()
            return

        die1, die2 = roll_dice(self._rng)
        is_doubles = die1 == die2
        state.dice_rolls = (die1, die2)
        total = die1 + die2

        old_position = player.position
        player.position = (player.position + total) % BOARD_SIZE
        logger.debug("dice rolled", player_id=player.id, dice=(die1, die2), position=player.position)
        self._log_entry(
            MonopolyAction.DICE_ROLL,
            f"{player.name} rolled {die1}+{die2}={total} and moved to position {player.position}",
            actor=player.name,
        )

        if player.position < old_position:
            self._pay_from_bank(player, self._settings.pass_go_salary)
            self._log_entry(
                MonopolyAction.PASS_GO,
                f"{player.name} passed GO! Collected ${self._settings.pass_go_salary}",
                actor=player.name,
            )

        went_bankrupt = self._resolve_landing(player)

        if went_bankrupt:
            # the next seat already slid into the bankrupt player's index
            self._clamp_player_index()
        elif is_doubles and not player.in_jail:
            self._log_entry(MonopolyAction.DOUBLES, f"DOUBLES! {player.name} gets another turn", actor=player.name)
        else:
            state.advance_player_index()

        self._finish_turn()

    def _finish_turn(self) -> None:
        self._state.round_number += 1
        self._check_game_end()

    def _handle_jail_turn(self, player: Player) -> bool:
        """
        Process a jailed player's turn.

        Returns True when the player left jail by rolling doubles and should
        continue with a normal turn; False when the turn is over.
        """
        player.jail_turns += 1

        if player.jail_turns >= self._settings.max_jail_turns:
            fine = self._settings.jail_fine
            player.money -= fine
            self._state.bank_money += fine
            self._release_from_jail(player)
            self._log_entry(
                MonopolyAction.JAIL_PAYMENT,
                f"{player.name} paid ${fine} to get out of jail after {self._settings.max_jail_turns} turns",
                actor=player.name,
            )
            self._state.advance_player_index()
            return False

        die1, die2 = roll_dice(self._rng)
        if die1 == die2:
            self._release_from_jail(player)
            self._log_entry(
                MonopolyAction.JAIL_DOUBLES,
                f"{player.name} rolled doubles and escaped jail!",
                actor=player.name,
            )
            return True

        self._log_entry(
            MonopolyAction.JAIL_STAY,
            f"{player.name} failed to roll doubles ({die1}, {die2}). Stays in jail.",
            actor=player.name,
        )
        self._state.advance_player_index()
        return False

    def _resolve_landing(self, player: Player) -> bool:
        """Apply the effect of the square under the player. Returns True on bankruptcy."""
        prop = self._state.property_at(player.position)
        match prop.kind:
            case SquareKind.PROPERTY | SquareKind.RAILROAD | SquareKind.UTILITY:
                return self._handle_property_landing(player, prop)
            case SquareKind.TAX:
                self._handle_tax_square(player, prop)
            case SquareKind.CARD:
                self._handle_card_square(player, prop)
            case SquareKind.CORNER:
                self._handle_corner_square(player, prop)
        return False

    def _handle_property_landing(self, player: Player, prop: Property) -> bool:
        if prop.owner is None:
            if self.should_buy_property(player, prop):
                self._buy_property(player, prop)
            else:
                self._log_entry(
                    MonopolyAction.PROPERTY_PASS,
                    f"{player.name} chose not to buy {prop.name}",
                    actor=player.name,
                )
            return False

        owner = prop.owner
        if owner is player:
            self._log_entry(
                MonopolyAction.OWN_PROPERTY,
                f"{player.name} landed on their own property: {prop.name}",
                actor=player.name,
            )
            return False

        if prop.mortgaged:
            self._log_entry(
                MonopolyAction.RENT_PAID,
                f"{prop.name} is mortgaged; {player.name} pays no rent to {owner.name}",
                actor=player.name,
            )
            return False

        dice_sum = sum(self._state.dice_rolls or (0, 0))
        rent = calculate_rent(prop, dice_sum)
        if player.money >= rent:
            player.money -= rent
            owner.money += rent
            self._log_entry(
                MonopolyAction.RENT_PAID,
                f"{player.name} paid ${rent} rent to {owner.name} for {prop.name}",
                actor=player.name,
            )
            return False

        self._declare_bankruptcy(player, owner, rent)
        return True

    def should_buy_property(self, player: Player, prop: Property) -> bool:
        """Buy only while keeping a cash reserve and spending a bounded share of cash."""
        return (
            player.money >= prop.price + self._settings.buy_cash_reserve
            and prop.price <= player.money * self._settings.buy_max_spend_ratio
        )

    def _buy_property(self, player: Player, prop: Property) -> None:
        player.money -= prop.price
        self._state.bank_money += prop.price
        prop.owner = player
        player.owned_properties.append(prop)
        self._log_entry(
            MonopolyAction.PROPERTY_BOUGHT,
            f"{player.name} bought {prop.name} for ${prop.price}",
            actor=player.name,
        )

    def _declare_bankruptcy(self, bankrupt: Player, creditor: Player, rent: int) -> None:
        """Transfer every asset of the bankrupt player to the creditor and remove them."""
        for prop in bankrupt.owned_properties:
            prop.owner = creditor
            creditor.owned_properties.append(prop)
        bankrupt.owned_properties = []

        if bankrupt.money > 0:
            creditor.money += bankrupt.money
        else:
            # outstanding debt is written off by the bank
            self._state.bank_money += bankrupt.money
        bankrupt.money = 0

        self._state.players = [p for p in self._state.players if p is not bankrupt]
        logger.info("player bankrupt", player_id=bankrupt.id, creditor_id=creditor.id, rent=rent)
        self._log_entry(
            MonopolyAction.BANKRUPTCY,
            f"{bankrupt.name} cannot afford ${rent} rent and went bankrupt! "
            f"All assets transferred to {creditor.name}",
            actor=bankrupt.name,
        )

    def _clamp_player_index(self) -> None:
        players = self._state.players
        if not players:
            self._state.current_player_index = 0
        elif self._state.current_player_index >= len(players):
            self._state.current_player_index = 0

    def _handle_tax_square(self, player: Player, prop: Property) -> None:
        amount = prop.rent[0]
        player.money -= amount
        self._state.free_parking_pot += amount
        self._log_entry(MonopolyAction.TAX_PAID, f"{player.name} paid ${amount} in {prop.name}", actor=player.name)

    def _handle_card_square(self, player: Player, prop: Property) -> None:
        outcome = self._rng.choice(list(CardOutcome))
        match outcome:
            case CardOutcome.ADVANCE_TO_GO:
                player.position = GO_POSITION
                self._pay_from_bank(player, self._settings.card_go_payout)
            case CardOutcome.POOR_TAX:
                player.money -= self._settings.card_poor_tax
                self._state.free_parking_pot += self._settings.card_poor_tax
            case CardOutcome.BUILDING_LOAN:
                self._pay_from_bank(player, self._settings.card_collect)
            case CardOutcome.GO_TO_JAIL:
                self._send_to_jail(player)
        self._log_entry(MonopolyAction.CARD_DRAWN, f"{player.name} drew {prop.name}: {outcome}", actor=player.name)

    def _handle_corner_square(self, player: Player, prop: Property) -> None:
        if prop.position == GO_POSITION:
            self._pay_from_bank(player, self._settings.go_landing_bonus)
            self._log_entry(
                MonopolyAction.LANDED_GO,
                f"{player.name} landed exactly on GO! Bonus ${self._settings.go_landing_bonus}",
                actor=player.name,
            )
        elif prop.position == JAIL_POSITION:
            self._log_entry(MonopolyAction.VISITING_JAIL, f"{player.name} is just visiting jail", actor=player.name)
        elif prop.name == "Free Parking":
            pot = self._state.free_parking_pot
            if pot > 0:
                player.money += pot
                self._state.free_parking_pot = 0
                self._log_entry(
                    MonopolyAction.FREE_PARKING,
                    f"{player.name} collected ${pot} from Free Parking!",
                    actor=player.name,
                )
            else:
                self._log_entry(
                    MonopolyAction.FREE_PARKING,
                    f"{player.name} rested at Free Parking",
                    actor=player.name,
                )
        else:
            self._send_to_jail(player)
            self._log_entry(MonopolyAction.GO_TO_JAIL, f"{player.name} was sent directly to jail!", actor=player.name)

    def _send_to_jail(self, player: Player) -> None:
        player.position = JAIL_POSITION
        player.in_jail = True
        player.jail_turns = 0

    @staticmethod
    def _release_from_jail(player: Player) -> None:
        player.in_jail = False
        player.jail_turns = 0

    def _pay_from_bank(self, player: Player, amount: int) -> None:
        player.money += amount
        self._state.bank_money -= amount

    def _check_game_end(self) -> None:
        state = self._state
        if not state.players:
            self._end_game(None, "No players remain; the game is over")
            return

        solvent = [p for p in state.players if p.money > 0]
        if len(solvent) == 1:
            winner = solvent[0]
            self._end_game(winner.id, f"{winner.name} wins the game!")
        elif state.round_number > self._settings.max_rounds:
            richest = max(state.players, key=calculate_net_worth)
            self._end_game(
                richest.id,
                f"Game ended after {self._settings.max_rounds} rounds! "
                f"{richest.name} wins with the highest net worth (${calculate_net_worth(richest)})",
            )

    # ------------------------------------------------------------------
    # read accessors
    # ------------------------------------------------------------------

    def get_property(self, position: int) -> Property | None:
        if 0 <= position < len(self._state.properties):
            return self._state.properties[position]
        return None

    def get_player_properties(self, player_id: str) -> list[Property]:
        return [p for p in self._state.properties if p.owner is not None and p.owner.id == player_id]

    def get_player_net_worth(self, player_id: str) -> int:
        player = self._state.find_player(player_id)
        return calculate_net_worth(player) if player is not None else 0
