"""
Four-seat partnership Spades simulation.

Each tick performs one action of the current phase: a single bid, a single
card, or the scoring of a finished hand. Scoring is its own tick so hosts
can display the completed hand before the next deal.
"""

from __future__ import annotations

from collections.abc import Sequence

import structlog

from games.logic.engine import BaseEngine, UpdateListener
from games.logic.enums import GameMode
from games.logic.exceptions import UnsupportedSettingsError
from games.logic.rng import fisher_yates_shuffle
from games.logic.settings import (
    DEFAULT_SPADES_SEATS,
    SPADES_NUM_PLAYERS,
    SeatConfig,
    SpadesSettings,
    validate_spades_settings,
)
from games.logic.state import Player
from games.spades.cards import DECK_SIZE, Card, create_deck, sort_hand
from games.spades.scoring import score_hand, trick_winner
from games.spades.state import (
    TEAM_ONE_SEATS,
    TEAM_TWO_SEATS,
    PlayedCard,
    SpadesAction,
    SpadesPhase,
    SpadesState,
)
from games.spades.strategy import choose_bid, choose_card

logger = structlog.get_logger()

CARDS_PER_HAND = DECK_SIZE // SPADES_NUM_PLAYERS


class SpadesEngine(BaseEngine[SpadesState]):
    game_mode = GameMode.SPADES
    display_name = "Spades"

    def __init__(
        self,
        on_update: UpdateListener | None = None,
        *,
        seed: str | None = None,
        seats: Sequence[SeatConfig] = DEFAULT_SPADES_SEATS,
        settings: SpadesSettings | None = None,
    ) -> None:
        self._settings = settings or SpadesSettings()
        validate_spades_settings(self._settings)
        if len(seats) != SPADES_NUM_PLAYERS:
            raise UnsupportedSettingsError(f"Spades needs exactly {SPADES_NUM_PLAYERS} seats, got {len(seats)}")
        self._seats = tuple(seats)
        super().__init__(on_update, seed=seed)

    @property
    def settings(self) -> SpadesSettings:
        return self._settings

    def initialize_state(self) -> SpadesState:
        players = [Player(id=seat.id, name=seat.name, color=seat.color) for seat in self._seats]
        dealer = SPADES_NUM_PLAYERS - 1
        first_seat = (dealer + 1) % SPADES_NUM_PLAYERS
        return SpadesState(
            players=players,
            current_player_index=first_seat,
            lead_seat=first_seat,
            dealer=dealer,
            deck=create_deck(),
            hands=[[] for _ in range(SPADES_NUM_PLAYERS)],
            bids=[None] * SPADES_NUM_PLAYERS,
            tricks_won=[0] * SPADES_NUM_PLAYERS,
        )

    def _on_start(self) -> None:
        self._deal()

    def _advance(self) -> None:
        match self._state.phase:
            case SpadesPhase.BIDDING:
                self._process_bid()
            case SpadesPhase.PLAYING:
                self._process_card()
            case SpadesPhase.SCORING:
                self._score_hand()

    # ------------------------------------------------------------------
    # dealing
    # ------------------------------------------------------------------

    def _deal(self) -> None:
        """Shuffle a fresh deck and deal 13 cards to each seat round-robin."""
        state = self._state
        state.deck = fisher_yates_shuffle(create_deck(), self._rng)
        hands: list[list[Card]] = [[] for _ in range(SPADES_NUM_PLAYERS)]
        for _ in range(CARDS_PER_HAND):
            for seat in range(SPADES_NUM_PLAYERS):
                hands[seat].append(state.deck.pop())
        state.hands = [sort_hand(hand) for hand in hands]
        state.hand_tricks = []
        state.current_trick = []
        state.bids = [None] * SPADES_NUM_PLAYERS
        state.tricks_won = [0] * SPADES_NUM_PLAYERS
        state.phase = SpadesPhase.BIDDING
        state.current_player_index = (state.dealer + 1) % SPADES_NUM_PLAYERS
        state.lead_seat = state.current_player_index

        dealer_name = state.players[state.dealer].name
        logger.debug("hand dealt", dealer=state.dealer, hand_number=state.hands_played + 1)
        self._log_entry(SpadesAction.DEAL, f"{dealer_name} deals {CARDS_PER_HAND} cards to each player")
        self._log_entry(SpadesAction.BID_PHASE, "Bidding phase begins - teams predict their tricks")

    # ------------------------------------------------------------------
    # bidding
    # ------------------------------------------------------------------

    def _process_bid(self) -> None:
        state = self._state
        seat = state.current_player_index
        player = state.players[seat]
        bid = choose_bid(state.hands[seat], self._settings, self._rng)
        state.bids[seat] = bid

        if bid == 0:
            self._log_entry(SpadesAction.NIL_BID, f"{player.name} bids NIL! Risky move!", actor=player.name)
        else:
            self._log_entry(SpadesAction.BID_MADE, f"{player.name} bids {bid} tricks", actor=player.name)

        if all(b is not None for b in state.bids):
            state.phase = SpadesPhase.PLAYING
            state.current_player_index = state.lead_seat
            self._log_entry(SpadesAction.PLAY_PHASE, "Card play begins! Let the tricks commence!")
        else:
            state.advance_player_index()

    # ------------------------------------------------------------------
    # card play
    # ------------------------------------------------------------------

    def _process_card(self) -> None:
        state = self._state
        seat = state.current_player_index
        player = state.players[seat]
        hand = state.hands[seat]

        card = choose_card(hand, state.lead_suit, state.spades_broken, self._rng)
        hand.remove(card)
        state.current_trick.append(PlayedCard(seat=seat, card=card))
        logger.debug("card played", seat=seat, card=card.id)

        if card.is_spade and not state.spades_broken:
            state.spades_broken = True
            self._log_entry(SpadesAction.SPADES_BROKEN, "Spades have been broken! All suits now playable")
        self._log_entry(SpadesAction.CARD_PLAYED, f"{player.name} plays {card}", actor=player.name)

        if len(state.current_trick) == SPADES_NUM_PLAYERS:
            self._complete_trick()
        else:
            state.advance_player_index()

    def _complete_trick(self) -> None:
        state = self._state
        winning = trick_winner(state.current_trick)
        state.tricks_won[winning.seat] += 1
        state.hand_tricks.append(state.current_trick)
        state.current_trick = []
        state.lead_seat = winning.seat
        state.current_player_index = winning.seat

        winner = state.players[winning.seat]
        self._log_entry(SpadesAction.TRICK_WON, f"{winner.name} wins the trick with {winning.card}", actor=winner.name)

        if all(not hand for hand in state.hands):
            state.phase = SpadesPhase.SCORING

    # ------------------------------------------------------------------
    # scoring
    # ------------------------------------------------------------------

    def _score_hand(self) -> None:
        state = self._state
        team1_delta = score_hand(state.team_bid(TEAM_ONE_SEATS), state.team_tricks(TEAM_ONE_SEATS))
        team2_delta = score_hand(state.team_bid(TEAM_TWO_SEATS), state.team_tricks(TEAM_TWO_SEATS))
        state.score.team1 += team1_delta
        state.score.team2 += team2_delta
        state.hands_played += 1

        logger.info(
            "hand scored",
            hand_number=state.hands_played,
            team1=state.score.team1,
            team2=state.score.team2,
        )
        self._log_entry(
            SpadesAction.HAND_END,
            f"Hand complete! Team 1: {team1_delta:+d}, Team 2: {team2_delta:+d} "
            f"(total {state.score.team1} - {state.score.team2})",
        )

        if self._check_game_end():
            return

        state.dealer = (state.dealer + 1) % SPADES_NUM_PLAYERS
        state.round_number += 1
        self._deal()

    def _check_game_end(self) -> bool:
        score = self._state.score
        reached_target = max(score.team1, score.team2) >= self._settings.winning_score
        hand_cap = self._state.hands_played >= self._settings.max_hands
        if not reached_target and not hand_cap:
            return False
        if score.team1 == score.team2 and not hand_cap:
            # tied at the target: play another hand
            return False

        winner_id = self._leading_team()
        final = f"Final score: {score.team1} - {score.team2}"
        if winner_id is None:
            self._end_game(None, f"The tournament ends in a draw after {self._state.hands_played} hands. {final}")
        else:
            self._end_game(winner_id, f"{self.team_label(winner_id)} wins the tournament! {final}")
        return True

    def _leading_team(self) -> str | None:
        score = self._state.score
        if score.team1 > score.team2:
            return "team1"
        if score.team2 > score.team1:
            return "team2"
        return None

    def team_label(self, team_id: str) -> str:
        seats = TEAM_ONE_SEATS if team_id == "team1" else TEAM_TWO_SEATS
        names = " & ".join(self._state.players[seat].name for seat in seats)
        return f"{'Team 1' if team_id == 'team1' else 'Team 2'} ({names})"
