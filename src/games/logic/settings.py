"""Centralized rule settings for every game engine."""

from __future__ import annotations

from datetime import date

from pydantic import BaseModel, ConfigDict

from games.logic.exceptions import UnsupportedSettingsError

SPADES_NUM_PLAYERS = 4
CHESS_NUM_PLAYERS = 4


class SeatConfig(BaseModel):
    """Configuration for a single seat in a game."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    color: str = ""


DEFAULT_MONOPOLY_SEATS: tuple[SeatConfig, ...] = (
    SeatConfig(id="corpo-baron", name="Corpo Baron", color="#FF6B6B"),
    SeatConfig(id="crypto-whale", name="Crypto Whale", color="#4ECDC4"),
    SeatConfig(id="matrix-hacker", name="Matrix Hacker", color="#45B7D1"),
    SeatConfig(id="neo-runner", name="Neo Runner", color="#F9CA24"),
)

DEFAULT_SPADES_SEATS: tuple[SeatConfig, ...] = (
    SeatConfig(id="blade-master", name="Blade Master", color="#E74C3C"),
    SeatConfig(id="shadow-dealer", name="Shadow Dealer", color="#8E44AD"),
    SeatConfig(id="trick-runner", name="Trick Runner", color="#3498DB"),
    SeatConfig(id="void-nil", name="Void Nil", color="#2C3E50"),
)

DEFAULT_CHESS_SEATS: tuple[SeatConfig, ...] = (
    SeatConfig(id="red-player", name="Red Commander", color="#FF0000"),
    SeatConfig(id="blue-player", name="Blue Admiral", color="#0000FF"),
    SeatConfig(id="green-player", name="Green General", color="#00FF00"),
    SeatConfig(id="yellow-player", name="Yellow Captain", color="#FFFF00"),
)


class MonopolySettings(BaseModel):
    """Economy rules for the Monopoly simulation."""

    model_config = ConfigDict(frozen=True)

    starting_money: int = 1500
    bank_money: int = 12500
    pass_go_salary: int = 200
    go_landing_bonus: int = 200
    jail_fine: int = 50
    max_jail_turns: int = 3
    max_rounds: int = 500

    # buy heuristic: keep a cash reserve and cap spend per purchase
    buy_cash_reserve: int = 500
    buy_max_spend_ratio: float = 0.4

    # card outcomes
    card_go_payout: int = 200
    card_poor_tax: int = 15
    card_collect: int = 150


class SpadesSettings(BaseModel):
    """Bidding and scoring rules for Spades."""

    model_config = ConfigDict(frozen=True)

    winning_score: int = 500
    nil_bid_chance: float = 0.05
    spade_bid_weight: float = 0.7
    high_card_bid_weight: float = 0.3
    high_card_min_rank: int = 11
    max_hands: int = 200


class ScoringRules(BaseModel):
    """Fantasy point multipliers and bonuses."""

    model_config = ConfigDict(frozen=True)

    points_multiplier: float = 1.0
    rebounds_multiplier: float = 1.2
    assists_multiplier: float = 1.5
    steals_multiplier: float = 3.0
    blocks_multiplier: float = 3.0
    turnovers_multiplier: float = -1.0
    threes_made_bonus: float = 0.5
    double_double_bonus: float = 5.0
    triple_double_bonus: float = 10.0


class DBASettings(BaseModel):
    """League structure for the DBA fantasy basketball season."""

    model_config = ConfigDict(frozen=True)

    season: int = 2025
    season_start: date = date(2025, 1, 7)
    season_weeks: int = 18
    team_names: tuple[str, ...] = (
        "User Team",
        "Neon Niques",
        "Digital Dunkers",
        "Matrix MVPs",
        "Pixel Pacers",
        "Circuit Cavaliers",
        "Binary Bucks",
        "Quantum Lakers",
    )
    generated_pool_size: int = 200
    bench_size: int = 10
    team_budget: int = 100_000_000
    base_team_score: float = 90.0
    min_team_score: int = 70
    score_variance: float = 10.0
    performance_range: tuple[float, float] = (0.7, 1.3)
    scoring: ScoringRules = ScoringRules()

    # betting lines
    spread_points: int = 5
    over_under_line: int = 180

    # enhancement prices, paid from the user team budget
    stat_boost_cost: int = 500_000
    stat_boost_ratio: float = 0.15
    rarity_upgrade_cost: int = 1_000_000


class ChessSettings(BaseModel):
    """King of the Hill flavor simulation."""

    model_config = ConfigDict(frozen=True)

    hill_capture_chance: float = 0.05
    board_size: int = 8
    hill: tuple[int, int] = (3, 3)


def validate_spades_settings(settings: SpadesSettings) -> None:
    """Raise UnsupportedSettingsError for rule sets the engine cannot run."""
    errors: list[str] = []
    if settings.winning_score <= 0:
        errors.append(f"winning_score={settings.winning_score} must be positive")
    if not 0 <= settings.nil_bid_chance <= 1:
        errors.append(f"nil_bid_chance={settings.nil_bid_chance} must be a probability")
    if settings.max_hands <= 0:
        errors.append(f"max_hands={settings.max_hands} must be positive")
    if errors:
        raise UnsupportedSettingsError("; ".join(errors))


def validate_monopoly_settings(settings: MonopolySettings) -> None:
    errors: list[str] = []
    if settings.max_rounds <= 0:
        errors.append(f"max_rounds={settings.max_rounds} must be positive")
    if settings.max_jail_turns <= 0:
        errors.append(f"max_jail_turns={settings.max_jail_turns} must be positive")
    if errors:
        raise UnsupportedSettingsError("; ".join(errors))


def validate_dba_settings(settings: DBASettings) -> None:
    errors: list[str] = []
    num_teams = len(settings.team_names)
    if num_teams < 2 or num_teams % 2:
        errors.append(f"{num_teams} teams is not supported (need an even number of at least 2)")
    if settings.season_weeks <= 0:
        errors.append(f"season_weeks={settings.season_weeks} must be positive")
    if settings.bench_size < 0:
        errors.append(f"bench_size={settings.bench_size} must not be negative")
    if settings.generated_pool_size < num_teams * settings.bench_size:
        errors.append(
            f"generated_pool_size={settings.generated_pool_size} is too small to draft "
            f"{num_teams} teams with {settings.bench_size} bench players"
        )
    low, high = settings.performance_range
    if low <= 0 or high < low:
        errors.append(f"performance_range={settings.performance_range} is not a valid range")
    if errors:
        raise UnsupportedSettingsError("; ".join(errors))


def validate_chess_settings(settings: ChessSettings) -> None:
    errors: list[str] = []
    row, col = settings.hill
    if not (0 <= row < settings.board_size and 0 <= col < settings.board_size):
        errors.append(f"hill={settings.hill} is off the {settings.board_size}x{settings.board_size} board")
    if errors:
        raise UnsupportedSettingsError("; ".join(errors))
