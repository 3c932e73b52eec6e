"""Run one game engine headless and print its log.

By default the engine is stepped synchronously as fast as possible. With
--interval the engine runs on its own asyncio tick loop, as it would under
a display host.

Usage:
    python bin/simulate.py monopoly
    python bin/simulate.py spades --seed <64 hex chars> --max-ticks 500
    python bin/simulate.py dba --interval 200
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path

from games.logic.entry import GameEntry
from games.logic.enums import GameMode, GameStatus
from games.logic.views import summarize_state
from games.session.host import GameHost
from games.session.settings import HostSettings
from shared.logging import bind_game_context, setup_logging

DEFAULT_MAX_TICKS = 20_000
POLL_SECONDS = 0.05


def _print_entry(_state: object, entry: GameEntry) -> None:
    print(f"[{entry.turn:>4}] {entry.actor:<16} {entry.action_type:<16} {entry.detail}")


def run_sync(host: GameHost, game_id: str, max_ticks: int) -> int:
    """Step the engine until it ends or max_ticks is reached; returns ticks run."""
    engine = host.get_engine(game_id)
    if engine is None:
        return 0
    engine.start()
    ticks = 0
    while ticks < max_ticks and engine.advance():
        ticks += 1
    return ticks


async def run_loop(host: GameHost, game_id: str, interval_ms: int, max_ticks: int) -> None:
    engine = host.get_engine(game_id)
    if engine is None:
        return
    host.start_game(game_id, interval_ms)
    deadline = asyncio.get_running_loop().time() + max_ticks * interval_ms / 1000
    while engine.is_running and asyncio.get_running_loop().time() < deadline:
        await asyncio.sleep(POLL_SECONDS)
    host.cleanup_game(game_id)


def main() -> None:
    parser = argparse.ArgumentParser(description="Run one arcade game engine headless")
    parser.add_argument("game", choices=[mode.value for mode in GameMode], help="game to simulate")
    parser.add_argument("--seed", help="64-character hex seed for a reproducible game")
    parser.add_argument(
        "--interval",
        type=int,
        default=0,
        help="tick interval in ms; 0 steps synchronously (default: 0)",
    )
    parser.add_argument(
        "--max-ticks",
        type=int,
        default=DEFAULT_MAX_TICKS,
        help=f"stop after this many ticks (default: {DEFAULT_MAX_TICKS})",
    )
    parser.add_argument("--quiet", action="store_true", help="only print the final summary")
    parser.add_argument("--log-dir", type=Path, default=None, help="also write structured logs here")
    args = parser.parse_args()

    if args.max_ticks < 1:
        print("--max-ticks must be at least 1", file=sys.stderr)
        sys.exit(1)
    if args.interval < 0:
        print("--interval must not be negative", file=sys.stderr)
        sys.exit(1)

    settings = HostSettings()
    setup_logging(args.log_dir or settings.log_dir, file_prefix=args.game)

    host = GameHost(settings)
    game_id = host.create_game(args.game, seed=args.seed)
    bind_game_context(game_id, args.game)
    engine = host.get_engine(game_id)
    if engine is None:
        sys.exit(1)
    if not args.quiet:
        engine.subscribe(_print_entry)

    if args.interval:
        asyncio.run(run_loop(host, game_id, args.interval, args.max_ticks))
    else:
        run_sync(host, game_id, args.max_ticks)

    summary = summarize_state(engine.get_game_state())
    print()
    print(f"{summary.game_mode}: {summary.status} after round {summary.round_number}")
    if summary.status == GameStatus.ENDED:
        print(f"  winner: {summary.winner_id or 'none'}")
    print(f"  {summary.headline}")
    print(f"  seed: {engine.seed}")


if __name__ == "__main__":
    main()
