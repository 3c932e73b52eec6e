"""
Random number generation for dice, shuffles and heuristic draws.

Every engine owns one `random.Random` created from a hex seed. The seed is
generated with the secrets module when the caller does not supply one and
is kept on the engine, so a reset replays exactly the same game.
"""

import random
import secrets
from collections.abc import Sequence
from typing import TypeVar

SEED_BYTES = 32
DIE_FACES = 6

T = TypeVar("T")


def validate_seed_hex(seed_hex: str) -> None:
    """Validate that a seed string is the correct hex format.

    Raises TypeError for non-string input, ValueError for invalid format.
    """
    if not isinstance(seed_hex, str):
        raise TypeError(f"Seed must be a string, got {type(seed_hex).__name__}")
    expected_length = SEED_BYTES * 2
    if len(seed_hex) != expected_length:
        raise ValueError(f"Seed must be exactly {expected_length} hex characters, got {len(seed_hex)}")
    try:
        bytes.fromhex(seed_hex)
    except ValueError:
        raise ValueError("Seed contains invalid hex characters") from None


def generate_seed() -> str:
    """Generate a cryptographic seed as a hex string (64 chars / 256 bits)."""
    return secrets.token_bytes(SEED_BYTES).hex()


def create_rng(seed_hex: str) -> random.Random:
    """Create the engine RNG for a validated seed."""
    validate_seed_hex(seed_hex)
    return random.Random(int(seed_hex, 16))  # noqa: S311


def roll_dice(rng: random.Random) -> tuple[int, int]:
    """Roll two independent six-sided dice."""
    return rng.randint(1, DIE_FACES), rng.randint(1, DIE_FACES)


def fisher_yates_shuffle(items: Sequence[T], rng: random.Random) -> list[T]:
    """
    Return a shuffled copy of items.

    For i in n-1..1: swap items[i] with items[j], j uniform in [0, i].
    """
    result = list(items)
    for i in range(len(result) - 1, 0, -1):
        j = rng.randint(0, i)
        result[i], result[j] = result[j], result[i]
    return result


def chance(rng: random.Random, probability: float) -> bool:
    """Return True with the given probability."""
    return rng.random() < probability


def weighted_choice(rng: random.Random, weights: Sequence[tuple[T, float]]) -> T:
    """
    Pick one option by cumulative weight.

    Weights are (option, weight) pairs walked in order; the last option
    absorbs any floating point remainder.
    """
    if not weights:
        raise ValueError("weights must not be empty")
    total = sum(weight for _, weight in weights)
    roll = rng.random() * total
    cumulative = 0.0
    for option, weight in weights:
        cumulative += weight
        if roll < cumulative:
            return option
    return weights[-1][0]
