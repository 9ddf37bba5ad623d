from __future__ import annotations

from collections.abc import Collection, Sequence

from sanma.shanten import SHANTEN_CEILING, calculate_shanten
from sanma.validators import validate_hand, validate_tiles


def choose_cpu_discard(hand: Sequence[str], threatening_discards: Collection[str] = ()) -> int:
    """Greedy discard: lowest shanten after the discard, preferring tiles already discarded against a riichi."""
    validate_hand(hand, drawn=True)
    validate_tiles(list(threatening_discards))
    safe = set(threatening_discards)

    best_index = 0
    best_shanten = SHANTEN_CEILING + 1
    best_safety = -1
    for i, tile in enumerate(hand):
        shanten = calculate_shanten([*hand[:i], *hand[i + 1 :]])
        safety = 1 if tile in safe else 0
        if shanten < best_shanten or (shanten == best_shanten and safety > best_safety):
            best_index, best_shanten, best_safety = i, shanten, safety
    return best_index
