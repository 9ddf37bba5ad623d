"""Call eligibility against a discard: pon, kan, chi, ron and concealed kan."""
from __future__ import annotations

from collections.abc import Sequence

from sanma.shapes import is_complete
from sanma.tiles import TILE_CODES, is_honor, sort_tiles, tile_to_index, tiles_to_counts
from sanma.validators import validate_hand, validate_tile


def _checked(hand: Sequence[str], discard: str) -> None:
    validate_hand(hand, drawn=False)
    validate_tile(discard)


def can_pon(hand: Sequence[str], discard: str) -> bool:
    _checked(hand, discard)
    return hand.count(discard) >= 2


def can_kan(hand: Sequence[str], discard: str) -> bool:
    _checked(hand, discard)
    return hand.count(discard) >= 3


def concealed_kan_options(hand: Sequence[str]) -> list[str]:
    validate_hand(hand)
    counts = tiles_to_counts(hand)
    return [TILE_CODES[i] for i, c in enumerate(counts) if c == 4]


def chi_options(hand: Sequence[str], discard: str) -> list[list[str]]:
    """Every two-tile completion of a run around ``discard`` that the hand holds.

    Honors never qualify. Each option is the full run, sorted.
    """
    _checked(hand, discard)
    index = tile_to_index(discard)
    if is_honor(index):
        return []

    suit, rank = discard[0], int(discard[1])
    held = set(hand)
    options: list[list[str]] = []
    for a, b in ((rank - 2, rank - 1), (rank - 1, rank + 1), (rank + 1, rank + 2)):
        if a < 1 or b > 9:
            continue
        first, second = f"{suit}{a}", f"{suit}{b}"
        if first in held and second in held:
            options.append(sort_tiles([first, discard, second]))
    return options


def can_ron(hand: Sequence[str], discard: str) -> bool:
    _checked(hand, discard)
    counts = tiles_to_counts([*hand, discard])
    return is_complete(counts, (len(hand) - 1) // 3)
