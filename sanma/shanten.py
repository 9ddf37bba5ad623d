"""Shanten estimate: -1 complete, 0 tenpai, 1 one step away, 2 anything further.

Values above 2 are not distinguished for 13-tile shapes. A 14-tile shape is the
best of its 13-tile discards, starting from a ceiling of 8.
"""
from __future__ import annotations

from collections.abc import Sequence
from functools import lru_cache

from sanma.config import settings
from sanma.shapes import is_complete
from sanma.tiles import KIND_COUNT, TERMINAL_HONOR_INDICES, TILE_CODES, is_honor, tiles_to_counts
from sanma.validators import validate_hand

SHANTEN_CEILING = 8

Counts = tuple[int, ...]


def _with(counts: Counts, index: int) -> Counts:
    return counts[:index] + (counts[index] + 1,) + counts[index + 1 :]


def _without(counts: Counts, index: int) -> Counts:
    return counts[:index] + (counts[index] - 1,) + counts[index + 1 :]


def _needed_melds(total: int) -> int:
    return (total - 2) // 3 if total % 3 == 2 else (total - 1) // 3


def _draw_candidates(counts: Counts) -> list[int]:
    """Kinds that could take part in a completion: held, a same-suit neighbour within two ranks, or a terminal/honor."""
    candidates = set(TERMINAL_HONOR_INDICES)
    for i, c in enumerate(counts):
        if c == 0:
            continue
        candidates.add(i)
        if is_honor(i):
            continue
        base = i - i % 9
        for j in range(max(base, i - 2), min(base + 8, i + 2) + 1):
            candidates.add(j)
    return sorted(candidates)


@lru_cache(maxsize=settings.shanten_cache_size)
def _complete(counts: Counts) -> bool:
    return is_complete(counts, _needed_melds(sum(counts)))


@lru_cache(maxsize=settings.shanten_cache_size)
def _waits(counts: Counts) -> tuple[int, ...]:
    return tuple(draw for draw in _draw_candidates(counts) if _complete(_with(counts, draw)))


@lru_cache(maxsize=settings.shanten_cache_size)
def _shanten(counts: Counts) -> int:
    total = sum(counts)
    if total % 3 == 2:
        if _complete(counts):
            return -1
        best = SHANTEN_CEILING
        for i, c in enumerate(counts):
            if c == 0:
                continue
            best = min(best, _shanten(_without(counts, i)))
            if best == 0:
                break
        return best

    if _waits(counts):
        return 0
    for draw in range(KIND_COUNT):
        drawn = _with(counts, draw)
        for discard, c in enumerate(drawn):
            if c and _waits(_without(drawn, discard)):
                return 1
    return 2


def _hand_counts(tiles: Sequence[str], drawn: bool | None = None) -> Counts:
    validate_hand(tiles, drawn=drawn)
    return tuple(tiles_to_counts(tiles))


def calculate_shanten(tiles: Sequence[str]) -> int:
    return _shanten(_hand_counts(tiles))


def is_tenpai(tiles: Sequence[str]) -> bool:
    return bool(_waits(_hand_counts(tiles, drawn=False)))


def waiting_tiles(tiles: Sequence[str]) -> list[str]:
    return [TILE_CODES[i] for i in _waits(_hand_counts(tiles, drawn=False))]


def can_declare_riichi(tiles: Sequence[str], already_declared: bool = False) -> bool:
    """A drawn hand may declare riichi when some discard leaves it tenpai."""
    counts = _hand_counts(tiles, drawn=True)
    if already_declared:
        return False
    return any(c and _shanten(_without(counts, i)) == 0 for i, c in enumerate(counts))
