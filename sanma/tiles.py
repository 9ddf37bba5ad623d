from __future__ import annotations

import re
from collections.abc import Iterable, Sequence

TILE_RE = re.compile(r"^(?:[mps][1-9]|z[1-7])$")

SUITS = ("m", "p", "s")
TILE_CODES: tuple[str, ...] = tuple(f"{suit}{rank}" for suit in SUITS for rank in range(1, 10)) + tuple(
    f"z{rank}" for rank in range(1, 8)
)
TILE_INDEX: dict[str, int] = {code: i for i, code in enumerate(TILE_CODES)}
KIND_COUNT = len(TILE_CODES)

HONOR_START = 27
WIND_INDICES = (27, 28, 29, 30)
DRAGON_INDICES = (31, 32, 33)
TERMINAL_HONOR_INDICES = (0, 8, 9, 17, 18, 26, 27, 28, 29, 30, 31, 32, 33)
GREEN_INDICES = frozenset({19, 20, 21, 23, 25, 32})

TILE_NAMES = {
    "z1": "東",
    "z2": "南",
    "z3": "西",
    "z4": "北",
    "z5": "白",
    "z6": "發",
    "z7": "中",
}


class InvalidInputError(ValueError):
    """Raised when a caller passes something outside the tile/hand domain."""


def is_valid_tile(tile: object) -> bool:
    return isinstance(tile, str) and TILE_RE.fullmatch(tile) is not None


def tile_to_index(tile: str) -> int:
    if not is_valid_tile(tile):
        raise InvalidInputError(f"Invalid tile code: {tile!r}")
    return TILE_INDEX[tile]


def index_to_tile(index: int) -> str:
    if isinstance(index, bool) or not isinstance(index, int) or not 0 <= index < KIND_COUNT:
        raise InvalidInputError(f"Invalid tile index: {index!r}")
    return TILE_CODES[index]


def sort_tiles(tiles: Iterable[str]) -> list[str]:
    return sorted(tiles, key=tile_to_index)


def tiles_to_counts(tiles: Iterable[str]) -> list[int]:
    counts = [0] * KIND_COUNT
    for tile in tiles:
        counts[tile_to_index(tile)] += 1
    return counts


def counts_to_tiles(counts: Sequence[int]) -> list[str]:
    return [TILE_CODES[i] for i, c in enumerate(counts) for _ in range(c)]


def is_honor(index: int) -> bool:
    return index >= HONOR_START


def is_terminal_or_honor(index: int) -> bool:
    return is_honor(index) or index % 9 in (0, 8)


def is_simple(index: int) -> bool:
    return not is_terminal_or_honor(index)


def next_dora_index(indicator: int) -> int:
    if indicator < HONOR_START:
        base = indicator - indicator % 9
        return base + (indicator % 9 + 1) % 9
    if indicator in WIND_INDICES:
        return WIND_INDICES[(indicator - WIND_INDICES[0] + 1) % len(WIND_INDICES)]
    return DRAGON_INDICES[(indicator - DRAGON_INDICES[0] + 1) % len(DRAGON_INDICES)]


def tile_name(tile: str) -> str:
    return TILE_NAMES.get(tile, tile)
