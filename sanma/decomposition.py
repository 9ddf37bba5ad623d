"""Partition tile count vectors into a pair plus melds."""
from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Literal

from sanma.config import settings
from sanma.tiles import HONOR_START, KIND_COUNT

logger = logging.getLogger(__name__)

BlockKind = Literal["triplet", "sequence"]
TRIPLET: BlockKind = "triplet"
SEQUENCE: BlockKind = "sequence"


@dataclass(frozen=True, order=True)
class Block:
    """A meld shape: its kind and the index of its lowest tile."""

    index: int
    kind: BlockKind

    @property
    def indices(self) -> tuple[int, int, int]:
        if self.kind == SEQUENCE:
            return (self.index, self.index + 1, self.index + 2)
        return (self.index, self.index, self.index)


@dataclass(frozen=True)
class HandPattern:
    pair: int
    melds: tuple[Block, ...]


def _first_nonzero(work: Sequence[int]) -> int:
    return next((i for i, c in enumerate(work) if c > 0), -1)


def _can_start_sequence(work: Sequence[int], index: int) -> bool:
    return index < HONOR_START and index % 9 <= 6 and work[index + 1] > 0 and work[index + 2] > 0


def _take(work: list[int], block: Block, amount: int) -> None:
    for i in block.indices:
        work[i] -= amount


def find_meld_pattern(counts: Sequence[int]) -> tuple[Block, ...] | None:
    """Return the first way to consume every tile as melds, or None."""
    work = list(counts)
    found: list[Block] = []

    def dfs() -> bool:
        first = _first_nonzero(work)
        if first == -1:
            return True
        candidates = []
        if work[first] >= 3:
            candidates.append(Block(first, TRIPLET))
        if _can_start_sequence(work, first):
            candidates.append(Block(first, SEQUENCE))
        for block in candidates:
            _take(work, block, 1)
            found.append(block)
            if dfs():
                return True
            found.pop()
            _take(work, block, -1)
        return False

    if not dfs():
        return None
    return tuple(found)


def _collect(counts: Sequence[int], needed_melds: int, limit: int) -> tuple[list[tuple[Block, ...]], bool]:
    """Distinct decompositions, plus whether a further one was found past ``limit`` and dropped."""
    work = list(counts)
    patterns: list[tuple[Block, ...]] = []
    seen: set[tuple[Block, ...]] = set()
    truncated = False

    def dfs(remain: int, current: list[Block]) -> None:
        nonlocal truncated
        if truncated:
            return
        if remain == 0:
            if all(c == 0 for c in work):
                signature = tuple(sorted(current))
                if signature in seen:
                    return
                if len(patterns) >= limit:
                    truncated = True
                    return
                seen.add(signature)
                patterns.append(signature)
            return

        first = _first_nonzero(work)
        if first == -1:
            return

        if work[first] >= 3:
            block = Block(first, TRIPLET)
            _take(work, block, 1)
            current.append(block)
            dfs(remain - 1, current)
            current.pop()
            _take(work, block, -1)

        if _can_start_sequence(work, first):
            block = Block(first, SEQUENCE)
            _take(work, block, 1)
            current.append(block)
            dfs(remain - 1, current)
            current.pop()
            _take(work, block, -1)

    dfs(needed_melds, [])
    return patterns, truncated


def collect_meld_patterns(
    counts: Sequence[int], needed_melds: int, limit: int | None = None
) -> list[tuple[Block, ...]]:
    """Return every distinct decomposition of ``counts`` into ``needed_melds`` melds.

    Both the triplet and the sequence branch are explored at each choice point.
    At most ``limit`` patterns are returned.
    """
    if limit is None:
        limit = settings.decomposition_limit
    patterns, truncated = _collect(counts, needed_melds, limit)
    if truncated:
        logger.warning("decomposition search dropped patterns past limit=%d", limit)
    return patterns


def find_hand_patterns(counts: Sequence[int], needed_melds: int, limit: int | None = None) -> list[HandPattern]:
    """Try every kind with two or more copies as the pair and decompose the rest.

    ``limit`` caps the total across all pair choices.
    """
    if sum(counts) != needed_melds * 3 + 2:
        return []
    if limit is None:
        limit = settings.decomposition_limit
    patterns: list[HandPattern] = []
    for i in range(KIND_COUNT):
        if counts[i] < 2:
            continue
        work = list(counts)
        work[i] -= 2
        found, truncated = _collect(work, needed_melds, limit - len(patterns))
        patterns.extend(HandPattern(pair=i, melds=melds) for melds in found)
        if truncated:
            logger.warning("decomposition search dropped patterns past limit=%d", limit)
            break
    return patterns


def has_standard_shape(counts: Sequence[int], needed_melds: int) -> bool:
    if sum(counts) != needed_melds * 3 + 2:
        return False
    for i in range(KIND_COUNT):
        if counts[i] < 2:
            continue
        work = list(counts)
        work[i] -= 2
        melds = find_meld_pattern(work)
        if melds is not None and len(melds) == needed_melds:
            return True
    return False
