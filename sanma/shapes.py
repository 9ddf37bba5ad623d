from __future__ import annotations

from collections.abc import Sequence

from sanma.decomposition import has_standard_shape
from sanma.tiles import TERMINAL_HONOR_INDICES

_TERMINAL_HONOR_SET = frozenset(TERMINAL_HONOR_INDICES)


def is_seven_pairs(counts: Sequence[int]) -> bool:
    return sum(counts) == 14 and sum(1 for c in counts if c == 2) == 7 and all(c in {0, 2} for c in counts)


def is_thirteen_orphans(counts: Sequence[int]) -> bool:
    if sum(counts) != 14:
        return False
    if any(c > 0 and i not in _TERMINAL_HONOR_SET for i, c in enumerate(counts)):
        return False
    if any(counts[i] == 0 for i in TERMINAL_HONOR_INDICES):
        return False
    return sorted(counts[i] for i in TERMINAL_HONOR_INDICES)[-2:] == [1, 2]


def is_complete(counts: Sequence[int], needed_melds: int = 4) -> bool:
    """Standard shape, seven pairs or thirteen orphans. Special shapes need a fully concealed hand."""
    if has_standard_shape(counts, needed_melds):
        return True
    if needed_melds != 4:
        return False
    return is_seven_pairs(counts) or is_thirteen_orphans(counts)
