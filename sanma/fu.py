from __future__ import annotations

from sanma.decomposition import TRIPLET, Block, HandPattern
from sanma.schemas import FuBreakdownItem, Meld, MeldType, RuleContext, WinType
from sanma.tiles import DRAGON_INDICES, is_terminal_or_honor, tile_to_index

SEVEN_PAIRS_FU = 25


def ron_completed_triplet(pattern: HandPattern, context: RuleContext) -> Block | None:
    """The concealed triplet a ron discard must have completed, if the wait allows no other reading."""
    if context.win_type != WinType.ron or context.win_tile is None:
        return None
    win = tile_to_index(context.win_tile)
    if pattern.pair == win:
        return None
    if any(block.kind != TRIPLET and win in block.indices for block in pattern.melds):
        return None
    target = Block(win, TRIPLET)
    return target if target in pattern.melds else None


def _meld_fu(index: int, is_quad: bool, is_open: bool) -> int:
    fu = 8 if is_terminal_or_honor(index) else 4
    if is_quad:
        fu *= 4
    return fu // 2 if is_open else fu


def _exposed_fu(meld: Meld) -> int:
    if meld.type == MeldType.chi:
        return 0
    return _meld_fu(tile_to_index(meld.tiles[0]), meld.is_quad, meld.is_open)


def is_value_pair(pair: int, context: RuleContext) -> bool:
    winds = {tile_to_index(context.seat_wind_tile), tile_to_index(context.round_wind_tile)}
    return pair in DRAGON_INDICES or pair in winds


def seven_pairs_fu() -> tuple[int, list[FuBreakdownItem]]:
    return SEVEN_PAIRS_FU, [FuBreakdownItem(name="七対子", fu=SEVEN_PAIRS_FU)]


def calculate_fu(pattern: HandPattern, context: RuleContext, pinfu: bool = False) -> tuple[int, list[FuBreakdownItem]]:
    details = [FuBreakdownItem(name="副底", fu=20)]
    if pinfu:
        if context.win_type == WinType.ron:
            details.append(FuBreakdownItem(name="門前ロン", fu=10))
            return 30, details
        return 20, details

    if context.is_tsumo:
        details.append(FuBreakdownItem(name="ツモ", fu=2))
    elif context.concealed:
        details.append(FuBreakdownItem(name="門前ロン", fu=10))

    opened = ron_completed_triplet(pattern, context)
    for block in pattern.melds:
        if block.kind != TRIPLET:
            continue
        details.append(FuBreakdownItem(name="面子", fu=_meld_fu(block.index, False, block == opened)))
    for meld in context.melds:
        mfu = _exposed_fu(meld)
        if mfu:
            details.append(FuBreakdownItem(name="面子", fu=mfu))

    if is_value_pair(pattern.pair, context):
        details.append(FuBreakdownItem(name="雀頭", fu=2))

    total = sum(item.fu for item in details)
    rounded = max(20, ((total + 9) // 10) * 10)
    if rounded > total:
        details.append(FuBreakdownItem(name="切り上げ", fu=rounded - total))
    return rounded, details
