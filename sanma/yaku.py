"""Hand value evaluation.

Yakuman are checked first and short-circuit everything else. Otherwise one
candidate is scored for seven pairs and one per distinct standard
decomposition, and the candidate with the highest base points wins (ties go
to the higher han). Dora are added to every candidate last.
"""
from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Sequence
from dataclasses import dataclass

from sanma.decomposition import SEQUENCE, TRIPLET, BlockKind, HandPattern, find_hand_patterns
from sanma.fu import calculate_fu, is_value_pair, ron_completed_triplet, seven_pairs_fu
from sanma.schemas import FuBreakdownItem, HandResult, Meld, MeldType, RuleContext, RuleSet, YakuItem
from sanma.settlement import YAKUMAN_BASE, base_points
from sanma.shapes import is_seven_pairs, is_thirteen_orphans
from sanma.tiles import (
    DRAGON_INDICES,
    GREEN_INDICES,
    TILE_CODES,
    WIND_INDICES,
    is_honor,
    is_simple,
    is_terminal_or_honor,
    next_dora_index,
    tile_name,
    tile_to_index,
    tiles_to_counts,
)
from sanma.validators import validate_winning_input

logger = logging.getLogger(__name__)

NO_YAKU = "役なし"


@dataclass(frozen=True)
class _Group:
    index: int
    kind: BlockKind
    is_open: bool = False
    is_quad: bool = False


@dataclass
class _Candidate:
    yaku: list[YakuItem]
    han: int
    fu: int
    fu_breakdown: list[FuBreakdownItem]
    base: int


def _exposed_groups(melds: Sequence[Meld]) -> list[_Group]:
    groups = []
    for meld in melds:
        indices = sorted(tile_to_index(t) for t in meld.tiles)
        kind = SEQUENCE if meld.type == MeldType.chi else TRIPLET
        groups.append(_Group(indices[0], kind, meld.is_open, meld.is_quad))
    return groups


def _pattern_groups(pattern: HandPattern, context: RuleContext) -> list[_Group]:
    return [_Group(b.index, b.kind) for b in pattern.melds] + _exposed_groups(context.melds)


def _concealed_triplets(pattern: HandPattern, context: RuleContext) -> int:
    count = sum(1 for b in pattern.melds if b.kind == TRIPLET)
    count += sum(1 for m in context.melds if m.type == MeldType.ankan)
    if ron_completed_triplet(pattern, context) is not None:
        count -= 1
    return count


def _triplet_indices(groups: Sequence[_Group]) -> set[int]:
    return {g.index for g in groups if g.kind == TRIPLET}


def _sequence_starts(groups: Sequence[_Group]) -> set[int]:
    return {g.index for g in groups if g.kind == SEQUENCE}


def _add(yaku: list[YakuItem], name: str, han: int) -> None:
    if all(item.name != name for item in yaku):
        yaku.append(YakuItem(name=name, han=han))


# yakuman


def _is_chuuren(counts: Sequence[int], context: RuleContext) -> bool:
    if context.melds:
        return False
    for base in (0, 9, 18):
        suit = counts[base : base + 9]
        if sum(suit) != 14:
            continue
        required = (3, 1, 1, 1, 1, 1, 1, 1, 3)
        return all(c >= r for c, r in zip(suit, required))
    return False


def _tile_yakuman(counts: Sequence[int], all_indices: Sequence[int], context: RuleContext) -> list[str]:
    hits: list[str] = []
    if context.tenhou:
        hits.append("天和")
    if context.chiihou:
        hits.append("地和")
    if not context.melds and is_thirteen_orphans(counts):
        hits.append("国士無双")
    if all(is_honor(i) for i in all_indices):
        hits.append("字一色")
    if all(i in GREEN_INDICES for i in all_indices):
        hits.append("緑一色")
    if all(not is_honor(i) and not is_simple(i) for i in all_indices):
        hits.append("清老頭")
    if _is_chuuren(counts, context):
        hits.append("九蓮宝燈")
    return hits


def _pattern_yakuman(pattern: HandPattern, context: RuleContext) -> list[str]:
    groups = _pattern_groups(pattern, context)
    triplets = _triplet_indices(groups)
    hits: list[str] = []
    if _concealed_triplets(pattern, context) == 4:
        hits.append("四暗刻")
    if all(d in triplets for d in DRAGON_INDICES):
        hits.append("大三元")
    wind_triplets = sum(1 for w in WIND_INDICES if w in triplets)
    if wind_triplets == 4:
        hits.append("大四喜")
    elif wind_triplets == 3 and pattern.pair in WIND_INDICES:
        hits.append("小四喜")
    if context.kan_count == 4:
        hits.append("四槓子")
    return hits


# ordinary yaku independent of the decomposition


def _context_yaku(context: RuleContext) -> list[YakuItem]:
    yaku: list[YakuItem] = []
    if context.double_riichi:
        _add(yaku, "ダブル立直", 2)
    elif context.riichi:
        _add(yaku, "立直", 1)
    if context.ippatsu:
        _add(yaku, "一発", 1)
    if context.is_tsumo and context.concealed:
        _add(yaku, "門前清自摸和", 1)
    if context.chankan:
        _add(yaku, "槍槓", 1)
    if context.rinshan:
        _add(yaku, "嶺上開花", 1)
    if context.haitei:
        _add(yaku, "海底摸月", 1)
    if context.houtei:
        _add(yaku, "河底撈魚", 1)
    return yaku


def _tile_yaku(all_indices: Sequence[int], context: RuleContext, rules: RuleSet) -> list[YakuItem]:
    yaku: list[YakuItem] = []
    concealed = context.concealed
    if all(is_simple(i) for i in all_indices) and (concealed or rules.kuitan_ari):
        _add(yaku, "断么九", 1)

    suits = {i // 9 for i in all_indices if not is_honor(i)}
    has_honor = any(is_honor(i) for i in all_indices)
    if len(suits) == 1:
        if has_honor:
            _add(yaku, "混一色", 3 if concealed else 2)
        else:
            _add(yaku, "清一色", 6 if concealed else 5)

    if all(is_terminal_or_honor(i) for i in all_indices):
        _add(yaku, "混老頭", 2)
    return yaku


# ordinary yaku that depend on the decomposition


def _is_ryanmen_wait(start: int, win: int) -> bool:
    if win not in (start, start + 1, start + 2):
        return False
    if win == start + 1:
        return False  # kanchan
    if win == start and start % 9 == 6:
        return False  # penchan 7 wait (8-9)
    if win == start + 2 and start % 9 == 0:
        return False  # penchan 3 wait (1-2)
    return True


def _is_pinfu(pattern: HandPattern, context: RuleContext) -> bool:
    if context.melds:
        return False
    if any(b.kind != SEQUENCE for b in pattern.melds):
        return False
    if is_value_pair(pattern.pair, context):
        return False
    if context.win_tile is None:
        return True
    win = tile_to_index(context.win_tile)
    return any(_is_ryanmen_wait(b.index, win) for b in pattern.melds)


def _peikou_count(pattern: HandPattern, context: RuleContext) -> int:
    if not context.concealed:
        return 0
    seq_counts = Counter(b.index for b in pattern.melds if b.kind == SEQUENCE)
    return sum(v // 2 for v in seq_counts.values())


def _has_ittsuu(groups: Sequence[_Group]) -> bool:
    starts = _sequence_starts(groups)
    return any({base, base + 3, base + 6} <= starts for base in (0, 9, 18))


def _has_sanshoku_doujun(groups: Sequence[_Group]) -> bool:
    starts = _sequence_starts(groups)
    return any({r, r + 9, r + 18} <= starts for r in range(7))


def _has_sanshoku_doukou(groups: Sequence[_Group]) -> bool:
    triplets = _triplet_indices(groups)
    return any({r, r + 9, r + 18} <= triplets for r in range(9))


def _group_has_terminal_or_honor(group: _Group) -> bool:
    if group.kind == SEQUENCE:
        return group.index % 9 in (0, 6)
    return is_terminal_or_honor(group.index)


def _outside_hand(pattern: HandPattern, groups: Sequence[_Group]) -> str | None:
    """Return junchan when every group and the pair hold a terminal, chanta when honors appear."""
    if not is_terminal_or_honor(pattern.pair):
        return None
    if not all(_group_has_terminal_or_honor(g) for g in groups):
        return None
    if not any(g.kind == SEQUENCE for g in groups):
        return None
    has_honor = is_honor(pattern.pair) or any(is_honor(g.index) for g in groups)
    return "chanta" if has_honor else "junchan"


def _yakuhai(groups: Sequence[_Group], context: RuleContext) -> list[YakuItem]:
    yaku: list[YakuItem] = []
    triplets = _triplet_indices(groups)
    round_wind = context.round_wind_tile
    seat_wind = context.seat_wind_tile
    if tile_to_index(round_wind) in triplets:
        _add(yaku, f"場風 {tile_name(round_wind)}", 1)
    if tile_to_index(seat_wind) in triplets:
        _add(yaku, f"自風 {tile_name(seat_wind)}", 1)
    for index in DRAGON_INDICES:
        if index in triplets:
            _add(yaku, f"役牌 {tile_name(TILE_CODES[index])}", 1)
    return yaku


def _pattern_yaku(pattern: HandPattern, context: RuleContext) -> tuple[list[YakuItem], bool]:
    groups = _pattern_groups(pattern, context)
    concealed = context.concealed
    yaku: list[YakuItem] = []

    pinfu = _is_pinfu(pattern, context)
    if pinfu:
        _add(yaku, "平和", 1)
    peikou = _peikou_count(pattern, context)
    if peikou >= 2:
        _add(yaku, "二盃口", 3)
    elif peikou == 1:
        _add(yaku, "一盃口", 1)

    yaku.extend(_yakuhai(groups, context))

    if all(g.kind == TRIPLET for g in groups):
        _add(yaku, "対々和", 2)
    if _has_ittsuu(groups):
        _add(yaku, "一気通貫", 2 if concealed else 1)
    if _has_sanshoku_doujun(groups):
        _add(yaku, "三色同順", 2 if concealed else 1)
    if _has_sanshoku_doukou(groups):
        _add(yaku, "三色同刻", 2)
    if _concealed_triplets(pattern, context) >= 3:
        _add(yaku, "三暗刻", 2)

    outside = _outside_hand(pattern, groups)
    if outside == "junchan":
        _add(yaku, "純全帯么九", 3 if concealed else 2)
    elif outside == "chanta":
        _add(yaku, "混全帯么九", 2 if concealed else 1)

    dragon_triplets = sum(1 for d in DRAGON_INDICES if d in _triplet_indices(groups))
    if dragon_triplets == 2 and pattern.pair in DRAGON_INDICES:
        _add(yaku, "小三元", 2)
    if context.kan_count == 3:
        _add(yaku, "三槓子", 2)
    return yaku, pinfu


def count_dora(all_indices: Sequence[int], indicators: Sequence[str]) -> int:
    held = Counter(all_indices)
    return sum(held[next_dora_index(tile_to_index(ind))] for ind in indicators)


def _finish(
    yaku: list[YakuItem], dora: int, ura_dora: int, fu: int, fu_breakdown: list[FuBreakdownItem], rules: RuleSet
) -> _Candidate:
    yaku = list(yaku)
    if dora > 0:
        _add(yaku, "ドラ", dora)
    if ura_dora > 0:
        _add(yaku, "裏ドラ", ura_dora)
    han = sum(item.han for item in yaku)
    if han <= 0:
        _add(yaku, NO_YAKU, 1)
        han = 1
    return _Candidate(yaku=yaku, han=han, fu=fu, fu_breakdown=fu_breakdown, base=base_points(han, fu, rules))


def evaluate_hand(tiles: Sequence[str], context: RuleContext, rules: RuleSet | None = None) -> HandResult | None:
    """Score a drawn hand (14-3k concealed tiles plus ``context.melds``).

    Returns None when the tiles do not form a winning hand.
    """
    rules = rules or RuleSet()
    validate_winning_input(tiles, context)

    counts = tiles_to_counts(tiles)
    needed = 4 - len(context.melds)
    all_indices = [tile_to_index(t) for t in tiles]
    for meld in context.melds:
        all_indices.extend(tile_to_index(t) for t in meld.tiles)

    patterns = find_hand_patterns(counts, needed)
    seven_pairs = not context.melds and is_seven_pairs(counts)
    orphans = not context.melds and is_thirteen_orphans(counts)
    if not (patterns or seven_pairs or orphans):
        return None

    hits = _tile_yakuman(counts, all_indices, context)
    best_pattern_hits: list[str] = []
    for pattern in patterns:
        pattern_hits = _pattern_yakuman(pattern, context)
        if len(pattern_hits) > len(best_pattern_hits):
            best_pattern_hits = pattern_hits
    hits.extend(h for h in best_pattern_hits if h not in hits)
    if hits:
        multiplier = len(hits)
        logger.debug("yakuman %s", hits)
        return HandResult(
            han=13 * multiplier,
            fu=0,
            yakuman=hits,
            base_points=YAKUMAN_BASE * multiplier,
        )

    common = _context_yaku(context) + _tile_yaku(all_indices, context, rules)
    dora = count_dora(all_indices, context.dora_indicators)
    ura_dora = count_dora(all_indices, context.ura_dora_indicators) if context.riichi or context.double_riichi else 0

    candidates: list[_Candidate] = []
    if seven_pairs:
        fu, breakdown = seven_pairs_fu()
        candidates.append(_finish(common + [YakuItem(name="七対子", han=2)], dora, ura_dora, fu, breakdown, rules))
    for pattern in patterns:
        pattern_yaku, pinfu = _pattern_yaku(pattern, context)
        fu, breakdown = calculate_fu(pattern, context, pinfu=pinfu)
        candidates.append(_finish(common + pattern_yaku, dora, ura_dora, fu, breakdown, rules))

    best = candidates[0]
    for candidate in candidates[1:]:
        if (candidate.base, candidate.han) > (best.base, best.han):
            best = candidate
    logger.debug("selected %d han %d fu out of %d candidates", best.han, best.fu, len(candidates))
    return HandResult(
        han=best.han,
        fu=best.fu,
        fu_breakdown=best.fu_breakdown,
        yaku=best.yaku,
        dora=dora + ura_dora,
        base_points=best.base,
    )
