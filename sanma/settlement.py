"""Base points and per-seat point transfers for the three-seat table.

Every payment is rounded up to 100 on its own, so a non-dealer tsumo can
collect more than the pooled amount it was split from.
"""
from __future__ import annotations

import logging

from sanma.schemas import SEATS, HandResult, Payments, Points, RuleSet, ScoreResult, Seat, WinType
from sanma.tiles import InvalidInputError

logger = logging.getLogger(__name__)

YAKUMAN_BASE = 8000
HONBA_PER_PAYER = 100
KYOTAKU_STICK = 1000
DEALER = Seat.east


def round_up_100(value: int) -> int:
    return ((value + 99) // 100) * 100


def _limit_label(han: int, fu: int) -> str:
    if han >= 13:
        return "数え役満"
    if han >= 11:
        return "三倍満"
    if han >= 8:
        return "倍満"
    if han >= 6:
        return "跳満"
    if han == 5 or (han == 4 and fu >= 40) or (han == 3 and fu >= 70):
        return "満貫"
    return "通常"


_LIMIT_BASE = {"満貫": 2000, "跳満": 3000, "倍満": 4000, "三倍満": 6000, "数え役満": 8000}


def base_points(han: int, fu: int, rules: RuleSet | None = None) -> int:
    if rules is not None and rules.limit_hands:
        limit = _LIMIT_BASE.get(_limit_label(han, fu))
        if limit is not None:
            return limit
    return fu * (2 ** (han + 2))


def _yakuman_label(multiplier: int) -> str:
    if multiplier <= 1:
        return "役満"
    if multiplier == 2:
        return "ダブル役満"
    return f"{multiplier}倍役満"


def _hand_label(hand: HandResult) -> str:
    if hand.yakuman:
        return _yakuman_label(len(hand.yakuman))
    return f"{hand.han}翻{hand.fu}符"


def settle(
    hand: HandResult,
    winner: Seat,
    win_type: WinType,
    loser: Seat | None = None,
    honba: int = 0,
    kyotaku: int = 0,
) -> ScoreResult:
    if honba < 0 or kyotaku < 0:
        raise InvalidInputError("honba and kyotaku must be non-negative")
    if win_type == WinType.ron:
        if loser is None or loser == winner:
            raise InvalidInputError("ron requires a discarder other than the winner")
    elif loser is not None:
        raise InvalidInputError("tsumo has no discarder")

    base = hand.base_points
    is_dealer = winner == DEALER
    deltas = {seat: 0 for seat in SEATS}

    if win_type == WinType.ron:
        ron = round_up_100(base * (6 if is_dealer else 4))
        honba_bonus = honba * HONBA_PER_PAYER * 3
        deltas[loser] -= ron + honba_bonus
        deltas[winner] += ron + honba_bonus
        points = Points(ron=ron)
        hand_points = ron
        label = f"{_hand_label(hand)} ロン {ron}"
    else:
        if is_dealer:
            each = round_up_100(base * 3)
            label = f"{_hand_label(hand)} ツモ {each} all"
        else:
            each = round_up_100(round_up_100(base * 4) // 2)
            label = f"{_hand_label(hand)} ツモ {each}/{each}"
        payers = [seat for seat in SEATS if seat != winner]
        for seat in payers:
            deltas[seat] -= each + honba * HONBA_PER_PAYER
            deltas[winner] += each + honba * HONBA_PER_PAYER
        points = Points(tsumo_each=each)
        hand_points = each * len(payers)
        honba_bonus = honba * HONBA_PER_PAYER * len(payers)

    # riichi sticks come from the table pool, not from a seat
    kyotaku_bonus = kyotaku * KYOTAKU_STICK
    logger.debug("settled %s %s: %s", winner.value, win_type.value, deltas)

    return ScoreResult(
        **hand.model_dump(),
        winner=winner,
        win_type=win_type,
        deltas=deltas,
        points=points,
        payments=Payments(
            hand_points_received=hand_points,
            honba_bonus=honba_bonus,
            kyotaku_bonus=kyotaku_bonus,
            total_received=hand_points + honba_bonus + kyotaku_bonus,
        ),
        point_label=label,
    )
