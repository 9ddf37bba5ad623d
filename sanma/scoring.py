from __future__ import annotations

from collections.abc import Sequence

from sanma.schemas import RuleContext, RuleSet, ScoreResult, Seat
from sanma.settlement import settle
from sanma.yaku import evaluate_hand


def score_hand(
    tiles: Sequence[str],
    context: RuleContext,
    loser: Seat | None = None,
    honba: int = 0,
    kyotaku: int = 0,
    rules: RuleSet | None = None,
) -> ScoreResult | None:
    """Evaluate a winning hand for the seat in ``context.seat_wind`` and settle it. None if the hand is not a win."""
    hand = evaluate_hand(tiles, context, rules)
    if hand is None:
        return None
    return settle(hand, context.seat_wind, context.win_type, loser=loser, honba=honba, kyotaku=kyotaku)
