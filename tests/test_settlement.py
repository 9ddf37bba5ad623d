import pytest

from sanma.schemas import HandResult, RuleContext, RuleSet, Seat, WinType
from sanma.scoring import score_hand
from sanma.settlement import base_points, round_up_100, settle
from sanma.tiles import InvalidInputError


def hand(han: int, fu: int, base: int) -> HandResult:
    return HandResult(han=han, fu=fu, base_points=base)


@pytest.mark.parametrize("value, expected", [(0, 0), (1, 100), (100, 100), (1280, 1300), (1920, 2000), (650, 700)])
def test_round_up_100(value, expected):
    assert round_up_100(value) == expected


def test_round_up_100_is_idempotent():
    for value in range(0, 20001, 7):
        once = round_up_100(value)
        assert round_up_100(once) == once
        assert once - 100 < value <= once


def test_round_up_100_is_exact_for_large_bases():
    base = base_points(50, 100)
    assert round_up_100(base * 4) == base * 4
    assert round_up_100(base * 4 + 1) == base * 4 + 100
    assert settle(hand(50, 100, base), Seat.south, WinType.tsumo).points.tsumo_each == base * 2


def test_base_points_without_limits():
    assert base_points(4, 20) == 1280
    assert base_points(5, 30) == 3840
    assert base_points(6, 30, RuleSet(limit_hands=True)) == 3000
    assert base_points(1, 30, RuleSet(limit_hands=True)) == 240


def test_dealer_tsumo_pays_all():
    tiles = ["m2", "m3", "m4", "m5", "m6", "m7", "p3", "p4", "p5", "s6", "s7", "s8", "s5", "s5"]
    context = RuleContext(win_type="tsumo", seat_wind="east", dora_indicators=["m1"])
    result = score_hand(tiles, context)
    assert result.points.tsumo_each == 3900
    assert result.deltas == {Seat.east: 7800, Seat.south: -3900, Seat.west: -3900}
    assert result.point_label == "4翻20符 ツモ 3900 all"
    assert result.payments.total_received == 7800


def test_non_dealer_ron():
    tiles = ["m2", "m3", "m4", "p4", "p5", "p6", "s6", "s7", "s8", "z5", "z5", "z5", "m9", "m9"]
    context = RuleContext(win_type="ron", seat_wind="south")
    result = score_hand(tiles, context, loser=Seat.west)
    assert result.points.ron == 1300
    assert result.deltas == {Seat.east: 0, Seat.south: 1300, Seat.west: -1300}
    assert result.point_label == "1翻40符 ロン 1300"


def test_non_winning_hand_scores_nothing():
    tiles = ["m2", "m3", "m4", "p4", "p5", "p6", "s6", "s7", "s8", "z5", "z5", "z6", "m9", "m9"]
    assert score_hand(tiles, RuleContext(win_type="ron", seat_wind="south"), loser=Seat.west) is None


def test_non_dealer_tsumo_rounds_each_payment():
    result = settle(hand(1, 40, 320), Seat.south, WinType.tsumo)
    assert result.points.tsumo_each == 700
    assert result.deltas == {Seat.east: -700, Seat.south: 1400, Seat.west: -700}
    assert result.point_label == "1翻40符 ツモ 700/700"
    assert result.payments.hand_points_received == 1400


def test_dealer_ron():
    result = settle(hand(1, 40, 320), Seat.east, WinType.ron, loser=Seat.south)
    assert result.points.ron == 2000
    assert result.deltas[Seat.south] == -2000


def test_honba_on_ron_is_paid_by_discarder():
    result = settle(hand(1, 40, 320), Seat.south, WinType.ron, loser=Seat.west, honba=2)
    assert result.deltas == {Seat.east: 0, Seat.south: 1900, Seat.west: -1900}
    assert result.payments.honba_bonus == 600


def test_honba_on_tsumo_is_paid_by_each():
    result = settle(hand(1, 40, 320), Seat.west, WinType.tsumo, honba=1)
    assert result.deltas == {Seat.east: -800, Seat.south: -800, Seat.west: 1600}
    assert result.payments.honba_bonus == 200


def test_kyotaku_goes_to_winner():
    result = settle(hand(1, 40, 320), Seat.south, WinType.ron, loser=Seat.east, kyotaku=2)
    assert result.deltas == {Seat.east: -1300, Seat.south: 1300, Seat.west: 0}
    assert result.payments.kyotaku_bonus == 2000
    assert result.payments.total_received == 3300


@pytest.mark.parametrize("winner", [Seat.east, Seat.south, Seat.west])
@pytest.mark.parametrize("win_type", [WinType.ron, WinType.tsumo])
@pytest.mark.parametrize("honba, kyotaku", [(0, 0), (3, 0), (0, 2), (1, 1)])
def test_transfers_are_zero_sum(winner, win_type, honba, kyotaku):
    loser = next(seat for seat in Seat if seat != winner) if win_type == WinType.ron else None
    result = settle(hand(2, 30, 480), winner, win_type, loser=loser, honba=honba, kyotaku=kyotaku)
    assert sum(result.deltas.values()) == 0
    assert result.payments.kyotaku_bonus == kyotaku * 1000


def test_yakuman_label():
    result = settle(HandResult(han=13, fu=0, yakuman=["国士無双"], base_points=8000), Seat.west, WinType.ron, loser=Seat.east)
    assert result.points.ron == 32000
    assert result.point_label == "役満 ロン 32000"


@pytest.mark.parametrize(
    "win_type, loser, honba, kyotaku",
    [
        (WinType.ron, None, 0, 0),
        (WinType.ron, Seat.south, 0, 0),
        (WinType.tsumo, Seat.east, 0, 0),
        (WinType.tsumo, None, -1, 0),
        (WinType.tsumo, None, 0, -1),
    ],
)
def test_settle_rejects_bad_arguments(win_type, loser, honba, kyotaku):
    with pytest.raises(InvalidInputError):
        settle(hand(1, 30, 240), Seat.south, win_type, loser=loser, honba=honba, kyotaku=kyotaku)
