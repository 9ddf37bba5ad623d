import pytest

from sanma.calls import can_kan, can_pon, can_ron, chi_options, concealed_kan_options
from sanma.tiles import InvalidInputError

HAND = ["m1", "m1", "m1", "p3", "p4", "p6", "p7", "s2", "s2", "z5", "z5", "z6", "z7"]


def test_pon_needs_two_copies():
    assert can_pon(HAND, "z5")
    assert can_pon(HAND, "m1")
    assert not can_pon(HAND, "z6")


def test_open_kan_needs_three_copies():
    assert can_kan(HAND, "m1")
    assert not can_kan(HAND, "z5")


def test_concealed_kan_lists_four_of_a_kind():
    hand = ["m5", "m5", "m5", "m5", "p1", "p2", "p3", "s4", "s5", "s6", "z1", "z1", "z2", "z2"]
    assert concealed_kan_options(hand) == ["m5"]
    assert concealed_kan_options(HAND) == []


def test_chi_offers_every_completion():
    assert chi_options(HAND, "p5") == [["p3", "p4", "p5"], ["p4", "p5", "p6"], ["p5", "p6", "p7"]]


def test_chi_offers_only_held_completions():
    hand = ["m1", "m1", "m1", "p3", "p4", "p6", "p9", "s2", "s2", "z5", "z5", "z6", "z7"]
    assert chi_options(hand, "p5") == [["p3", "p4", "p5"], ["p4", "p5", "p6"]]


def test_chi_stays_within_ranks():
    hand = ["m2", "m3", "m8", "m9", "p1", "p1", "p1", "s2", "s2", "z5", "z5", "z6", "z7"]
    assert chi_options(hand, "m1") == [["m1", "m2", "m3"]]
    assert chi_options(hand, "m7") == [["m7", "m8", "m9"]]


def test_chi_never_on_honors():
    hand = ["z1", "z2", "z3", "z4", "z5", "z6", "z7", "m1", "m1", "m1", "p1", "p1", "p1"]
    assert chi_options(hand, "z2") == []


def test_ron_when_discard_completes():
    hand = ["m1", "m2", "m3", "p4", "p5", "p6", "s7", "s8", "s9", "z1", "z1", "z1", "m9"]
    assert can_ron(hand, "m9")
    assert not can_ron(hand, "m8")


def test_ron_on_open_hand():
    assert can_ron(["p4", "p5", "p6", "z1"], "z1")


def test_calls_reject_bad_input():
    with pytest.raises(InvalidInputError):
        can_pon(HAND, "z8")
    with pytest.raises(InvalidInputError):
        chi_options(HAND + ["m2"], "m3")
