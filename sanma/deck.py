from __future__ import annotations

import random

from sanma.schemas import SEATS, InitialDeal
from sanma.tiles import TILE_CODES, sort_tiles

COPIES = 4
HAND_SIZE = 13


def build_deck() -> list[str]:
    return [tile for tile in TILE_CODES for _ in range(COPIES)]


def shuffle_deck(deck: list[str], rng: random.Random | None = None) -> list[str]:
    shuffled = list(deck)
    (rng or random.Random()).shuffle(shuffled)
    return shuffled


def deal_initial_hands(deck: list[str] | None = None, rng: random.Random | None = None) -> InitialDeal:
    """Deal 13 tiles to each seat from a shuffled deck; the wall's first tile is the dora indicator."""
    if deck is None:
        deck = shuffle_deck(build_deck(), rng)
    players = {}
    cursor = 0
    for seat in SEATS:
        players[seat] = sort_tiles(deck[cursor : cursor + HAND_SIZE])
        cursor += HAND_SIZE
    wall = deck[cursor:]
    return InitialDeal(players=players, wall=wall, dora_indicator=wall[0])
