from __future__ import annotations

from collections import Counter
from collections.abc import Sequence

from sanma.schemas import Meld, MeldType, RuleContext, WinType
from sanma.tiles import InvalidInputError, is_honor, is_valid_tile, tile_to_index


def validate_tile(tile: str) -> None:
    if not is_valid_tile(tile):
        raise InvalidInputError(f"Invalid tile code: {tile!r}")


def validate_tiles(tiles: Sequence[str]) -> None:
    for tile in tiles:
        validate_tile(tile)


def validate_copies(tiles: Sequence[str]) -> None:
    for tile, count in Counter(tiles).items():
        if count >= 5:
            raise InvalidInputError(f"Tile appears 5+ times in hand: {tile}")


def validate_hand(tiles: Sequence[str], open_melds: int | None = None, drawn: bool | None = None) -> None:
    """Check tokens, copy counts and that the size is 13-3k (waiting) or 14-3k (drawn)."""
    validate_tiles(tiles)
    validate_copies(tiles)
    size = len(tiles)
    if size == 0 or size > 14 or size % 3 == 0:
        raise InvalidInputError(f"Hand size {size} is not 13-3k or 14-3k")
    if drawn is not None and (size % 3 == 2) != drawn:
        expected = "14-3k" if drawn else "13-3k"
        raise InvalidInputError(f"Hand size {size} must be {expected}")
    if open_melds is not None:
        expected_size = (14 if size % 3 == 2 else 13) - 3 * open_melds
        if size != expected_size:
            raise InvalidInputError(f"Hand size {size} does not match {open_melds} declared melds")


def validate_meld(meld: Meld) -> None:
    validate_tiles(meld.tiles)
    indices = sorted(tile_to_index(t) for t in meld.tiles)
    if meld.type == MeldType.chi:
        if len(indices) != 3:
            raise InvalidInputError("chi must contain exactly 3 tiles")
        first = indices[0]
        if is_honor(first) or first % 9 > 6 or indices != [first, first + 1, first + 2]:
            raise InvalidInputError(f"chi must be a same-suit run: {meld.tiles}")
        return
    size = 3 if meld.type == MeldType.pon else 4
    if len(indices) != size:
        raise InvalidInputError(f"{meld.type.value} must contain exactly {size} tiles")
    if len(set(indices)) != 1:
        raise InvalidInputError(f"{meld.type.value} must contain identical tiles: {meld.tiles}")


def validate_context(context: RuleContext) -> None:
    for meld in context.melds:
        validate_meld(meld)
    if len(context.melds) > 4:
        raise InvalidInputError("At most 4 melds can be declared")
    validate_tiles(context.dora_indicators)
    validate_tiles(context.ura_dora_indicators)
    if context.win_tile is not None:
        validate_tile(context.win_tile)

    if context.riichi and context.double_riichi:
        raise InvalidInputError("riichi and double_riichi cannot both be true")
    if (context.riichi or context.double_riichi) and not context.concealed:
        raise InvalidInputError("riichi requires a concealed hand")
    if not (context.riichi or context.double_riichi) and context.ippatsu:
        raise InvalidInputError("ippatsu cannot be true when riichi/double_riichi is false")
    if context.win_type == WinType.ron and (context.haitei or context.rinshan):
        raise InvalidInputError("haitei/rinshan cannot be true on ron")
    if context.win_type == WinType.tsumo and (context.houtei or context.chankan):
        raise InvalidInputError("houtei/chankan cannot be true on tsumo")
    if context.chiihou and context.tenhou:
        raise InvalidInputError("chiihou and tenhou cannot both be true")
    if (context.chiihou or context.tenhou) and not context.is_tsumo:
        raise InvalidInputError("chiihou/tenhou require tsumo")
    if context.tenhou and not context.is_dealer:
        raise InvalidInputError("tenhou requires dealer")
    if context.chiihou and context.is_dealer:
        raise InvalidInputError("chiihou requires non-dealer")


def validate_winning_input(tiles: Sequence[str], context: RuleContext) -> None:
    validate_context(context)
    validate_hand(tiles, open_melds=len(context.melds), drawn=True)
    if context.win_tile is not None and context.win_tile not in tiles:
        raise InvalidInputError(f"win_tile {context.win_tile} is not in the hand")
    all_tiles = list(tiles)
    for meld in context.melds:
        all_tiles.extend(meld.tiles)
    validate_copies(all_tiles)
