from __future__ import annotations

from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, conint


class Seat(str, Enum):
    east = "east"
    south = "south"
    west = "west"


class Wind(str, Enum):
    east = "east"
    south = "south"
    west = "west"
    north = "north"


class WinType(str, Enum):
    ron = "ron"
    tsumo = "tsumo"


class MeldType(str, Enum):
    chi = "chi"
    pon = "pon"
    kan = "kan"
    ankan = "ankan"


TileCode = str

SEATS: tuple[Seat, ...] = (Seat.east, Seat.south, Seat.west)
WIND_TILES: dict[str, TileCode] = {"east": "z1", "south": "z2", "west": "z3", "north": "z4"}


class ErrorBody(BaseModel):
    code: str
    message: str
    details: dict | None = None


class ErrorResponse(BaseModel):
    error: ErrorBody


class Meld(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: MeldType
    tiles: list[TileCode]
    from_seat: Seat | None = None

    @property
    def is_open(self) -> bool:
        return self.type != MeldType.ankan

    @property
    def is_quad(self) -> bool:
        return self.type in {MeldType.kan, MeldType.ankan}


class RuleContext(BaseModel):
    model_config = ConfigDict(frozen=True)

    win_type: WinType
    seat_wind: Seat
    round_wind: Wind = Wind.east
    riichi: bool = False
    double_riichi: bool = False
    ippatsu: bool = False
    haitei: bool = False
    houtei: bool = False
    rinshan: bool = False
    chankan: bool = False
    chiihou: bool = False
    tenhou: bool = False
    dora_indicators: list[TileCode] = Field(default_factory=list)
    ura_dora_indicators: list[TileCode] = Field(default_factory=list)
    melds: list[Meld] = Field(default_factory=list)
    win_tile: TileCode | None = None

    @property
    def concealed(self) -> bool:
        return not any(m.is_open for m in self.melds)

    @property
    def kan_count(self) -> int:
        return sum(1 for m in self.melds if m.is_quad)

    @property
    def is_dealer(self) -> bool:
        return self.seat_wind == Seat.east

    @property
    def is_tsumo(self) -> bool:
        return self.win_type == WinType.tsumo

    @property
    def seat_wind_tile(self) -> TileCode:
        return WIND_TILES[self.seat_wind.value]

    @property
    def round_wind_tile(self) -> TileCode:
        return WIND_TILES[self.round_wind.value]


class RuleSet(BaseModel):
    kuitan_ari: bool = True
    limit_hands: bool = False


class YakuItem(BaseModel):
    name: str
    han: int


class FuBreakdownItem(BaseModel):
    name: str
    fu: int


class HandResult(BaseModel):
    han: int
    fu: int
    fu_breakdown: list[FuBreakdownItem] = Field(default_factory=list)
    yaku: list[YakuItem] = Field(default_factory=list)
    yakuman: list[str] = Field(default_factory=list)
    dora: int = 0
    base_points: int

    @property
    def yaku_names(self) -> list[str]:
        return [item.name for item in self.yaku]


class Points(BaseModel):
    ron: int = 0
    tsumo_each: int = 0


class Payments(BaseModel):
    hand_points_received: int
    honba_bonus: int = 0
    kyotaku_bonus: int = 0
    total_received: int


class ScoreResult(HandResult):
    winner: Seat
    win_type: WinType
    deltas: dict[Seat, int]
    points: Points
    payments: Payments
    point_label: str


class TilesRequest(BaseModel):
    tiles: list[TileCode]


class ShantenResponse(BaseModel):
    shanten: int
    tenpai: bool
    waits: list[TileCode] = Field(default_factory=list)


class RiichiResponse(BaseModel):
    can_declare: bool


class CallRequest(BaseModel):
    hand: list[TileCode]
    discard: TileCode


class CallOptions(BaseModel):
    pon: bool
    kan: bool
    ron: bool
    chi: list[list[TileCode]] = Field(default_factory=list)
    concealed_kans: list[TileCode] = Field(default_factory=list)


class EvaluateRequest(BaseModel):
    tiles: list[TileCode]
    context: RuleContext
    rules: RuleSet = Field(default_factory=RuleSet)


class ScoreRequest(EvaluateRequest):
    loser: Seat | None = None
    honba: conint(ge=0) = 0
    kyotaku: conint(ge=0) = 0


class ScoreResponse(BaseModel):
    status: Literal["ok"]
    result: ScoreResult
    warnings: list[str] = Field(default_factory=list)


class CpuDiscardRequest(BaseModel):
    hand: list[TileCode]
    threatening_discards: list[TileCode] = Field(default_factory=list)


class CpuDiscardResponse(BaseModel):
    index: int
    tile: TileCode


class DealRequest(BaseModel):
    seed: int | None = None


class InitialDeal(BaseModel):
    players: dict[Seat, list[TileCode]]
    wall: list[TileCode]
    dora_indicator: TileCode
