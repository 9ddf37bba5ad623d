from __future__ import annotations

import logging
import random

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse

from sanma.calls import can_kan, can_pon, can_ron, chi_options, concealed_kan_options
from sanma.config import settings
from sanma.cpu import choose_cpu_discard
from sanma.deck import deal_initial_hands
from sanma.schemas import (
    CallOptions,
    CallRequest,
    CpuDiscardRequest,
    CpuDiscardResponse,
    DealRequest,
    ErrorBody,
    ErrorResponse,
    EvaluateRequest,
    HandResult,
    InitialDeal,
    RiichiResponse,
    ScoreRequest,
    ScoreResponse,
    ShantenResponse,
    TilesRequest,
)
from sanma.scoring import score_hand
from sanma.shanten import calculate_shanten, can_declare_riichi, waiting_tiles
from sanma.tiles import InvalidInputError
from sanma.yaku import NO_YAKU, evaluate_hand

logging.basicConfig(level=settings.log_level)
logger = logging.getLogger(__name__)

app = FastAPI(title=settings.app_title, version="0.1.0")


@app.exception_handler(InvalidInputError)
def invalid_input_handler(request: Request, exc: InvalidInputError) -> JSONResponse:
    logger.info("rejected %s: %s", request.url.path, exc)
    body = ErrorResponse(error=ErrorBody(code="invalid_input", message=str(exc)))
    return JSONResponse(status_code=422, content=body.model_dump())


@app.get("/")
def root() -> dict[str, str]:
    return {
        "message": "Sanma hand evaluator API",
        "docs": "/docs",
        "health": "/health",
    }


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.post("/api/v1/shanten", response_model=ShantenResponse)
def shanten(req: TilesRequest) -> ShantenResponse:
    value = calculate_shanten(req.tiles)
    waits = waiting_tiles(req.tiles) if value == 0 and len(req.tiles) % 3 == 1 else []
    return ShantenResponse(shanten=value, tenpai=value == 0, waits=waits)


@app.post("/api/v1/calls", response_model=CallOptions)
def calls(req: CallRequest) -> CallOptions:
    return CallOptions(
        pon=can_pon(req.hand, req.discard),
        kan=can_kan(req.hand, req.discard),
        ron=can_ron(req.hand, req.discard),
        chi=chi_options(req.hand, req.discard),
        concealed_kans=concealed_kan_options(req.hand),
    )


@app.post("/api/v1/riichi", response_model=RiichiResponse)
def riichi(req: TilesRequest) -> RiichiResponse:
    return RiichiResponse(can_declare=can_declare_riichi(req.tiles))


@app.post("/api/v1/evaluate", response_model=HandResult)
def evaluate(req: EvaluateRequest) -> HandResult:
    result = evaluate_hand(req.tiles, req.context, req.rules)
    if result is None:
        raise HTTPException(status_code=422, detail="Hand is not a valid winning shape")
    return result


@app.post("/api/v1/score", response_model=ScoreResponse)
def score(req: ScoreRequest) -> ScoreResponse:
    result = score_hand(req.tiles, req.context, loser=req.loser, honba=req.honba, kyotaku=req.kyotaku, rules=req.rules)
    if result is None:
        raise HTTPException(status_code=422, detail="Hand is not a valid winning shape")
    warnings = []
    if NO_YAKU in result.yaku_names:
        warnings.append("No named yaku; scored as 1 han.")
    return ScoreResponse(status="ok", result=result, warnings=warnings)


@app.post("/api/v1/cpu/discard", response_model=CpuDiscardResponse)
def cpu_discard(req: CpuDiscardRequest) -> CpuDiscardResponse:
    index = choose_cpu_discard(req.hand, req.threatening_discards)
    return CpuDiscardResponse(index=index, tile=req.hand[index])


@app.post("/api/v1/deal", response_model=InitialDeal)
def deal(req: DealRequest) -> InitialDeal:
    rng = random.Random(req.seed) if req.seed is not None else None
    return deal_initial_hands(rng=rng)
