"""fm_amm REST endpoints.

POST /amms                       - create a market on a freshly seeded curve
GET  /amms/{market_id}           - reserves, trading mode, instant price
POST /amms/{market_id}/liquidity - record a deposit into the real reserves
POST /amms/{market_id}/swap      - swap with a minimum-output guard
POST /amms/{market_id}/quote     - simulate a swap without committing
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.fm_amm.application.schemas import (
    CreateAmmRequest,
    ProvideLiquidityRequest,
    QuoteRequest,
    SwapRequest,
)
from src.fm_amm.application.service import AmmApplicationService
from src.fm_common.database import get_db_session
from src.fm_common.response import ApiResponse, success_response

router = APIRouter(prefix="/amms", tags=["amms"])

_service = AmmApplicationService()


def get_amm_service() -> AmmApplicationService:
    return _service


ServiceDep = Annotated[AmmApplicationService, Depends(get_amm_service)]
DbDep = Annotated[AsyncSession, Depends(get_db_session)]


@router.post("", status_code=201)
async def create_amm(
    body: CreateAmmRequest, request: Request, service: ServiceDep, db: DbDep
) -> ApiResponse:
    result = await service.create_market(db, body)
    return success_response(result.model_dump(mode="json"), request=request)


@router.get("/{market_id}")
async def get_amm(market_id: str, request: Request, service: ServiceDep, db: DbDep) -> ApiResponse:
    result = await service.get_market(db, market_id)
    return success_response(result.model_dump(mode="json"), request=request)


@router.post("/{market_id}/liquidity")
async def provide_liquidity(
    market_id: str,
    body: ProvideLiquidityRequest,
    request: Request,
    service: ServiceDep,
    db: DbDep,
) -> ApiResponse:
    result = await service.provide_liquidity(db, market_id, body)
    return success_response(result.model_dump(mode="json"), request=request)


@router.post("/{market_id}/swap")
async def swap(
    market_id: str, body: SwapRequest, request: Request, service: ServiceDep, db: DbDep
) -> ApiResponse:
    result = await service.swap(db, market_id, body)
    return success_response(result.model_dump(mode="json"), request=request)


@router.post("/{market_id}/quote")
async def quote(
    market_id: str, body: QuoteRequest, request: Request, service: ServiceDep, db: DbDep
) -> ApiResponse:
    result = await service.quote(db, market_id, body)
    return success_response(result.model_dump(mode="json"), request=request)
