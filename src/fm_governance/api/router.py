"""fm_governance REST endpoints.

POST /proposals                          - enqueue a proposal over a pass/fail pair
GET  /proposals/{proposal_id}            - proposal detail
POST /proposals/{proposal_id}/finalize   - decide and flip both markets' modes
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.fm_common.database import get_db_session
from src.fm_common.response import ApiResponse, success_response
from src.fm_governance.application.schemas import EnqueueProposalRequest
from src.fm_governance.application.service import GovernanceApplicationService

router = APIRouter(prefix="/proposals", tags=["proposals"])

_service = GovernanceApplicationService()


def get_governance_service() -> GovernanceApplicationService:
    return _service


ServiceDep = Annotated[GovernanceApplicationService, Depends(get_governance_service)]
DbDep = Annotated[AsyncSession, Depends(get_db_session)]


@router.post("", status_code=201)
async def enqueue_proposal(
    body: EnqueueProposalRequest, request: Request, service: ServiceDep, db: DbDep
) -> ApiResponse:
    result = await service.enqueue(db, body)
    return success_response(result.model_dump(mode="json"), request=request)


@router.get("/{proposal_id}")
async def get_proposal(
    proposal_id: str, request: Request, service: ServiceDep, db: DbDep
) -> ApiResponse:
    result = await service.get_proposal(db, proposal_id)
    return success_response(result.model_dump(mode="json"), request=request)


@router.post("/{proposal_id}/finalize")
async def finalize_proposal(
    proposal_id: str, request: Request, service: ServiceDep, db: DbDep
) -> ApiResponse:
    result = await service.finalize(db, proposal_id)
    return success_response(result.model_dump(mode="json"), request=request)
