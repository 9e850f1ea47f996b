"""
Admin settings endpoints.
"""

from fastapi import APIRouter, Depends

from aarya.models.schemas import CredentialsStatus, CredentialsUpdate
from aarya.routes.deps import get_orchestrator
from aarya.services.resolution_service import ResolutionOrchestrator

router = APIRouter(prefix="/api/admin", tags=["admin"])


@router.get("/credentials", response_model=CredentialsStatus)
async def credentials_status(orchestrator: ResolutionOrchestrator = Depends(get_orchestrator)):
    return CredentialsStatus(configured=orchestrator.responder.is_configured)


@router.put("/credentials", response_model=CredentialsStatus)
async def update_credentials(
    update: CredentialsUpdate,
    orchestrator: ResolutionOrchestrator = Depends(get_orchestrator),
):
    return CredentialsStatus(configured=orchestrator.responder.configure(update.api_key))
