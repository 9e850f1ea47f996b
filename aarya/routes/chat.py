"""
Text and image chat endpoints.
"""

from fastapi import APIRouter, Depends, Response

from aarya.middleware.error_handler import SOURCE_HEADER
from aarya.models.schemas import ImageChatRequest, ResolvedAnswer, TextChatRequest
from aarya.routes.deps import get_orchestrator, get_snapshot
from aarya.services.knowledge_store import KnowledgeSnapshot
from aarya.services.resolution_service import ResolutionOrchestrator

router = APIRouter(prefix="/api/chat", tags=["chat"])


@router.post("/text", response_model=ResolvedAnswer)
async def text_chat(
    req: TextChatRequest,
    response: Response,
    orchestrator: ResolutionOrchestrator = Depends(get_orchestrator),
    snapshot: KnowledgeSnapshot = Depends(get_snapshot),
):
    """
    Answer one utterance from the local knowledge base, or the cloud model when
    nothing matches. Each request stands alone; no history is kept.
    """
    answer = await orchestrator.resolve(req.message, snapshot.entries, profile=req.profile)
    response.headers[SOURCE_HEADER] = answer.source
    return answer


@router.post("/image", response_model=ResolvedAnswer)
async def image_chat(
    req: ImageChatRequest,
    response: Response,
    orchestrator: ResolutionOrchestrator = Depends(get_orchestrator),
):
    """Comment on the facial expression in a base64-encoded JPEG."""
    answer = await orchestrator.resolve_image(req.image_base64, profile=req.profile)
    response.headers[SOURCE_HEADER] = answer.source
    return answer
