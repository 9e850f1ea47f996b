"""
Global exception handler middleware.

Chat endpoints always answer: an unexpected failure there becomes a canned
apology instead of a 500, so the conversation view never shows an error.
"""

from fastapi import Request
from fastapi.responses import JSONResponse
from loguru import logger

from aarya.models.schemas import Emotion, ResolvedAnswer
from aarya.services.knowledge_matcher import random_default_response
from aarya.services.resolution_service import IMAGE_FAILURE_TEXT

CHAT_PREFIX = "/api/chat/"
IMAGE_CHAT_PATH = "/api/chat/image"
SOURCE_HEADER = "X-Resolution-Source"


def _apology(path: str) -> ResolvedAnswer:
    text = IMAGE_FAILURE_TEXT if path == IMAGE_CHAT_PATH else random_default_response()
    return ResolvedAnswer(text=text, emotion=Emotion.NEUTRAL, source="default")


async def global_exception_handler(request: Request, call_next):
    try:
        return await call_next(request)
    except Exception as exc:
        path = request.url.path
        logger.exception(f"Unhandled exception on {request.method} {path}")
        if path.startswith(CHAT_PREFIX):
            answer = _apology(path)
            return JSONResponse(
                status_code=200,
                content=answer.model_dump(mode="json"),
                headers={SOURCE_HEADER: answer.source},
            )
        return JSONResponse(
            status_code=500,
            content={
                "detail": "Internal server error",
                "type": type(exc).__name__,
            },
        )
