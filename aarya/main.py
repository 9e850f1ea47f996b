"""
Aarya AI: FastAPI entry point.
"""

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from slowapi.util import get_remote_address

from aarya.config import settings
from aarya.middleware.error_handler import global_exception_handler
from aarya.middleware.logging_middleware import logging_middleware
from aarya.models.database import create_session_factory, init_db
from aarya.services.ai_service import FallbackResponder
from aarya.services.knowledge_store import KnowledgeSnapshot, KnowledgeStore
from aarya.services.resolution_service import ResolutionOrchestrator

# ── Routes ───────────────────────────────────────────────
from aarya.routes.admin import router as admin_router
from aarya.routes.chat import router as chat_router
from aarya.routes.knowledge import router as knowledge_router


def create_app(
    database_url: Optional[str] = None,
    responder: Optional[FallbackResponder] = None,
    seed: Optional[bool] = None,
) -> FastAPI:
    database_url = database_url or settings.DATABASE_URL
    seed = settings.SEED_DEFAULT_KNOWLEDGE if seed is None else seed
    responder = responder or FallbackResponder()

    # ── Lifespan ─────────────────────────────────────────
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(f"Starting {settings.APP_NAME} v{settings.APP_VERSION}")
        engine, session_factory = create_session_factory(database_url, echo=settings.DEBUG)
        await init_db(engine)

        store = KnowledgeStore(session_factory)
        await store.init(seed=seed)
        snapshot = KnowledgeSnapshot()
        unsubscribe = await store.subscribe(snapshot.replace)

        app.state.knowledge_store = store
        app.state.knowledge_snapshot = snapshot
        app.state.orchestrator = ResolutionOrchestrator(responder)
        logger.info(
            f"Database initialized, {len(snapshot.entries)} knowledge entries loaded, "
            f"generative fallback {'configured' if responder.is_configured else 'NOT configured'}"
        )
        yield
        unsubscribe()
        await engine.dispose()
        logger.info("Shutting down")

    # ── App ──────────────────────────────────────────────
    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        description="Local-knowledge chatbot with generative fallback",
        lifespan=lifespan,
    )

    # ── Rate Limiter ─────────────────────────────────────
    limiter = Limiter(
        key_func=get_remote_address,
        default_limits=[f"{settings.RATE_LIMIT_PER_MINUTE}/minute"],
    )
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
    app.add_middleware(SlowAPIMiddleware)

    # ── CORS ─────────────────────────────────────────────
    origins = settings.CORS_ORIGINS.split(",") if settings.CORS_ORIGINS != "*" else ["*"]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ── Custom Middleware ────────────────────────────────
    app.middleware("http")(global_exception_handler)
    app.middleware("http")(logging_middleware)

    # ── Register Routers ─────────────────────────────────
    app.include_router(chat_router)
    app.include_router(knowledge_router)
    app.include_router(admin_router)

    # ── Health Check ─────────────────────────────────────
    @app.get("/api/health", tags=["health"])
    async def health():
        return {
            "status": "ok",
            "app": settings.APP_NAME,
            "version": settings.APP_VERSION,
            "generative_configured": responder.is_configured,
        }

    return app


app = create_app()


# ── Run ──────────────────────────────────────────────────
if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "aarya.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
        log_level="info",
    )
