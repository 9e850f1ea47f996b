"""
FastAPI dependencies resolving the pipeline objects built at startup.
"""

from fastapi import Request

from aarya.services.knowledge_store import KnowledgeSnapshot, KnowledgeStore
from aarya.services.resolution_service import ResolutionOrchestrator


def get_orchestrator(request: Request) -> ResolutionOrchestrator:
    return request.app.state.orchestrator


def get_store(request: Request) -> KnowledgeStore:
    return request.app.state.knowledge_store


def get_snapshot(request: Request) -> KnowledgeSnapshot:
    return request.app.state.knowledge_snapshot
