"""Terminal chat against the stored knowledge base."""

import argparse
import asyncio
import base64
from pathlib import Path
from typing import Optional

from aarya.config import settings
from aarya.models.database import default_session_factory, init_db
from aarya.models.schemas import UserProfile
from aarya.services.ai_service import FallbackResponder
from aarya.services.knowledge_store import KnowledgeSnapshot, KnowledgeStore
from aarya.services.resolution_service import ResolutionOrchestrator


def _print_answer(answer) -> None:
    print(f"Aarya [{answer.emotion.value}]: {answer.text}")


async def run_chat(profile: UserProfile, image_path: Optional[str] = None) -> None:
    engine, session_factory = default_session_factory()
    await init_db(engine)
    store = KnowledgeStore(session_factory)
    await store.init(seed=settings.SEED_DEFAULT_KNOWLEDGE)
    snapshot = KnowledgeSnapshot()
    await store.subscribe(snapshot.replace)

    orchestrator = ResolutionOrchestrator(FallbackResponder())
    try:
        if image_path:
            image_b64 = base64.b64encode(Path(image_path).read_bytes()).decode("utf-8")
            _print_answer(await orchestrator.resolve_image(image_b64, profile=profile))
            return

        print(f"{settings.APP_NAME} ready ({len(snapshot.entries)} entries). Type 'exit' to quit.")
        while True:
            user_input = (await asyncio.to_thread(input, "You: ")).strip()
            if user_input.lower() in {"exit", "quit"}:
                break
            if not user_input:
                continue
            _print_answer(await orchestrator.resolve(user_input, snapshot.entries, profile=profile))
    finally:
        await engine.dispose()


def main() -> None:
    parser = argparse.ArgumentParser(description="Chat with Aarya from the terminal.")
    parser.add_argument("--language", choices=["en", "hi"], default="en", help="Preferred reply language.")
    parser.add_argument("--name", default="Guest", help="Display name.")
    parser.add_argument("--image", default=None, help="Analyze the expression in a JPEG file and exit.")
    args = parser.parse_args()

    if args.image and not Path(args.image).exists():
        print(f"Image not found: {args.image}")
        return

    profile = UserProfile(display_name=args.name, language=args.language)
    try:
        asyncio.run(run_chat(profile, args.image))
    except (KeyboardInterrupt, EOFError):
        print()


if __name__ == "__main__":
    main()
