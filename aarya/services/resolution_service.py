"""
Answer resolution: local knowledge first, generative fallback second, canned apology last.
"""

from typing import Optional, Sequence

from loguru import logger

from aarya.models.schemas import Emotion, KnowledgeEntry, ResolvedAnswer, UserProfile
from aarya.services.ai_service import FallbackResponder, ResponderError
from aarya.services.emotion_tags import parse_tagged_reply
from aarya.services.knowledge_matcher import find_best_response, random_default_response

IMAGE_FAILURE_TEXT = "I'm sorry, I couldn't process the image correctly."


class ResolutionOrchestrator:
    def __init__(self, responder: FallbackResponder) -> None:
        self.responder = responder

    async def resolve(
        self,
        user_input: str,
        entries: Sequence[KnowledgeEntry],
        profile: Optional[UserProfile] = None,
    ) -> ResolvedAnswer:
        local = find_best_response(user_input, entries)
        if local is not None:
            logger.info(f"[LOCAL] '{user_input[:40]}' -> '{local[:60]}'")
            return ResolvedAnswer(text=local, emotion=Emotion.NEUTRAL, source="local")

        language = profile.language if profile else "en"
        try:
            raw = await self.responder.respond_to_text(user_input, language=language)
        except ResponderError:
            text = random_default_response()
            logger.info(f"[DEFAULT after error] '{user_input[:40]}' -> '{text[:60]}'")
            return ResolvedAnswer(text=text, emotion=Emotion.NEUTRAL, source="default")

        answer = parse_tagged_reply(raw)
        logger.info(f"[GENERATIVE] '{user_input[:40]}' -> {answer.emotion.value} '{answer.text[:60]}'")
        return answer

    async def resolve_image(
        self,
        image_base64: str,
        profile: Optional[UserProfile] = None,
    ) -> ResolvedAnswer:
        language = profile.language if profile else "en"
        try:
            raw = await self.responder.respond_to_image(image_base64, language=language)
        except ResponderError:
            logger.info("[DEFAULT after error] image analysis failed")
            return ResolvedAnswer(text=IMAGE_FAILURE_TEXT, emotion=Emotion.NEUTRAL, source="default")

        answer = parse_tagged_reply(raw)
        logger.info(f"[GENERATIVE] image -> {answer.emotion.value} '{answer.text[:60]}'")
        return answer
