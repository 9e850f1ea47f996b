"""
Generative fallback used when the local knowledge base has no answer.
Replies with a degraded [SAD] message instead of failing if OPENAI_API_KEY is not configured.
"""

from typing import Callable, Optional

import openai
from loguru import logger

from aarya.config import settings
from aarya.services.emotion_tags import ControlTag, tagged

SYSTEM_PROMPT = """You are Aarya, a warm and intelligent Indian female AI assistant.

INSTRUCTIONS:
1. Persona: You are female, Indian, professional yet friendly. You are embodied as a 3D avatar.
2. Language: Detect the user's language. Reply in English or Hindi accordingly.
3. Emotion Tagging: Start EVERY response with exactly one tag: [NEUTRAL], [HAPPY], [SAD], [ANGRY], [SURPRISED], [THINKING], or [CONCERNED].
4. Gestures: Your avatar is animated. Use your tone to match the visual emotion.
5. Length: Keep responses conversational and concise (under 3 sentences unless asked for details).

Example (English): [HAPPY] Namaste! I am Aarya. I can help you with that right away.
Example (Hindi): [HAPPY] नमस्ते! मैं आर्या हूँ। मैं आपकी क्या सहायता कर सकती हूँ?"""

IMAGE_PROMPT = (
    "Analyze the facial expression of the person in this photo. "
    "Identify the emotion (Happy, Sad, Angry, Surprised, Neutral). "
    "Respond as Aarya (Indian female AI). Start with the emotion tag, "
    "e.g., [HAPPY] followed by a warm, empathetic comment."
)

LANGUAGE_NAMES = {"en": "English", "hi": "Hindi"}

NOT_CONFIGURED_TEXT = tagged(
    ControlTag.SAD,
    "I couldn't find a local answer, and my connection to the cloud brain is not configured. "
    "Please add your OpenAI API key in Settings.",
)
NOT_CONFIGURED_IMAGE = tagged(
    ControlTag.SAD,
    "I need an OpenAI API key to see your emotion. Please configure it in Settings.",
)
EMPTY_TEXT_REPLY = tagged(ControlTag.NEUTRAL, "I'm having trouble thinking of a response right now.")
EMPTY_IMAGE_REPLY = tagged(ControlTag.NEUTRAL, "I couldn't quite read your expression.")


class ResponderError(Exception):
    """The generative service was called and failed."""


# ── Key validation ────────────────────────────────────────
def _is_real_api_key(key: str) -> bool:
    """Return True only if the key looks like a genuine OpenAI API key."""
    if not key:
        return False
    # Placeholder keys contain 'your' or are too short / malformed
    if "your" in key.lower():
        return False
    if not key.startswith("sk-"):
        return False
    if len(key) < 30:
        return False
    return True


def _build_openai_client(api_key: str):
    # one attempt per call; retries belong to whoever calls the pipeline
    return openai.AsyncOpenAI(
        api_key=api_key,
        max_retries=0,
        timeout=settings.OPENAI_TIMEOUT_SECONDS,
    )


class FallbackResponder:
    """
    Turns an utterance or a photo into a tagged reply from the chat-completions API.

    `client` is anything exposing an async `chat.completions.create(...)`; when
    omitted one is built from `api_key` (default: OPENAI_API_KEY) on first use.
    """

    def __init__(
        self,
        client=None,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        vision_model: Optional[str] = None,
        client_factory: Callable = _build_openai_client,
    ) -> None:
        self._client = client
        self._api_key = settings.OPENAI_API_KEY if api_key is None else api_key
        self.model = model or settings.OPENAI_MODEL
        self.vision_model = vision_model or settings.OPENAI_VISION_MODEL
        self._client_factory = client_factory

    @property
    def is_configured(self) -> bool:
        return self._client is not None or _is_real_api_key(self._api_key)

    def configure(self, api_key: str) -> bool:
        """Replace the credential and drop the current client. Returns whether it is usable."""
        self._api_key = api_key.strip()
        self._client = None
        if not _is_real_api_key(self._api_key):
            logger.warning("OpenAI key missing or not plausible, generative fallback disabled")
            return False
        logger.info("OpenAI credential updated")
        return True

    def _get_client(self):
        if self._client is None:
            if not _is_real_api_key(self._api_key):
                return None
            try:
                self._client = self._client_factory(self._api_key)
            except Exception as e:
                logger.error(f"OpenAI client init failed: {e}")
                raise ResponderError(str(e)) from e
            logger.info(f"OpenAI client initialized (model={self.model})")
        return self._client

    def _system_messages(self, language: str) -> list:
        messages = [{"role": "system", "content": SYSTEM_PROMPT}]
        if language != "en":
            name = LANGUAGE_NAMES.get(language, language)
            messages.append({"role": "system", "content": f"The user prefers {name}. Reply in {name} when appropriate."})
        return messages

    async def _complete(self, client, model: str, messages: list) -> Optional[str]:
        # a reply that does not have the completions shape counts as a service failure
        try:
            response = await client.chat.completions.create(
                model=model, messages=messages, temperature=0.7, max_tokens=500,
            )
            if not response.choices:
                return None
            content = response.choices[0].message.content
            return content.strip() if content else None
        except Exception as e:
            logger.error(f"AI error: {e}")
            raise ResponderError(str(e)) from e

    async def respond_to_text(self, prompt: str, language: str = "en") -> str:
        client = self._get_client()
        if client is None:
            logger.warning("Generative fallback requested but no OpenAI key is configured")
            return NOT_CONFIGURED_TEXT

        messages = self._system_messages(language)
        messages.append({"role": "user", "content": prompt})
        text = await self._complete(client, self.model, messages)
        return text or EMPTY_TEXT_REPLY

    async def respond_to_image(self, image_base64: str, language: str = "en") -> str:
        """`image_base64` is a base64-encoded JPEG, without a data: prefix."""
        client = self._get_client()
        if client is None:
            logger.warning("Image analysis requested but no OpenAI key is configured")
            return NOT_CONFIGURED_IMAGE

        messages = self._system_messages(language)
        messages.append({
            "role": "user",
            "content": [
                {"type": "text", "text": IMAGE_PROMPT},
                {"type": "image_url", "image_url": {"url": f"data:image/jpeg;base64,{image_base64}"}},
            ],
        })
        text = await self._complete(client, self.vision_model, messages)
        return text or EMPTY_IMAGE_REPLY
