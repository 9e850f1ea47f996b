"""
Leading emotion tag parsing for generated replies.
"""

from enum import Enum

from aarya.models.schemas import Emotion, ResolvedAnswer


class ControlTag(str, Enum):
    NEUTRAL = "NEUTRAL"
    HAPPY = "HAPPY"
    SAD = "SAD"
    ANGRY = "ANGRY"
    SURPRISED = "SURPRISED"
    THINKING = "THINKING"
    CONCERNED = "CONCERNED"

    @property
    def token(self) -> str:
        return f"[{self.value}]"


TAG_EMOTIONS = {
    ControlTag.NEUTRAL: Emotion.NEUTRAL,
    ControlTag.HAPPY: Emotion.HAPPY,
    ControlTag.SAD: Emotion.SAD,
    ControlTag.ANGRY: Emotion.ANGRY,
    ControlTag.SURPRISED: Emotion.SURPRISED,
    ControlTag.THINKING: Emotion.THINKING,
    # the avatar has no concerned pose
    ControlTag.CONCERNED: Emotion.SAD,
}


def tagged(tag: ControlTag, text: str) -> str:
    return f"{tag.token} {text}"


def parse_tagged_reply(reply: str) -> ResolvedAnswer:
    """
    Split a generated reply into display text and emotion.

    Only a tag at the very start counts; tags later in the text stay as they
    are. Untagged replies come back neutral and unchanged apart from trimming.
    """
    stripped = reply.lstrip()
    for tag in ControlTag:
        if stripped.startswith(tag.token):
            return ResolvedAnswer(
                text=stripped[len(tag.token):].strip(),
                emotion=TAG_EMOTIONS[tag],
                source="generative",
            )
    return ResolvedAnswer(text=reply.strip(), emotion=Emotion.NEUTRAL, source="generative")
