"""Tests for leading control-tag parsing."""

from __future__ import annotations

import pytest

from aarya.models.schemas import Emotion
from aarya.services.emotion_tags import ControlTag, TAG_EMOTIONS, parse_tagged_reply, tagged


class TestParseTaggedReply:
    @pytest.mark.parametrize("tag", list(ControlTag))
    def test_every_tag_is_stripped(self, tag):
        answer = parse_tagged_reply(f"[{tag.value}] hello")
        assert answer.text == "hello"
        assert answer.emotion == TAG_EMOTIONS[tag]

    def test_mapping_covers_all_tags(self):
        assert set(TAG_EMOTIONS) == set(ControlTag)
        assert TAG_EMOTIONS[ControlTag.HAPPY] is Emotion.HAPPY
        assert TAG_EMOTIONS[ControlTag.THINKING] is Emotion.THINKING
        assert TAG_EMOTIONS[ControlTag.CONCERNED] is Emotion.SAD

    def test_untagged_reply_is_neutral(self):
        answer = parse_tagged_reply("  Just some text.  ")
        assert answer.emotion is Emotion.NEUTRAL
        assert answer.text == "Just some text."

    def test_unknown_tag_is_left_alone(self):
        answer = parse_tagged_reply("[EXCITED] wow")
        assert answer.emotion is Emotion.NEUTRAL
        assert answer.text == "[EXCITED] wow"

    def test_tags_are_case_sensitive(self):
        answer = parse_tagged_reply("[happy] hi")
        assert answer.emotion is Emotion.NEUTRAL
        assert answer.text == "[happy] hi"

    def test_only_leading_tag_is_control(self):
        answer = parse_tagged_reply("[SAD] I was [HAPPY] before")
        assert answer.emotion is Emotion.SAD
        assert answer.text == "I was [HAPPY] before"

    def test_tag_later_in_text_is_not_control(self):
        answer = parse_tagged_reply("Hello [HAPPY] there")
        assert answer.emotion is Emotion.NEUTRAL
        assert answer.text == "Hello [HAPPY] there"

    def test_leading_whitespace_before_tag(self):
        answer = parse_tagged_reply("\n [ANGRY]   Stop that.")
        assert answer.emotion is Emotion.ANGRY
        assert answer.text == "Stop that."

    def test_tag_without_text(self):
        answer = parse_tagged_reply("[THINKING]")
        assert answer.emotion is Emotion.THINKING
        assert answer.text == ""

    def test_source_is_generative(self):
        assert parse_tagged_reply("[HAPPY] hi").source == "generative"


def test_tagged_helper():
    assert tagged(ControlTag.SAD, "oops") == "[SAD] oops"
