"""Tests for the terminal chat loop."""

from __future__ import annotations

import threading

import pytest

from aarya import cli
from aarya.models.database import create_session_factory
from aarya.models.schemas import UserProfile
from aarya.services.ai_service import FallbackResponder


class TestRunChat:
    @pytest.mark.asyncio
    async def test_prompt_is_read_off_the_event_loop_thread(self, tmp_path, monkeypatch, capsys):
        monkeypatch.setattr(
            cli, "default_session_factory",
            lambda: create_session_factory(f"sqlite+aiosqlite:///{tmp_path / 'cli.db'}"),
        )
        monkeypatch.setattr(cli, "FallbackResponder", lambda: FallbackResponder(api_key=""))
        monkeypatch.setattr(cli.settings, "SEED_DEFAULT_KNOWLEDGE", True)

        loop_thread = threading.current_thread()
        replies = iter(["Hi there!", "", "exit"])
        prompt_threads = []

        def fake_input(prompt):
            prompt_threads.append(threading.current_thread())
            return next(replies)

        monkeypatch.setattr("builtins.input", fake_input)
        await cli.run_chat(UserProfile())

        assert len(prompt_threads) == 3
        assert all(t is not loop_thread for t in prompt_threads)
        out = capsys.readouterr().out
        assert "Aarya [neutral]: Hello! I am Aarya AI. How can I help you today?" in out
