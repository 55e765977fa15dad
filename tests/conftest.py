"""Shared fixtures: fake home/cwd trees and a scripted prompter."""

from pathlib import Path
from typing import Optional

import pytest

from agent_primer.config import PrimerConfig
from agent_primer.prompts import CANCELLED, Selected


def write_primitive(
    root: Path,
    entry: Optional[str],
    filename: str = "SKILL.md",
    name: Optional[str] = None,
    description: Optional[str] = None,
    body: str = "Body text.\n",
    raw: Optional[str] = None,
) -> Path:
    """Create ``root/entry/filename`` (or ``root/filename`` when entry is None)."""
    folder = root / entry if entry else root
    folder.mkdir(parents=True, exist_ok=True)
    path = folder / filename

    if raw is None:
        lines = []
        if name is not None:
            lines.append(f"name: {name}")
        if description is not None:
            lines.append(f"description: {description}")
        raw = "---\n" + "".join(f"{line}\n" for line in lines) + "---\n" + body if lines else body

    path.write_text(raw, encoding="utf-8")
    return path


class ScriptedPrompter:
    """Plays back canned answers instead of reading the terminal.

    ``multiselect`` answers are lists of option indices (or CANCELLED);
    ``select`` answers are option values (or CANCELLED).
    """

    def __init__(self, multiselect=(), select=()):
        self.multiselect_answers = list(multiselect)
        self.select_answers = list(select)
        self.pickers = []
        self.confirmations = 0
        self.banners = []
        self.messages = []
        self.notes = []

    def multiselect(self, message, options):
        self.pickers.append((message, list(options)))
        answer = self.multiselect_answers.pop(0)
        if answer is CANCELLED:
            return CANCELLED
        return Selected([options[i].value for i in answer])

    def select(self, message, options):
        self.confirmations += 1
        answer = self.select_answers.pop(0)
        if answer is CANCELLED:
            return CANCELLED
        return Selected(answer)

    def banner(self, title, subtitle=""):
        self.banners.append((title, subtitle))

    def message(self, text):
        self.messages.append(text)

    def note(self, body, title):
        self.notes.append((title, body))


@pytest.fixture
def config(tmp_path):
    home = tmp_path / "home"
    cwd = tmp_path / "work"
    home.mkdir()
    cwd.mkdir()
    return PrimerConfig(home=home, cwd=cwd, cache_root=tmp_path / "cache")


@pytest.fixture
def skills_root(config):
    return config.global_root("skills")


@pytest.fixture
def domains_root(config):
    return config.global_root("domains")


@pytest.fixture
def prompter_factory():
    return ScriptedPrompter
