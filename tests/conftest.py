"""Shared fixtures: a recording render target, a ready controller and an in-memory history database."""
import os

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from core.commands import CommandRegistry
from core.controller import ConsoleController
from core.settings import ConsoleSettings


class RecordingTarget:
    """Render target that mirrors the painted text so tests can compare it with the document."""

    def __init__(self):
        self.text = ""
        self.colors = []
        self.caret = 0
        self.clears = 0

    def insert(self, offset, runs):
        for run in runs:
            assert run.color is not None, "render target must only see resolved colours"
            self.text = self.text[:offset] + run.text + self.text[offset:]
            self.colors[offset:offset] = [run.color] * len(run.text)
            offset += len(run.text)

    def remove(self, offset, length):
        self.text = self.text[:offset] + self.text[offset + length:]
        del self.colors[offset:offset + length]

    def set_caret(self, offset):
        self.caret = offset

    def clear(self):
        self.text = ""
        self.colors = []
        self.caret = 0
        self.clears += 1


@pytest.fixture
def target():
    return RecordingTarget()


@pytest.fixture
def commands():
    return CommandRegistry()


@pytest.fixture
def console(target, commands):
    return ConsoleController(settings=ConsoleSettings(prompt="> "), target=target, commands=commands)


@pytest.fixture
def history_db():
    from pony.orm import db_session

    from core.db import init_db
    from data.models import HistoryEntry

    init_db(":memory:")
    with db_session:
        HistoryEntry.select().delete(bulk=True)
    yield
    with db_session:
        HistoryEntry.select().delete(bulk=True)
