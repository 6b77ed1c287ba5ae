from __future__ import annotations

import logging

import pytest

from logging_config import setup_logging


def test_setup_logging_sets_root_level(monkeypatch: pytest.MonkeyPatch) -> None:
    root = logging.getLogger()
    monkeypatch.setattr(root, "handlers", [])
    monkeypatch.setattr(root, "level", logging.WARNING)

    setup_logging("debug")

    assert root.level == logging.DEBUG
    assert len(root.handlers) == 1


def test_setup_logging_unknown_level_falls_back_to_info(monkeypatch: pytest.MonkeyPatch) -> None:
    root = logging.getLogger()
    monkeypatch.setattr(root, "handlers", [])
    monkeypatch.setattr(root, "level", logging.WARNING)

    setup_logging("chatty")

    assert root.level == logging.INFO
