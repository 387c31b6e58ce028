"""Tests for configuration helpers."""

import logging
from pathlib import Path

import pytest

from docrepo_browser.config import resolve_session_token
from docrepo_browser.logging_config import configure_logging


def test_session_token_from_first_existing_file(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    token_file = tmp_path / "session.txt"
    token_file.write_text("abc123\n")
    monkeypatch.setattr(
        "docrepo_browser.config.SESSION_TOKEN_FILES",
        [tmp_path / "missing.txt", token_file],
    )

    assert resolve_session_token() == "abc123"


def test_session_token_is_optional(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr("docrepo_browser.config.SESSION_TOKEN_FILES", [tmp_path / "none.txt"])

    assert resolve_session_token() is None


def test_configure_logging_sets_http_client_level() -> None:
    configure_logging(verbose=True)
    assert logging.getLogger("api").level == logging.DEBUG

    configure_logging(verbose=False)
    assert logging.getLogger("api").level == logging.INFO
