"""Tests for the browse CLI."""

import json
from collections.abc import Iterator
from typing import Any
from unittest.mock import patch

import pytest
import requests
from typer.testing import CliRunner

from docrepo_browser.cli import app
from docrepo_browser.core.session import BrowseSession
from docrepo_browser.core.tree.service import InMemoryCategoryTree
from docrepo_browser.protocols import CategoryTreeProtocol
from tests.unit.fakes import FakeApi, GatedCategoryTree

runner = CliRunner()


@pytest.fixture(autouse=True)
def _quiet_logging() -> Iterator[None]:
    """Keep log lines out of the captured command output."""
    with patch("docrepo_browser.cli.configure_logging"):
        yield


def _patched_session(api: FakeApi, tree: CategoryTreeProtocol | None) -> Any:
    return patch(
        "docrepo_browser.cli._make_session",
        lambda *_args, **_kwargs: BrowseSession(api, tree=tree),
    )


def test_browse_root_lists_children_and_documents(
    fake_api: FakeApi, deep_tree: InMemoryCategoryTree
) -> None:
    with _patched_session(fake_api, deep_tree):
        result = runner.invoke(app, ["browse"])

    assert result.exit_code == 0, result.output
    assert "[1] Imaging" in result.output
    assert "[4] Forms" in result.output
    assert "4 documents:" in result.output


def test_browse_node_as_json(fake_api: FakeApi, deep_tree: InMemoryCategoryTree) -> None:
    with _patched_session(fake_api, deep_tree):
        result = runner.invoke(app, ["browse", "2", "--json"])

    assert result.exit_code == 0, result.output
    data = json.loads(result.stdout)
    assert data["mode"] == "scoped"
    assert [n["label"] for n in data["breadcrumb"]] == ["Root", "Imaging"]
    assert [d["id"] for d in data["documents"]] == [11, 12]
    assert data["error"] is None


def test_browse_global(fake_api: FakeApi, deep_tree: InMemoryCategoryTree) -> None:
    with _patched_session(fake_api, deep_tree):
        result = runner.invoke(app, ["browse", "--global"])

    assert result.exit_code == 0, result.output
    assert "Filtering globally" in result.output
    assert "Subcategories" not in result.output


def test_browse_exits_when_catalogue_fails() -> None:
    api = FakeApi()
    api.add_response("", requests.ConnectionError("unreachable"))

    with _patched_session(api, None):
        result = runner.invoke(app, ["browse"])

    assert result.exit_code == 1


def test_browse_reports_tree_failure(fake_api: FakeApi, deep_tree: InMemoryCategoryTree) -> None:
    gated = GatedCategoryTree(deep_tree)
    gated.fail(2)

    with _patched_session(fake_api, gated):
        result = runner.invoke(app, ["browse", "2", "--json"])

    assert result.exit_code == 1
    data = json.loads(result.stdout)
    assert data["node_id"] == 0
    assert "node 2" in data["error"]


def test_delete_reloads_catalogue(fake_api: FakeApi, deep_tree: InMemoryCategoryTree) -> None:
    with _patched_session(fake_api, deep_tree):
        result = runner.invoke(app, ["delete", "12"])

    assert result.exit_code == 0, result.output
    assert fake_api.deleted == ["Files/12"]
    assert "3 documents remain" in result.output


def test_delete_unknown_document(fake_api: FakeApi, deep_tree: InMemoryCategoryTree) -> None:
    with _patched_session(fake_api, deep_tree):
        result = runner.invoke(app, ["delete", "999"])

    assert result.exit_code == 1
    assert fake_api.deleted == []


def test_delete_rejected_by_server_exits_cleanly(
    fake_api: FakeApi, deep_tree: InMemoryCategoryTree
) -> None:
    fake_api.delete_error = requests.HTTPError("403 Forbidden")

    with _patched_session(fake_api, deep_tree):
        result = runner.invoke(app, ["delete", "12"])

    assert result.exit_code == 1
    assert isinstance(result.exception, SystemExit)
    assert fake_api.deleted == []
