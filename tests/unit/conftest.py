"""Shared test fixtures."""

import pytest

from docrepo_browser.core.tree.service import InMemoryCategoryTree
from docrepo_browser.models.category import CategoryNode
from docrepo_browser.models.document import Catalogue

from tests.unit.fakes import FakeApi, make_payload, make_row


# 0 -> {5, 6}, both leaves; docs 1@5, 2@6, 3@0.
SCENARIO_ROWS = [make_row(1, 5), make_row(2, 6), make_row(3, 0)]

# 0 -> {1 -> 2 -> 3, 4 -> 7}; 7 has no documents.
DEEP_NODES = [
    CategoryNode(id=1, label="Imaging", parent_id=0),
    CategoryNode(id=2, label="MRI", parent_id=1),
    CategoryNode(id=3, label="Sequences", parent_id=2),
    CategoryNode(id=4, label="Forms", parent_id=0),
    CategoryNode(id=7, label="Empty", parent_id=4),
]
DEEP_ROWS = [make_row(10, 1), make_row(11, 2), make_row(12, 3), make_row(13, 4)]


@pytest.fixture
def scenario_tree() -> InMemoryCategoryTree:
    return InMemoryCategoryTree(
        [
            CategoryNode(id=5, label="Protocols", parent_id=0),
            CategoryNode(id=6, label="Consent", parent_id=0),
        ]
    )


@pytest.fixture
def scenario_catalogue() -> Catalogue:
    return Catalogue.from_json(make_payload(SCENARIO_ROWS))


@pytest.fixture
def deep_tree() -> InMemoryCategoryTree:
    return InMemoryCategoryTree(DEEP_NODES)


@pytest.fixture
def deep_catalogue() -> Catalogue:
    return Catalogue.from_json(make_payload(DEEP_ROWS))


@pytest.fixture
def fake_api() -> FakeApi:
    """A fake server holding the deep tree's catalogue."""
    api = FakeApi()
    api.add_response("", make_payload([list(row) for row in DEEP_ROWS]))
    return api
