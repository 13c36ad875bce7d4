from __future__ import annotations

from typing import Any

import pytest

from legend_locator.models import BoundingBox, ImageRecord
from legend_locator.services.record_store import FirebaseImageRepository, MemoryImageRepository
from legend_locator.services.record_store.firebase_store import encode_key


class FakeReference:
    """Minimal stand-in for ``firebase_admin.db.Reference`` over a dict tree."""

    def __init__(self, tree: dict[str, Any], path: tuple[str, ...] = ()) -> None:
        self._tree = tree
        self._path = path

    def child(self, key: str) -> FakeReference:
        return FakeReference(self._tree, self._path + (key,))

    def get(self) -> Any:
        node: Any = self._tree
        for key in self._path:
            if not isinstance(node, dict) or key not in node:
                return None
            node = node[key]
        return node

    def set(self, value: Any) -> None:
        node = self._tree
        for key in self._path[:-1]:
            node = node.setdefault(key, {})
        node[self._path[-1]] = value


BOX = BoundingBox(x1=10, y1=20, x2=110, y2=60)


@pytest.fixture(params=["memory", "firebase"])
def any_repo(request):
    if request.param == "memory":
        return MemoryImageRepository()
    return FirebaseImageRepository(root=FakeReference({}))


def test_record_bounding_box_requires_all_four() -> None:
    assert ImageRecord(name="a.png", x1=1, y1=2, x2=3).legend_bounding_box is None
    record = ImageRecord(name="a.png").with_bounding_box(BOX)
    assert record.legend_bounding_box == BOX
    assert record.with_bounding_box(None).legend_bounding_box is None


def test_get_unknown_record(any_repo) -> None:
    assert any_repo.get_record("missing.png") is None
    assert any_repo.count() == 0


def test_upsert_then_get(any_repo) -> None:
    any_repo.upsert_record(ImageRecord(name="chart.png").with_bounding_box(BOX))
    any_repo.upsert_record(ImageRecord(name="other.jpg"))

    assert any_repo.get_record("chart.png").legend_bounding_box == BOX
    assert any_repo.get_record("other.jpg").legend_bounding_box is None
    assert sorted(r.name for r in any_repo.list_records()) == ["chart.png", "other.jpg"]
    assert any_repo.count() == 2


def test_upsert_updates_existing_box(any_repo) -> None:
    any_repo.upsert_record(ImageRecord(name="chart.png").with_bounding_box(BOX))
    moved = BoundingBox(x1=0, y1=0, x2=5, y2=5)

    any_repo.upsert_record(ImageRecord(name="chart.png").with_bounding_box(moved))

    assert any_repo.count() == 1
    assert any_repo.get_record("chart.png").legend_bounding_box == moved


def test_memory_repo_returns_copies(repo: MemoryImageRepository) -> None:
    repo.upsert_record(ImageRecord(name="chart.png"))

    fetched = repo.get_record("chart.png")
    fetched.x1 = 99

    assert repo.get_record("chart.png").x1 is None


def test_firebase_keys_are_escaped() -> None:
    tree: dict[str, Any] = {}
    repo = FirebaseImageRepository(root=FakeReference(tree))

    repo.upsert_record(ImageRecord(name="fig.1#a.png").with_bounding_box(BOX))

    assert list(tree["images"]) == ["fig%2E1%23a%2Epng"]
    assert tree["images"]["fig%2E1%23a%2Epng"]["name"] == "fig.1#a.png"
    assert encode_key("50%.png") == "50%25%2Epng"
