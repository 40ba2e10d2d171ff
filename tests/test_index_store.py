import json

import pytest

from resume_qa.errors import IndexMissingOrEmpty
from resume_qa.index_store import IndexStore, index_info
from tests.conftest import make_record


@pytest.fixture
def store(tmp_path):
    return IndexStore(tmp_path / "knowledge.index.json", tmp_path / "resume.index.json")


def test_save_writes_stable_field_names(store):
    store.save([make_record(0, "first chunk", domain="personal")])

    payload = json.loads(store.path.read_text(encoding="utf-8"))
    assert payload == [
        {"id": 0, "text": "first chunk", "source": "personal.md", "domain": "personal", "embedding": [1.0, 0.0]}
    ]
    assert store.load()[0].domain == "personal"


def test_legacy_file_is_used_when_primary_missing(store):
    legacy = [{"id": 0, "text": "old resume chunk", "source": "resume.pdf", "embedding": [0.0, 1.0]}]
    store.legacy_path.write_text(json.dumps(legacy), encoding="utf-8")

    records = store.load()

    assert len(records) == 1
    assert records[0].domain == "resume"


def test_primary_wins_over_legacy(store):
    store.legacy_path.write_text(json.dumps([{"id": 0, "text": "old", "source": "a", "embedding": [1.0]}]))
    store.save([make_record(0, "new", embedding=(1.0,))])

    assert [r.text for r in store.load()] == ["new"]


def test_missing_index(store):
    with pytest.raises(IndexMissingOrEmpty, match="resume_qa.ingest"):
        store.load()


def test_empty_index(store):
    store.path.write_text("[]", encoding="utf-8")
    with pytest.raises(IndexMissingOrEmpty, match="empty"):
        store.load()


def test_index_info_counts_by_domain():
    records = [
        make_record(0, "a"),
        make_record(1, "b", domain="personal"),
        make_record(2, "c"),
    ]
    assert index_info(records) == {"total": 3, "byDomain": {"resume": 2, "personal": 1}}


def test_mixed_embedding_dimensions_are_rejected(store):
    mixed = [
        {"id": 0, "text": "three dims", "source": "resume.md", "embedding": [1.0, 0.0, 0.0]},
        {"id": 1, "text": "two dims", "source": "resume.md", "embedding": [1.0, 0.0]},
    ]
    store.path.write_text(json.dumps(mixed), encoding="utf-8")

    with pytest.raises(IndexMissingOrEmpty, match="mixed embedding dimensions"):
        store.load()
