import json

import pytest

from domain.models import Document
from storage.json_document import JsonDocumentStorage, StorageError


def test_missing_file_loads_empty_document(tmp_path):
    storage = JsonDocumentStorage(tmp_path / "missing.json")
    doc = storage.load()
    assert doc.books == []
    assert doc.to_dict() == {"books": []}


def test_empty_file_loads_empty_document(db_path):
    db_path.write_text("  \n", encoding="utf-8")
    assert JsonDocumentStorage(db_path).load().books == []


def test_file_without_books_key_defaults_to_empty_list(db_path):
    db_path.write_text(json.dumps({"meta": {"owner": "x"}}), encoding="utf-8")
    doc = JsonDocumentStorage(db_path).load()
    assert doc.books == []
    assert doc.to_dict() == {"meta": {"owner": "x"}, "books": []}


def test_save_writes_pretty_json_and_keeps_extra_keys(db_path):
    db_path.write_text(json.dumps({"meta": 1, "books": []}), encoding="utf-8")
    storage = JsonDocumentStorage(db_path)
    doc = storage.load()
    doc.books.append({"id": "a", "title": "Título", "author": "B"})
    storage.save(doc)

    text = db_path.read_text(encoding="utf-8")
    assert "Título" in text
    assert '\n  "books"' in text
    assert json.loads(text) == {"meta": 1, "books": [{"id": "a", "title": "Título", "author": "B"}]}
    # No temporary files left behind
    assert [p.name for p in db_path.parent.iterdir()] == ["db.json"]


def test_save_creates_parent_directories(tmp_path):
    path = tmp_path / "nested" / "dir" / "db.json"
    JsonDocumentStorage(path).save(Document(books=[{"id": "1"}]))
    assert json.loads(path.read_text(encoding="utf-8")) == {"books": [{"id": "1"}]}


def test_invalid_json_raises_storage_error(db_path):
    db_path.write_text("{not json", encoding="utf-8")
    with pytest.raises(StorageError):
        JsonDocumentStorage(db_path).load()


@pytest.mark.parametrize("payload", ["[]", '{"books": {}}', '"text"'])
def test_unexpected_shape_raises_storage_error(db_path, payload):
    db_path.write_text(payload, encoding="utf-8")
    with pytest.raises(StorageError):
        JsonDocumentStorage(db_path).load()


def test_unreadable_path_raises_storage_error(tmp_path):
    # A directory where the file should be
    path = tmp_path / "db.json"
    path.mkdir()
    storage = JsonDocumentStorage(path)
    with pytest.raises(StorageError):
        storage.load()
    with pytest.raises(StorageError):
        storage.save(Document())


def test_document_find_and_remove():
    doc = Document(books=[{"id": "a"}, {"id": "b"}, {"id": "a", "dup": True}, {"title": "no id"}])
    assert doc.find("a") == [{"id": "a"}, {"id": "a", "dup": True}]
    assert doc.find("zzz") == []
    assert doc.remove("a") == 2
    assert doc.books == [{"id": "b"}, {"title": "no id"}]
    assert doc.remove("a") == 0


@pytest.mark.parametrize("entry", [None, 3, "book", ["id", "a"]])
def test_non_object_book_entry_raises_storage_error(db_path, entry):
    db_path.write_text(json.dumps({"books": [entry, {"id": "a", "title": "t"}]}), encoding="utf-8")
    with pytest.raises(StorageError, match="Book #0"):
        JsonDocumentStorage(db_path).load()


def test_read_permission_error_raises_storage_error(db_path, monkeypatch):
    db_path.write_text('{"books": []}', encoding="utf-8")

    def denied(*args, **kwargs):
        raise PermissionError(13, "Permission denied")

    monkeypatch.setattr("storage.json_document.open", denied, raising=False)
    with pytest.raises(StorageError, match="Permission denied"):
        JsonDocumentStorage(db_path).load()
