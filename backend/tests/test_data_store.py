import os

import pytest

from services.errors import IOFailure, NotFound, ValidationError
from utils.data_store import DirectoryDatasetStore, MemoryDatasetStore, validate_dataset_name


def test_put_then_open_returns_same_bytes(dir_store):
    dir_store.put("points.csv", b"x,y\n1,2\n")
    with dir_store.open("points.csv") as f:
        assert f.read() == b"x,y\n1,2\n"


def test_put_creates_missing_directory(tmp_path):
    store = DirectoryDatasetStore(tmp_path / "nested" / "data")
    store.put("a.csv", b"x,y\n")
    assert (tmp_path / "nested" / "data" / "a.csv").read_bytes() == b"x,y\n"


def test_put_overwrites_existing_dataset(dir_store):
    dir_store.put("a.csv", b"old content that is longer\n")
    dir_store.put("a.csv", b"new\n")
    with dir_store.open("a.csv") as f:
        assert f.read() == b"new\n"


def test_put_leaves_no_temp_files(dir_store):
    dir_store.put("a.csv", b"x,y\n")
    assert os.listdir(dir_store.root) == ["a.csv"]


def test_list_only_returns_csv_files(dir_store):
    dir_store.put("a.csv", b"x,y\n")
    dir_store.put("b.csv", b"x,y\n")
    dir_store.put("notes.txt", b"hello")
    (dir_store.root / "folder.csv").mkdir()
    (dir_store.root / ".upload-123.tmp").write_bytes(b"partial")

    names = dir_store.list()
    assert sorted(names) == ["a.csv", "b.csv"]
    assert len(names) == len(set(names))


def test_list_missing_directory_is_io_failure(tmp_path):
    store = DirectoryDatasetStore(tmp_path / "missing")
    with pytest.raises(IOFailure):
        store.list()


def test_open_missing_dataset_is_not_found(dir_store):
    with pytest.raises(NotFound):
        dir_store.open("nope.csv")


def test_open_directory_is_not_found(dir_store):
    (dir_store.root / "folder.csv").mkdir()
    with pytest.raises(NotFound):
        dir_store.open("folder.csv")


@pytest.mark.parametrize("name", ["", ".", "..", "../escape.csv", "a/b.csv", "a\\b.csv", "a\x00.csv"])
def test_invalid_names_rejected(dir_store, name):
    with pytest.raises(ValidationError):
        dir_store.put(name, b"x,y\n")
    assert dir_store.list() == []


def test_name_kept_verbatim():
    assert validate_dataset_name("my data (v2).csv") == "my data (v2).csv"


def test_memory_store_matches_directory_contract():
    store = MemoryDatasetStore({"a.csv": b"x,y\n", "readme.md": b"#"})
    assert store.list() == ["a.csv"]
    with store.open("a.csv") as f:
        assert f.read() == b"x,y\n"
    with pytest.raises(NotFound):
        store.open("b.csv")
