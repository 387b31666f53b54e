"""
Unit Tests for Key-Value Storage Backends

Both media honour get/set/remove; quota rejections leave the previous value
in place.
"""

import pytest

from emergency_mind.core.exceptions import StorageQuotaExceededError, StorageWriteError
from emergency_mind.storage import (
    InMemoryKeyValueStorage,
    JsonFileKeyValueStorage,
    KeyValueStorage,
)


@pytest.fixture(params=["memory", "file"])
def storage(request, tmp_path):
    if request.param == "memory":
        return InMemoryKeyValueStorage()
    return JsonFileKeyValueStorage(str(tmp_path / "store"))


class TestProtocol:
    def test_satisfies_protocol(self, storage):
        assert isinstance(storage, KeyValueStorage)

    def test_missing_key_is_none(self, storage):
        assert storage.get("absent") is None

    def test_set_then_get(self, storage):
        storage.set("k", "[1, 2]")
        assert storage.get("k") == "[1, 2]"

    def test_overwrite(self, storage):
        storage.set("k", "old")
        storage.set("k", "new")
        assert storage.get("k") == "new"

    def test_remove(self, storage):
        storage.set("k", "v")
        storage.remove("k")
        assert storage.get("k") is None

    def test_remove_missing_is_noop(self, storage):
        storage.remove("never-set")

    def test_unicode_values(self, storage):
        storage.set("k", "• café")
        assert storage.get("k") == "• café"


class TestInMemoryQuota:
    def test_write_over_quota_rejected_and_old_value_kept(self):
        storage = InMemoryKeyValueStorage(quota_bytes=20)
        storage.set("k", "small")

        with pytest.raises(StorageQuotaExceededError) as exc_info:
            storage.set("k", "x" * 50)

        assert exc_info.value.quota_bytes == 20
        assert storage.get("k") == "small"

    def test_replacing_value_does_not_double_count(self):
        storage = InMemoryKeyValueStorage(quota_bytes=12)
        storage.set("k", "0123456789")
        storage.set("k", "9876543210")
        assert storage.used_bytes == 11


class TestJsonFileStorage:
    def test_key_maps_to_json_file(self, tmp_path):
        storage = JsonFileKeyValueStorage(str(tmp_path))
        storage.set("emergency-mind-reports", "[]")

        path = storage.path_for("emergency-mind-reports")
        assert path.name == "emergency-mind-reports.json"
        assert path.read_text(encoding="utf-8") == "[]"

    def test_unsafe_key_characters_quoted(self, tmp_path):
        storage = JsonFileKeyValueStorage(str(tmp_path))
        path = storage.path_for("../escape")
        assert path.parent == tmp_path

    def test_no_temp_files_left_behind(self, tmp_path):
        storage = JsonFileKeyValueStorage(str(tmp_path))
        storage.set("k", "v")
        assert [p.name for p in tmp_path.iterdir()] == ["k.json"]

    def test_survives_new_instance(self, tmp_path):
        JsonFileKeyValueStorage(str(tmp_path)).set("k", "persisted")
        assert JsonFileKeyValueStorage(str(tmp_path)).get("k") == "persisted"

    def test_quota_counts_other_keys(self, tmp_path):
        storage = JsonFileKeyValueStorage(str(tmp_path), quota_bytes=10)
        storage.set("a", "12345")

        with pytest.raises(StorageQuotaExceededError):
            storage.set("b", "123456")

        assert storage.get("b") is None

    def test_directory_that_is_a_file_raises_write_error(self, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory")
        storage = JsonFileKeyValueStorage(str(blocker / "nested"))

        with pytest.raises(StorageWriteError):
            storage.set("k", "v")
