"""Unit tests for the record store."""

import threading
from pathlib import Path
from unittest.mock import patch

import pytest

from fruently.core.exceptions import StoreError
from fruently.core.models import Record
from fruently.retry import RetryPolicy
from fruently.store import RecordStore, maybe_store


class TestRecordStore:

    def test_write_appends_lines(self, tmp_path: Path, sample_records) -> None:
        store = RecordStore(tmp_path / "fruently.log")
        assert store.write(sample_records) == 2
        assert store.write(sample_records[:1]) == 1

        lines = (tmp_path / "fruently.log").read_text(encoding="utf-8").splitlines()
        assert len(lines) == 3
        assert lines[0] == '2025-01-01T00:00:00+00:00\tapp.access\t{"path": "/", "status": 200}'

    def test_write_creates_parent_directories(self, tmp_path: Path, sample_records) -> None:
        path = tmp_path / "nested" / "dir" / "fruently.log"
        RecordStore(path).write(sample_records)
        assert path.exists()

    def test_write_nothing(self, tmp_path: Path) -> None:
        path = tmp_path / "fruently.log"
        assert RecordStore(path).write([]) == 0
        assert not path.exists()

    def test_read_round_trip(self, tmp_path: Path, sample_records) -> None:
        store = RecordStore(tmp_path / "fruently.log")
        store.write(sample_records)
        assert store.read() == [
            Record(tag="app.access", time=1735689600.0, record={"status": 200, "path": "/"}),
            Record(tag="app.error", time=1735689601.0, record={"message": "timeout"}),
        ]

    def test_read_missing_file(self, tmp_path: Path) -> None:
        assert RecordStore(tmp_path / "absent.log").read() == []

    def test_read_malformed_line(self, tmp_path: Path) -> None:
        path = tmp_path / "fruently.log"
        path.write_text("not a record\n", encoding="utf-8")
        with pytest.raises(StoreError, match="malformed record"):
            RecordStore(path).read()

    def test_write_failure_wraps_oserror(self, tmp_path: Path, sample_records) -> None:
        store = RecordStore(tmp_path / "fruently.log")
        with patch("builtins.open", side_effect=PermissionError("Permission denied")):
            with pytest.raises(StoreError) as exc_info:
                store.write(sample_records)
        assert exc_info.value.path == str(tmp_path / "fruently.log")
        assert "Permission denied" in exc_info.value.reason
        assert isinstance(exc_info.value.__cause__, PermissionError)

    def test_write_into_file_as_directory(self, tmp_path: Path, sample_records) -> None:
        blocker = tmp_path / "blocker"
        blocker.write_text("", encoding="utf-8")
        with pytest.raises(StoreError):
            RecordStore(blocker / "fruently.log").write(sample_records)


class TestMaybeStore:

    def test_stores_when_policy_has_path(self, tmp_path: Path, sample_records) -> None:
        path = tmp_path / "fruently.log"
        policy = RetryPolicy().store_file(path)
        count = maybe_store(policy, sample_records, ConnectionError("refused"))
        assert count == 2
        assert len(RecordStore(path).read()) == 2

    def test_reraises_without_path(self, sample_records) -> None:
        error = ConnectionError("refused")
        with pytest.raises(ConnectionError) as exc_info:
            maybe_store(RetryPolicy(), sample_records, error)
        assert exc_info.value is error


class TestSerializationFailures:

    def test_unserializable_payload(self, tmp_path: Path) -> None:
        path = tmp_path / "fruently.log"
        records = [Record(tag="app", time=1, record={"x": object()})]
        with pytest.raises(StoreError, match="unserializable record") as exc_info:
            RecordStore(path).write(records)
        assert isinstance(exc_info.value.__cause__, TypeError)
        assert not path.exists()

    def test_time_out_of_range(self, tmp_path: Path) -> None:
        records = [Record(tag="app", time=1e20, record={})]
        with pytest.raises(StoreError, match="unserializable record"):
            RecordStore(tmp_path / "fruently.log").write(records)

    def test_maybe_store_chains_delivery_error(self, tmp_path: Path) -> None:
        policy = RetryPolicy().store_file(tmp_path / "fruently.log")
        delivery_error = ConnectionError("refused")
        records = [Record(tag="app", time=1, record={"x": object()})]
        with pytest.raises(StoreError) as exc_info:
            maybe_store(policy, records, delivery_error)
        assert exc_info.value.__cause__ is delivery_error

    def test_maybe_store_chains_write_failure(self, tmp_path: Path, sample_records) -> None:
        blocker = tmp_path / "blocker"
        blocker.write_text("", encoding="utf-8")
        policy = RetryPolicy().store_file(blocker / "fruently.log")
        delivery_error = ConnectionError("refused")
        with pytest.raises(StoreError) as exc_info:
            maybe_store(policy, sample_records, delivery_error)
        assert exc_info.value.__cause__ is delivery_error


class TestConcurrentStores:

    def test_stores_on_same_path_share_lock(self, tmp_path: Path) -> None:
        path = tmp_path / "fruently.log"
        assert RecordStore(path)._lock is RecordStore(path)._lock
        assert RecordStore(path)._lock is RecordStore(tmp_path / "." / "fruently.log")._lock
        assert RecordStore(path)._lock is not RecordStore(tmp_path / "other.log")._lock

    def test_parallel_maybe_store(self, tmp_path: Path) -> None:
        path = tmp_path / "fruently.log"
        policy = RetryPolicy().store_file(path)
        payload = {"message": "x" * 4096}
        errors = []

        def sender(tag: str) -> None:
            records = [Record(tag=tag, time=1735689600 + i, record=payload) for i in range(50)]
            try:
                for _ in range(4):
                    maybe_store(policy, records, ConnectionError("refused"))
            except Exception as e:
                errors.append(e)

        threads = [threading.Thread(target=sender, args=(f"app.t{n}",)) for n in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert errors == []
        stored = RecordStore(path).read()
        assert len(stored) == 4 * 4 * 50
        assert all(record.record == payload for record in stored)
