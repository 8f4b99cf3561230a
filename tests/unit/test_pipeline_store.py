"""
Build Pipeline and Dataset Store Tests
Tests for orchestrator/pipeline.py, orchestrator/store.py and
orchestrator/artifacts/io.py

Tests:
1. End-to-end build from CSV with the dual amount modes
2. Rejected builds leave the published dataset (memory and disk) untouched
3. Snapshot persistence and reload
4. Concurrent builds publish whole datasets only
"""
import json
import logging
import threading

import pytest

from core.merkle.merkle_proofs import MerkleVerifier
from core.schemas.errors import EmptyDatasetException, NotFoundException
from orchestrator.artifacts.io import (
    SnapshotIOError,
    dump_snapshot,
    load_snapshot,
    save_snapshot,
)
from orchestrator.pipeline import build_dataset, build_dataset_from_csv
from orchestrator.store import NO_DATASET_MESSAGE, DatasetStore

from fixtures.common import ADDRESSES, FIXED_TIMESTAMP, fixed_clock, make_rows


class TestBuildPipeline:

    def test_build_from_csv(self, sample_csv):
        result = build_dataset_from_csv(sample_csv, clock=fixed_clock)

        assert result.dataset.count == 3
        assert result.dataset.total_allocated_wei == 6 * 10**18
        assert result.skipped == 0
        assert result.dataset.timestamp == FIXED_TIMESTAMP

    def test_mixed_amount_modes(self):
        """Wei and ether amounts can be mixed in one upload."""
        result = build_dataset(make_rows(("100", "100.0")), clock=fixed_clock)
        entries = result.dataset.entries

        assert entries[0].amount == "100"
        assert entries[1].amount == str(100 * 10**18)
        assert result.dataset.total_allocated_wei == 100 + 100 * 10**18

    def test_summary(self, sample_csv):
        result = build_dataset_from_csv(sample_csv, clock=fixed_clock)

        assert result.summary() == {
            "root": result.dataset.root,
            "count": 3,
            "totalAllocated": str(6 * 10**18),
            "skipped": 0,
        }

    def test_invalid_rows_logged(self, caplog):
        rows = make_rows(("1.0", "bogus", "3.0"))

        with caplog.at_level(logging.WARNING, logger="orchestrator.pipeline"):
            result = build_dataset(rows, clock=fixed_clock)

        assert result.skipped == 1
        assert result.dataset.count == 2
        assert "Skipping invalid row 3" in caplog.text

    def test_proofs_verify(self, sample_csv):
        dataset = build_dataset_from_csv(sample_csv, clock=fixed_clock).dataset

        for i, amount in enumerate(("1.0", "2.0", "3.0")):
            proof = dataset.lookup(ADDRESSES[i]).proof
            assert MerkleVerifier.verify_allocation(ADDRESSES[i], amount, proof, dataset.root)

    def test_wrong_amount_fails(self, sample_csv):
        dataset = build_dataset_from_csv(sample_csv, clock=fixed_clock).dataset
        proof = dataset.lookup(ADDRESSES[0]).proof

        assert not MerkleVerifier.verify_allocation(ADDRESSES[0], "1", proof, dataset.root)

    def test_deterministic_root(self, sample_csv):
        first = build_dataset_from_csv(sample_csv, clock=fixed_clock).dataset
        second = build_dataset_from_csv(sample_csv.encode("utf-8"), clock=lambda: 1).dataset

        assert first.root == second.root
        assert first.entries == second.entries

    def test_empty_build_raises(self):
        with pytest.raises(EmptyDatasetException):
            build_dataset_from_csv("address,amount\n0xbad,1\n")


class TestDatasetStore:

    def test_nothing_published(self, memory_store):
        assert not memory_store.has_dataset()
        with pytest.raises(NotFoundException, match=NO_DATASET_MESSAGE):
            memory_store.current()
        with pytest.raises(NotFoundException):
            memory_store.proof_for(ADDRESSES[0])

    def test_build_and_publish(self, memory_store, sample_csv):
        result = memory_store.build_and_publish_csv(sample_csv)

        assert memory_store.current() is result.dataset
        assert memory_store.root_info()["root"] == result.dataset.root

    def test_proof_for(self, memory_store):
        memory_store.build_and_publish(make_rows(("1.0", "2.0")))

        entry, root = memory_store.proof_for(ADDRESSES[1].lower())
        assert entry.amount == str(2 * 10**18)
        assert root == memory_store.current().root

        with pytest.raises(NotFoundException):
            memory_store.proof_for(ADDRESSES[3])

    def test_rebuild_replaces(self, memory_store):
        memory_store.build_and_publish(make_rows(("1.0",)))
        first_root = memory_store.current().root

        memory_store.build_and_publish(make_rows(("5.0", "6.0")))

        assert memory_store.current().root != first_root
        assert memory_store.current().count == 2

    def test_empty_upload_keeps_previous(self, store, sample_csv):
        published = store.build_and_publish_csv(sample_csv).dataset
        on_disk = store.data_file.read_text()

        with pytest.raises(EmptyDatasetException):
            store.build_and_publish_csv("address,amount\n0xbad,1.0\n")

        assert store.current() is published
        assert store.data_file.read_text() == on_disk

    def test_persisted_and_reloaded(self, store, sample_csv, tmp_path):
        published = store.build_and_publish_csv(sample_csv).dataset

        reloaded = DatasetStore(tmp_path / "merkle.json")

        assert reloaded.current() == published

    def test_unreadable_snapshot_ignored(self, tmp_path, caplog):
        path = tmp_path / "merkle.json"
        path.write_text("{not json")

        with caplog.at_level(logging.WARNING, logger="orchestrator.store"):
            store = DatasetStore(path)

        assert not store.has_dataset()
        assert "Ignoring unreadable snapshot" in caplog.text

    def test_export_csv(self, memory_store, sample_csv):
        memory_store.build_and_publish_csv(sample_csv)
        assert memory_store.export_csv().startswith("merkle_root,address,amount,proof\n")

    def test_concurrent_builds(self, memory_store):
        """Each publication is one whole dataset from one of the uploads."""
        uploads = [make_rows((f"{i}.0", f"{i + 1}.0")) for i in range(1, 9)]
        roots = {build_dataset(rows).dataset.root for rows in uploads}
        seen = []

        def reader():
            for _ in range(200):
                if memory_store.has_dataset():
                    dataset = memory_store.current()
                    seen.append((dataset.count, dataset.root))

        threads = [threading.Thread(target=memory_store.build_and_publish, args=(rows,)) for rows in uploads]
        threads.append(threading.Thread(target=reader))
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert memory_store.current().root in roots
        assert all(count == 2 for count, _ in seen)
        assert {root for _, root in seen} <= roots


class TestSnapshotIO:

    def test_save_and_load(self, tmp_path, sample_csv):
        dataset = build_dataset_from_csv(sample_csv, clock=fixed_clock).dataset
        path = save_snapshot(dataset, tmp_path / "nested" / "merkle.json")

        assert path.exists()
        assert load_snapshot(path) == dataset
        assert list(path.parent.glob("*.tmp")) == []

    def test_dump_is_camel_case_json(self, sample_csv):
        dataset = build_dataset_from_csv(sample_csv, clock=fixed_clock).dataset
        data = json.loads(dump_snapshot(dataset))

        assert data["totalAllocated"] == str(6 * 10**18)
        assert data["timestamp"] == FIXED_TIMESTAMP

    def test_load_missing(self, tmp_path):
        with pytest.raises(SnapshotIOError, match="not found"):
            load_snapshot(tmp_path / "absent.json")

    def test_load_not_json(self, tmp_path):
        path = tmp_path / "merkle.json"
        path.write_text("nope")

        with pytest.raises(SnapshotIOError):
            load_snapshot(path)
