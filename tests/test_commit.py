"""Tests for the commit engine."""

import pytest

from svcs.config import MatchMode, SnapshotLayout, SvcsSettings
from svcs.core.commit import CommitEngine, CommitState, CommitStep, plan_commit, snapshot_name
from svcs.core.errors import PreconditionUnmet, StorageFailure, UserInputMissing
from svcs.core.fingerprint import fingerprint_bytes
from svcs.core.storage import MemoryStorage


def _state(**overrides):
    values = dict(
        message="msg",
        author="alice",
        tracked=["a.txt"],
        log_text="commit abc\nAuthor: alice\nold\n\n",
        fingerprint="def",
    )
    values.update(overrides)
    return CommitState(**values)


class TestPlanCommit:
    def test_happy_path(self):
        assert plan_commit(_state()) == CommitStep.COMMIT

    def test_message_checked_first(self):
        state = _state(message="", author=None, tracked=None, log_text=None)

        assert plan_commit(state) == CommitStep.NO_MESSAGE

    def test_author_before_index(self):
        assert plan_commit(_state(author=None, tracked=None)) == CommitStep.NO_AUTHOR

    def test_no_files(self):
        assert plan_commit(_state(tracked=None)) == CommitStep.NO_FILES

    def test_first_commit_skips_dedup(self):
        assert plan_commit(_state(log_text=None, fingerprint=None)) == CommitStep.FIRST_COMMIT

    def test_fingerprint_anywhere_in_log(self):
        log_text = "commit new\nAuthor: a\nm\n\ncommit def\nAuthor: a\nm\n\n"

        assert plan_commit(_state(log_text=log_text)) == CommitStep.NOTHING_TO_COMMIT

    def test_substring_dedup_hits_on_fragment(self):
        state = _state(log_text="commit 0defa\nAuthor: a\nm\n\n")

        assert plan_commit(state) == CommitStep.NOTHING_TO_COMMIT

    def test_exact_dedup_ignores_fragment(self):
        state = _state(log_text="commit 0defa\nAuthor: a\nm\n\n", matching=MatchMode.EXACT)

        assert plan_commit(state) == CommitStep.COMMIT


class TestSnapshotName:
    def test_flat_strips_directories(self):
        assert snapshot_name("src/app/main.py") == "main.py"
        assert snapshot_name("src\\main.py") == "main.py"

    def test_nested_keeps_relative_path(self):
        assert snapshot_name("./src/app/main.py", SnapshotLayout.NESTED) == "src/app/main.py"

    def test_nested_falls_back_for_escaping_paths(self):
        assert snapshot_name("../outside.txt", SnapshotLayout.NESTED) == "outside.txt"


@pytest.fixture
def storage():
    return MemoryStorage(
        working={"a.txt": b"hello", "b.txt": b"bee"},
        config="alice",
        index="a.txt\nb.txt\n",
    )


class TestCommitEngine:
    def test_first_commit(self, storage):
        record = CommitEngine(storage).commit("first")

        fp = fingerprint_bytes([b"hello", b"bee"])
        assert record.fingerprint == fp
        assert record.author == "alice"
        assert storage.log == f"commit {fp}\nAuthor: alice\nfirst\n\n"
        assert storage.snapshots[fp] == {"a.txt": b"hello", "b.txt": b"bee"}

    def test_second_commit_without_changes(self, storage):
        engine = CommitEngine(storage)
        engine.commit("first")
        log_before = storage.log

        with pytest.raises(PreconditionUnmet, match="Nothing to commit."):
            engine.commit("second")

        assert storage.log == log_before
        assert len(storage.snapshots) == 1

    def test_commit_after_change(self, storage):
        engine = CommitEngine(storage)
        first = engine.commit("first")
        storage.working["a.txt"] = b"world"

        second = engine.commit("second")

        assert first.fingerprint != second.fingerprint
        assert engine.log.read() == [second, first]
        assert storage.snapshots[first.fingerprint]["a.txt"] == b"hello"
        assert storage.snapshots[second.fingerprint]["a.txt"] == b"world"

    def test_reverting_content_is_nothing_to_commit(self, storage):
        engine = CommitEngine(storage)
        engine.commit("first")
        storage.working["a.txt"] = b"world"
        engine.commit("second")
        storage.working["a.txt"] = b"hello"

        with pytest.raises(PreconditionUnmet, match="Nothing to commit."):
            engine.commit("third")

    def test_missing_message(self, storage):
        with pytest.raises(UserInputMissing, match="Message was not passed."):
            CommitEngine(storage).commit(None)
        assert storage.log is None

    def test_unconfigured_user(self, storage):
        storage.config = None

        with pytest.raises(PreconditionUnmet, match="Please configure the user."):
            CommitEngine(storage).commit("first")
        assert storage.log is None

    def test_nothing_staged(self):
        storage = MemoryStorage(config="alice")

        with pytest.raises(PreconditionUnmet, match="No files staged."):
            CommitEngine(storage).commit("x")
        assert storage.log is None
        assert storage.snapshots == {}

    def test_deleted_tracked_file_fails(self, storage):
        engine = CommitEngine(storage)
        engine.commit("first")
        del storage.working["b.txt"]

        with pytest.raises(StorageFailure):
            engine.commit("second")
        assert len(storage.snapshots) == 1

    def test_flat_name_collision_last_wins(self):
        storage = MemoryStorage(
            working={"x/n.txt": b"one", "y/n.txt": b"two"},
            config="alice",
            index="x/n.txt\ny/n.txt\n",
        )

        record = CommitEngine(storage).commit("first")

        assert storage.snapshots[record.fingerprint] == {"n.txt": b"two"}

    def test_nested_layout(self):
        storage = MemoryStorage(
            working={"x/n.txt": b"one", "y/n.txt": b"two"},
            config="alice",
            index="x/n.txt\ny/n.txt\n",
        )
        settings = SvcsSettings(snapshot_layout=SnapshotLayout.NESTED)

        record = CommitEngine(storage, settings).commit("first")

        assert storage.snapshots[record.fingerprint] == {"x/n.txt": b"one", "y/n.txt": b"two"}

    def test_canonical_fingerprint_width(self, storage):
        record = CommitEngine(storage, SvcsSettings(canonical_fingerprint=True)).commit("first")

        assert len(record.fingerprint) == 64


class FailingSnapshotStorage(MemoryStorage):
    def write_snapshot(self, name, files):
        raise StorageFailure("disk full")


def test_failed_snapshot_leaves_log_untouched():
    storage = FailingSnapshotStorage(working={"a.txt": b"hello"}, config="alice", index="a.txt\n")

    with pytest.raises(StorageFailure, match="disk full"):
        CommitEngine(storage).commit("first")

    assert storage.log is None
