"""
Integration tests for DuplicateFinderImpl.
Uses a single hashing worker wherever the choice of original matters,
so the walk order alone decides which copy is kept.
"""
import os
import signal
import threading
import time
import pytest
from pathlib import Path
from fdup.core.engine import DuplicateFinderImpl
from fdup.core.filters import ExtensionFilter
from fdup.core.hasher import HasherImpl
from fdup.core.models import Root, ScanCounters
from fdup.core.removal import RemovalPolicy
from fdup.core.roots import RootSet
from fdup.core.scanner import TreeWalkerImpl


def roots_of(*paths):
    return RootSet([str(p) for p in paths]).roots


class TestDiscoveryMode:
    """No files are touched; every group is reported."""

    def test_groups_follow_walk_order(self, dup_tree):
        finder = DuplicateFinderImpl(workers=1)
        result = finder.find_duplicates(roots_of(dup_tree["root_a"], dup_tree["root_b"]))

        assert [g.files for g in result.groups] == [
            [str(dup_tree["pic"]), str(dup_tree["other"])],
            [str(dup_tree["x"]), str(dup_tree["x_copy"]), str(dup_tree["y"])],
        ]
        assert result.delete is False
        assert result.removed == []
        assert result.stopped is False

    def test_counters(self, dup_tree):
        counters = ScanCounters()
        finder = DuplicateFinderImpl(counters=counters, workers=1)
        result = finder.find_duplicates(roots_of(dup_tree["root_a"], dup_tree["root_b"]))

        progress = result.progress
        assert progress.files_processed == 6
        assert progress.bytes_processed == 1024 * 3 + 2048 * 2 + 1500
        assert progress.duplicates_found == 3
        assert progress.duplicate_bytes == 1024 * 2 + 2048
        assert progress.files_unprocessable == 0
        assert counters.snapshot() == progress

    def test_duplicate_count_matches_groups(self, dup_tree):
        """Every file beyond the first in each group is counted once, whatever the worker count."""
        finder = DuplicateFinderImpl(workers=8)
        result = finder.find_duplicates(roots_of(dup_tree["root_a"], dup_tree["root_b"]))

        assert sum(len(g.duplicates) for g in result.groups) == result.progress.duplicates_found
        all_files = [f for g in result.groups for f in g.files]
        assert len(all_files) == len(set(all_files))
        assert {str(dup_tree["x"]), str(dup_tree["x_copy"]), str(dup_tree["y"])} in \
            [set(g.files) for g in result.groups]

    def test_differing_content_never_grouped(self, dup_tree):
        finder = DuplicateFinderImpl()
        result = finder.find_duplicates(roots_of(dup_tree["root_a"], dup_tree["root_b"]))
        for group in result.groups:
            contents = {Path(f).read_bytes() for f in group.files}
            assert len(contents) == 1
        assert str(dup_tree["unique"]) not in [f for g in result.groups for f in g.files]

    def test_hidden_files_included_on_request(self, dup_tree):
        finder = DuplicateFinderImpl(walker=TreeWalkerImpl(include_hidden=True), workers=1)
        result = finder.find_duplicates(roots_of(dup_tree["root_b"]))

        assert len(result.groups) == 1
        assert set(result.groups[0].files) == {
            str(dup_tree["y"]), str(dup_tree["hidden"]), str(dup_tree["hidden_dir_file"])
        }

    def test_hidden_root_yields_no_groups(self, temp_dir):
        stash = temp_dir / ".stash"
        stash.mkdir()
        (stash / "a").write_bytes(b"same")
        (stash / "b").write_bytes(b"same")

        result = DuplicateFinderImpl(workers=1).find_duplicates(roots_of(stash))
        assert result.groups == []
        assert result.progress.files_processed == 0

    def test_extension_filter(self, dup_tree):
        walker = TreeWalkerImpl(extension_filter=ExtensionFilter(["txt"]))
        result = DuplicateFinderImpl(walker=walker, workers=1).find_duplicates(
            roots_of(dup_tree["root_a"], dup_tree["root_b"])
        )
        assert [g.files for g in result.groups] == [
            [str(dup_tree["x"]), str(dup_tree["x_copy"]), str(dup_tree["y"])]
        ]

    def test_empty_files_are_duplicates_of_each_other(self, temp_dir):
        (temp_dir / "e1").write_bytes(b"")
        (temp_dir / "e2").write_bytes(b"")
        result = DuplicateFinderImpl(workers=1).find_duplicates(roots_of(temp_dir))
        assert [g.files for g in result.groups] == [[str(temp_dir / "e1"), str(temp_dir / "e2")]]
        assert result.progress.duplicate_bytes == 0

    def test_no_duplicates(self, temp_dir):
        (temp_dir / "a").write_bytes(b"1")
        (temp_dir / "b").write_bytes(b"2")
        result = DuplicateFinderImpl().find_duplicates(roots_of(temp_dir))
        assert result.groups == []
        assert not result.has_duplicates


class TestDeletionMode:
    """First copy survives, every later copy is removed or reported."""

    def test_deletes_all_but_first(self, dup_tree):
        finder = DuplicateFinderImpl(removal_policy=RemovalPolicy(), workers=1)
        result = finder.find_duplicates(roots_of(dup_tree["root_a"], dup_tree["root_b"]))

        assert result.delete is True
        assert result.groups == []
        assert set(result.removed) == {str(dup_tree["x_copy"]), str(dup_tree["y"]), str(dup_tree["other"])}
        assert result.unable_to_remove == []
        for key in ("x", "pic", "unique"):
            assert dup_tree[key].exists()
        for key in ("x_copy", "y", "other"):
            assert not dup_tree[key].exists()

    def test_exactly_one_copy_survives_with_many_workers(self, dup_tree):
        finder = DuplicateFinderImpl(removal_policy=RemovalPolicy(), workers=8)
        result = finder.find_duplicates(roots_of(dup_tree["root_a"], dup_tree["root_b"]))

        copies_of_a = [dup_tree[k] for k in ("x", "x_copy", "y")]
        assert sum(p.exists() for p in copies_of_a) == 1
        assert len(result.removed) == result.progress.duplicates_found == 3

    def test_last_root_restriction(self, dup_tree):
        policy = RemovalPolicy(last_root=str(dup_tree["root_b"]))
        finder = DuplicateFinderImpl(removal_policy=policy, workers=1)
        result = finder.find_duplicates(roots_of(dup_tree["root_a"], dup_tree["root_b"]))

        assert set(result.removed) == {str(dup_tree["y"]), str(dup_tree["other"])}
        assert dup_tree["x_copy"].exists()
        # Still counted as a duplicate even though it was left alone
        assert result.progress.duplicates_found == 3

    def test_failed_removal_reported(self, dup_tree):
        def remover(path):
            if os.path.basename(path) == "y.txt":
                raise PermissionError(13, "Permission denied", path)
            os.remove(path)

        finder = DuplicateFinderImpl(removal_policy=RemovalPolicy(remover=remover), workers=1)
        result = finder.find_duplicates(roots_of(dup_tree["root_a"], dup_tree["root_b"]))

        assert result.unable_to_remove == [str(dup_tree["y"])]
        assert str(dup_tree["y"]) not in result.removed
        assert dup_tree["y"].exists()

    def test_second_run_finds_nothing(self, dup_tree):
        roots = roots_of(dup_tree["root_a"], dup_tree["root_b"])
        DuplicateFinderImpl(removal_policy=RemovalPolicy(), workers=4).find_duplicates(roots)

        second = DuplicateFinderImpl(removal_policy=RemovalPolicy(), workers=4).find_duplicates(roots)
        assert second.removed == []
        assert second.progress.duplicates_found == 0


class TestStoppingAndErrors:

    def test_stopped_flag(self, dup_tree):
        finder = DuplicateFinderImpl(workers=2)
        result = finder.find_duplicates(roots_of(dup_tree["root_a"]), stopped_flag=lambda: True)
        assert result.stopped is True
        assert result.progress.files_processed == 0
        assert result.groups == []

    def test_untraversable_root_is_fatal(self, temp_dir):
        missing = Root(path=str(temp_dir / "gone"), order=0)
        with pytest.raises(RuntimeError, match="Not a directory"):
            DuplicateFinderImpl(workers=1).find_duplicates([missing])

    def test_files_queued_before_fatal_root_are_drained(self, temp_dir):
        good = temp_dir / "good"
        good.mkdir()
        (good / "f").write_bytes(b"payload")
        counters = ScanCounters()
        roots = [Root(path=str(good), order=0), Root(path=str(temp_dir / "gone"), order=1)]

        with pytest.raises(RuntimeError):
            DuplicateFinderImpl(counters=counters, workers=1).find_duplicates(roots)
        assert counters.files_processed.value == 1

    def test_keyboard_interrupt_propagates(self, dup_tree, monkeypatch):
        finder = DuplicateFinderImpl(workers=1)

        def interrupted_walk(root, stopped_flag=None):
            raise KeyboardInterrupt

        monkeypatch.setattr(finder.walker, "walk", interrupted_walk)
        with pytest.raises(KeyboardInterrupt):
            finder.find_duplicates(roots_of(dup_tree["root_a"]))

    @pytest.mark.skipif(not hasattr(signal, "pthread_kill"), reason="Needs POSIX thread signals")
    def test_interrupt_while_draining_stops_workers(self, temp_dir):
        """
        Ctrl+C usually arrives after the walk, while queued files are still hashing.
        Queued files must be skipped and no worker may outlive the call.
        """
        for i in range(20):
            (temp_dir / f"f{i:02d}").write_bytes(b"same content")
        main_thread_id = threading.main_thread().ident
        calls = []

        class SlowHasher(HasherImpl):
            def compute_digest(self, path):
                calls.append(path)
                if len(calls) == 3:
                    signal.pthread_kill(main_thread_id, signal.SIGINT)
                time.sleep(0.05)
                return super().compute_digest(path)

        counters = ScanCounters()
        finder = DuplicateFinderImpl(
            hasher=SlowHasher(), removal_policy=RemovalPolicy(), counters=counters, workers=1
        )
        with pytest.raises(KeyboardInterrupt):
            finder.find_duplicates(roots_of(temp_dir))

        assert [t for t in threading.enumerate() if t.name.startswith("fdup-hasher")] == []
        processed = counters.files_processed.value
        remaining = len(list(temp_dir.iterdir()))
        assert processed < 20
        assert remaining > 1

        time.sleep(0.2)
        assert counters.files_processed.value == processed
        assert len(list(temp_dir.iterdir())) == remaining
