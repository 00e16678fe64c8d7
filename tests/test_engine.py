"""
Tests for ExecutionEngine — preview vs. apply, independent failures, stop requests.
These tests prevent catastrophic bugs that could cause data loss.
"""
from unittest import mock
from dedupkit.core.engine import ExecutionEngine
from dedupkit.core.models import DedupeParams, DuplicateGroup, Action, RemovalMethod, KeyStrategy
from dedupkit.services.file_service import FileService
from conftest import snapshot


def make_groups(root):
    return [
        DuplicateGroup(key="k1", members=[str(root / "keep1"), str(root / "dup1a"), str(root / "dup1b")]),
        DuplicateGroup(key="k2", members=[str(root / "keep2"), str(root / "dup2")]),
    ]


def write_all(root):
    for name in ("keep1", "dup1a", "dup1b", "keep2", "dup2"):
        (root / name).write_bytes(name.encode())


class TestPreviewMode:

    def test_preview_never_touches_filesystem(self, temp_dir):
        write_all(temp_dir)
        before = snapshot(temp_dir)
        params = DedupeParams(root_path=str(temp_dir), action=Action.DELETE, dry_run=True)

        with mock.patch.object(FileService, "remove") as mock_remove:
            report = ExecutionEngine().execute(make_groups(temp_dir), params)

        mock_remove.assert_not_called()
        assert snapshot(temp_dir) == before
        assert report.preview_mode is True
        assert report.removal_outcomes == []
        assert report.to_delete == 3

    def test_list_action_is_preview(self, temp_dir):
        write_all(temp_dir)
        params = DedupeParams(root_path=str(temp_dir), action=Action.LIST)

        report = ExecutionEngine().execute(make_groups(temp_dir), params)

        assert report.preview_mode is True
        assert report.to_delete == 0
        assert all((temp_dir / n).exists() for n in ("dup1a", "dup1b", "dup2"))

    def test_report_carries_params_and_skipped(self, temp_dir):
        params = DedupeParams(root_path=str(temp_dir), key_strategy=KeyStrategy.NAME)
        report = ExecutionEngine().execute([], params, skipped=["/unreadable"])
        assert report.root_path == str(temp_dir)
        assert report.key_strategy == KeyStrategy.NAME
        assert report.skipped == ["/unreadable"]
        assert report.count == 0


class TestApplyMode:

    def test_removes_all_but_first_member(self, temp_dir):
        write_all(temp_dir)
        params = DedupeParams(root_path=str(temp_dir), action=Action.DELETE)

        report = ExecutionEngine().execute(make_groups(temp_dir), params)

        assert report.preview_mode is False
        assert [o.path for o in report.removal_outcomes] == [
            str(temp_dir / "dup1a"), str(temp_dir / "dup1b"), str(temp_dir / "dup2")
        ]
        assert all(o.removed and o.error is None for o in report.removal_outcomes)
        assert sorted(p.name for p in temp_dir.iterdir()) == ["keep1", "keep2"]

    def test_one_failure_does_not_abort_batch(self, temp_dir):
        """A member deleted externally between planning and execution is reported, the rest still go."""
        write_all(temp_dir)
        (temp_dir / "dup1a").unlink()
        params = DedupeParams(root_path=str(temp_dir), action=Action.DELETE)

        report = ExecutionEngine().execute(make_groups(temp_dir), params)

        outcomes = {o.path: o for o in report.removal_outcomes}
        failed = outcomes[str(temp_dir / "dup1a")]
        assert failed.removed is False
        assert failed.error
        assert outcomes[str(temp_dir / "dup1b")].removed is True
        assert outcomes[str(temp_dir / "dup2")].removed is True
        assert report.removed_count == 2
        assert report.failed_count == 1
        assert not (temp_dir / "dup2").exists()

    def test_uses_configured_removal_method(self, temp_dir):
        params = DedupeParams(root_path=str(temp_dir), action=Action.DELETE, removal_method=RemovalMethod.TRASH)

        with mock.patch.object(FileService, "remove") as mock_remove:
            ExecutionEngine().execute(make_groups(temp_dir), params)

        assert mock_remove.call_count == 3
        assert all(call.args[1] == RemovalMethod.TRASH for call in mock_remove.call_args_list)

    def test_stop_request_prevents_new_removals(self, temp_dir):
        write_all(temp_dir)
        params = DedupeParams(root_path=str(temp_dir), action=Action.DELETE)
        calls = {"n": 0}

        def stop_after_first():
            calls["n"] += 1
            return calls["n"] > 1

        report = ExecutionEngine().execute(make_groups(temp_dir), params, stopped_flag=stop_after_first)

        assert report.interrupted is True
        assert [o.path for o in report.removal_outcomes] == [str(temp_dir / "dup1a")]
        assert not (temp_dir / "dup1a").exists()  # completed removal is not rolled back
        assert (temp_dir / "dup1b").exists()
        assert (temp_dir / "dup2").exists()

    def test_progress_callback(self, temp_dir):
        write_all(temp_dir)
        params = DedupeParams(root_path=str(temp_dir), action=Action.DELETE)
        events = []

        ExecutionEngine().execute(make_groups(temp_dir), params, progress_callback=lambda *e: events.append(e))

        assert events[-1] == ("Removing duplicates", 3, 3)

    def test_no_groups_no_outcomes(self, temp_dir):
        params = DedupeParams(root_path=str(temp_dir), action=Action.DELETE)
        report = ExecutionEngine().execute([], params)
        assert report.removal_outcomes == []
        assert report.preview_mode is False
