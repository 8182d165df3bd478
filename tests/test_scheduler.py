"""Tests for background reconciliation."""

import asyncio

import pytest

pytestmark = pytest.mark.unit

from docsync.services.sync import PeriodicReconciler, SyncEngine


class FailingEngine:
    def __init__(self):
        self.calls = 0

    def reconcile(self):
        self.calls += 1
        raise OSError("disk on fire")


async def _run_for(reconciler, seconds):
    reconciler.start()
    assert reconciler.running
    await asyncio.sleep(seconds)
    await reconciler.stop()


class TestPeriodicReconciler:
    """Test the reconciler lifecycle."""

    def test_rejects_non_positive_interval(self, workspace):
        with pytest.raises(ValueError):
            PeriodicReconciler(SyncEngine(workspace), 0)

    def test_picks_up_files_in_background(self, workspace, files):
        reconciler = PeriodicReconciler(SyncEngine(workspace), 0.02)
        files.drop(workspace.documents_dir, "late.md", "# Late Arrival\n")

        asyncio.run(_run_for(reconciler, 0.3))

        assert reconciler.passes >= 1
        assert not reconciler.running
        assert workspace.index.get("late.md").title == "Late Arrival"

    def test_failed_pass_does_not_stop_schedule(self):
        engine = FailingEngine()
        reconciler = PeriodicReconciler(engine, 0.02)

        asyncio.run(_run_for(reconciler, 0.3))

        assert engine.calls >= 2

    def test_stop_without_start(self, workspace):
        reconciler = PeriodicReconciler(SyncEngine(workspace), 1)
        asyncio.run(reconciler.stop())
        assert not reconciler.running
