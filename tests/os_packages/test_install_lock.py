"""
Tests for the cross-process install lock.
"""

import logging
import sys
import threading
import time

import pytest

from osdeps.core.services.osdeps.execution.install_lock import InstallLock, default_lock_path
from osdeps.core.services.osdeps.execution.privileged_runner import execute


class TestInstallLock:
    def test_acquire_release(self, tmp_path):
        lock = InstallLock(path=str(tmp_path / "lock"))
        assert not lock.held
        with lock:
            assert lock.held
            assert (tmp_path / "lock").exists()
        assert not lock.held

    def test_released_on_exception(self, tmp_path):
        path = str(tmp_path / "lock")
        with pytest.raises(RuntimeError):
            with InstallLock(path=path):
                raise RuntimeError("boom")
        # Nobody holds it: a second lock gets it without waiting.
        sleeps = []
        with InstallLock(path=path, sleep=sleeps.append):
            pass
        assert sleeps == []

    def test_waits_while_held(self, tmp_path, caplog):
        path = str(tmp_path / "lock")
        holder = InstallLock(path=path)
        holder.acquire()

        sleeps = []

        def fake_sleep(seconds):
            sleeps.append(seconds)
            holder.release()

        with caplog.at_level(logging.WARNING):
            with InstallLock(path=path, retry_interval=5.0, sleep=fake_sleep) as waiter:
                assert waiter.held

        assert sleeps == [5.0]
        assert "waiting for other osdeps instances" in caplog.text

    def test_release_without_acquire(self, tmp_path):
        InstallLock(path=str(tmp_path / "lock")).release()

    def test_path_from_environment(self, monkeypatch, tmp_path):
        monkeypatch.setenv("OSDEPS_LOCK_PATH", str(tmp_path / "custom.lock"))
        assert default_lock_path() == str(tmp_path / "custom.lock")
        assert InstallLock().path == str(tmp_path / "custom.lock")

    def test_default_path(self, monkeypatch):
        monkeypatch.delenv("OSDEPS_LOCK_PATH", raising=False)
        assert default_lock_path() == "/tmp/osdeps_install.lock"


class TestMutualExclusion:
    def test_locked_commands_never_overlap(self, tmp_path):
        lock_path = str(tmp_path / "lock")
        script = (
            "import sys, time\n"
            "out = open(sys.argv[1], 'a')\n"
            "out.write('start %f\\n' % time.time()); out.flush()\n"
            "time.sleep(0.2)\n"
            "out.write('end %f\\n' % time.time()); out.flush()\n"
        )
        markers = [tmp_path / f"run{i}.log" for i in range(3)]
        results = []

        def run(marker):
            results.append(execute(
                [sys.executable, "-c", script, str(marker)],
                needs_locking=True,
                lock=InstallLock(path=lock_path, retry_interval=0.02, sleep=time.sleep),
            ))

        threads = [threading.Thread(target=run, args=(m,)) for m in markers]
        for t in threads:
            t.start()
        for t in threads:
            t.join(timeout=30)

        assert [r["ok"] for r in results] == [True, True, True]
        intervals = []
        for marker in markers:
            start, end = (float(line.split()[1]) for line in marker.read_text().splitlines())
            intervals.append((start, end))
        intervals.sort()
        for (_, prev_end), (next_start, _) in zip(intervals, intervals[1:]):
            assert prev_end <= next_start
