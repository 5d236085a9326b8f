#===============================================================================
#  BootWorkspace | tests/test_waits.py
#===============================================================================

import threading
import time

from bootworkspace.waits import pause, wait_for_window

from conftest import FakeProcess, FakeSpawner

SLACK_S = 0.25


def test_no_process_returns_immediately(run_log):
    spawner = FakeSpawner()
    assert wait_for_window(spawner, None, "Web", 1000, run_log) is False
    assert spawner.idle_calls == []
    assert run_log.read_text() == ""


def test_input_idle_is_enough(run_log):
    spawner = FakeSpawner(idle=True)
    p = FakeProcess()
    assert wait_for_window(spawner, p, "Mail", 45_000, run_log) is True
    assert spawner.idle_calls == [8000]
    assert p.window_polls == 0


def test_idle_wait_capped_by_timeout(run_log):
    spawner = FakeSpawner(idle=True)
    wait_for_window(spawner, FakeProcess(), "Mail", 1200, run_log)
    assert spawner.idle_calls == [1200]


def test_polls_for_window_when_idle_unavailable(run_log):
    spawner = FakeSpawner(idle=None, window_after=2)
    p = FakeProcess()
    assert wait_for_window(spawner, p, "Mail", 5000, run_log, poll_ms=10) is True
    assert p.window_polls == 3
    assert "[WARN]" not in run_log.read_text()


def test_polls_after_idle_timeout(run_log):
    spawner = FakeSpawner(idle=False, window_after=1)
    assert wait_for_window(spawner, FakeProcess(), "Mail", 5000, run_log, poll_ms=10) is True


def test_timeout_without_window_logs_warning(run_log):
    spawner = FakeSpawner(idle=None)
    start = time.monotonic()
    assert wait_for_window(spawner, FakeProcess(), "Slowpoke", 100, run_log) is False
    elapsed = time.monotonic() - start

    assert elapsed <= 0.1 + SLACK_S
    assert "[WARN] Slowpoke window not detected within 100ms" in run_log.read_text()


def test_never_exceeds_timeout(run_log):
    spawner = FakeSpawner(idle=None)
    start = time.monotonic()
    wait_for_window(spawner, FakeProcess(), "Slowpoke", 300, run_log, poll_ms=150)
    assert time.monotonic() - start <= 0.3 + SLACK_S


def test_exited_process_stops_polling(run_log):
    p = FakeProcess()
    p.running = False
    start = time.monotonic()
    assert wait_for_window(FakeSpawner(idle=None), p, "Oneshot", 10_000, run_log) is False
    assert time.monotonic() - start < 1.0
    assert "[WARN] Oneshot exited before a window was detected" in run_log.read_text()


def test_never_raises(run_log):
    class Broken(FakeSpawner):
        def main_window_handle(self, process):
            raise RuntimeError("enum failed")

    assert wait_for_window(Broken(idle=None), FakeProcess(), "Odd", 1000, run_log) is False
    assert "[WARN] Odd window wait failed: enum failed" in run_log.read_text()


def test_cancel_interrupts_polling(run_log):
    cancel = threading.Event()
    threading.Timer(0.05, cancel.set).start()
    start = time.monotonic()
    assert wait_for_window(FakeSpawner(idle=None), FakeProcess(), "Mail", 10_000, run_log, cancel=cancel) is False
    assert time.monotonic() - start < 1.0


def test_pause_reports_cancel():
    cancel = threading.Event()
    assert pause(0.01, cancel) is False
    cancel.set()
    assert pause(5, cancel) is True
    assert pause(0) is False
