#===============================================================================
#  BootWorkspace | tests/test_launcher.py
#===============================================================================

import io
import sys
import threading

import pytest

from bootworkspace.launcher import ProcessLauncher, ProcessSupervisor, looks_like_uri, resolve_target
from bootworkspace.models import AppSpec, LaunchStatus
from bootworkspace.spawner import SubprocessSpawner, build_command

from conftest import FakeProcess, FakeSpawner


@pytest.mark.parametrize("target", ["https://example.com", "ms-teams://", "shell:startup", "SHELL:AppsFolder\\x", "file:///C:/a.txt"])
def test_uri_detection(target):
    assert looks_like_uri(target)


@pytest.mark.parametrize("target", ["C:\\Tools\\a.exe", "/usr/bin/env", "myshell:thing"])
def test_paths_are_not_uris(target):
    assert not looks_like_uri(target)


def test_resolve_target_strips_quotes_and_expands(monkeypatch):
    monkeypatch.setenv("BW_TOOLS", "/opt/tools")
    assert resolve_target('  "%BW_TOOLS%/run.exe" ') == "/opt/tools/run.exe"
    assert resolve_target("%BW_NOT_SET_ANYWHERE%/x") == "%BW_NOT_SET_ANYWHERE%/x"
    assert resolve_target("   ") == ""
    assert resolve_target(None) == ""


@pytest.mark.parametrize("path", ["", "   ", '""'])
def test_no_path_is_skipped(path, run_log):
    spawner = FakeSpawner()
    attempt = ProcessLauncher(spawner, run_log).launch(AppSpec(name="Empty", path=path))
    assert attempt.status is LaunchStatus.SKIPPED_NO_PATH
    assert spawner.spawned == [] and spawner.opened == []


def test_missing_file_is_skipped_and_logged(tmp_path, run_log):
    spawner = FakeSpawner()
    missing = tmp_path / "nope.exe"
    attempt = ProcessLauncher(spawner, run_log).launch(AppSpec(name="Ghost", path=str(missing)))
    assert attempt.status is LaunchStatus.SKIPPED_NOT_FOUND
    assert spawner.spawned == []
    assert f"[SKIP] Not found: {missing}" in run_log.read_text()


def test_uri_goes_to_shell_without_file_check(run_log):
    spawner = FakeSpawner()
    attempt = ProcessLauncher(spawner, run_log).launch(AppSpec(name="Docs", path="https://example.com/does/not/exist"))
    assert attempt.status is LaunchStatus.DONE
    assert attempt.via_shell
    assert spawner.opened == ["https://example.com/does/not/exist"]
    assert spawner.spawned == []


def test_executable_spawned_in_its_folder_with_args(exe_file, run_log):
    spawner = FakeSpawner()
    app = AppSpec(name="Tool", path=f'"{exe_file}"', args='--profile "Work A"')
    attempt = ProcessLauncher(spawner, run_log).launch(app, desktop_index=1)
    assert attempt.status is LaunchStatus.DONE
    assert spawner.spawned == [(str(exe_file), '--profile "Work A"', str(exe_file.parent))]
    assert "Launching 'Tool' on desktop index=1:" in run_log.read_text()


def test_spawn_failure_is_an_error(exe_file, run_log):
    spawner = FakeSpawner(spawn_error=PermissionError("access denied"))
    attempt = ProcessLauncher(spawner, run_log).launch(AppSpec(name="Locked", path=str(exe_file)))
    assert attempt.status is LaunchStatus.ERROR
    assert "access denied" in attempt.detail
    assert "[ERROR] Locked:" in run_log.read_text()


def test_shell_open_failure_is_an_error(run_log):
    class Broken(FakeSpawner):
        def shell_open(self, target):
            raise OSError("no handler")

    attempt = ProcessLauncher(Broken(), run_log).launch(AppSpec(name="Link", path="foo://bar"))
    assert attempt.status is LaunchStatus.ERROR


def test_build_command_posix_and_windows():
    assert build_command("/bin/tool", '-a "b c"', windows=False) == ["/bin/tool", "-a", "b c"]
    assert build_command("/bin/tool", None, windows=False) == ["/bin/tool"]
    assert build_command("C:\\Program Files\\t.exe", "/x  y", windows=True) == '"C:\\Program Files\\t.exe" /x  y'
    assert build_command("C:\\t.exe", "  ", windows=True) == "C:\\t.exe"


def test_supervisor_copies_child_output_to_log(run_log):
    p = FakeProcess()
    p.stdout = io.StringIO("first\n\nsecond\n")
    p.stderr = io.StringIO("boom\n")
    sup = ProcessSupervisor(run_log)
    sup.attach("Child", p)
    assert sup.shutdown(timeout=5) == 0

    text = run_log.read_text()
    assert "[Child] OUT: first" in text
    assert "[Child] OUT: second" in text
    assert "[Child] ERR: boom" in text


def test_supervisor_detaches_readers_that_never_finish(run_log):
    release = threading.Event()

    class Hanging:
        def readline(self):
            release.wait(5)
            return ""

        def close(self):
            pass

    p = FakeProcess()
    p.stdout = Hanging()
    sup = ProcessSupervisor(run_log)
    sup.attach("Server", p)
    try:
        assert sup.shutdown(timeout=0.1) == 1
    finally:
        release.set()
    assert "[INFO] Server still running; output capture detached" in run_log.read_text()


def test_real_child_output_is_captured(run_log):
    app = AppSpec(
        name="child",
        path=sys.executable,
        args="-c \"import sys; print('hello from child'); sys.stderr.write('oops')\"",
    )
    sup = ProcessSupervisor(run_log)
    attempt = ProcessLauncher(SubprocessSpawner(), run_log, sup).launch(app)
    assert attempt.status is LaunchStatus.DONE
    attempt.process.wait(timeout=30)
    sup.shutdown(timeout=10)

    text = run_log.read_text()
    assert "[child] OUT: hello from child" in text
    assert "[child] ERR: oops" in text
