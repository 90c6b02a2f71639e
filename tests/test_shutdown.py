import subprocess

import pytest

from autosd import shutdown
from autosd.errors import ShutdownError
from autosd.shutdown import CommandShutdown, FakeShutdown, make_shutdown_trigger, send_notification


def test_command_shutdown_runs_command(monkeypatch) -> None:
    calls: list = []
    monkeypatch.setattr(subprocess, "run", lambda cmd, check: calls.append((cmd, check)))

    CommandShutdown(["shutdown", "-h", "now"]).request_shutdown()

    assert calls == [(["shutdown", "-h", "now"], True)]


def test_command_shutdown_failure(monkeypatch) -> None:
    def _run(cmd, check):
        raise subprocess.CalledProcessError(1, cmd)

    monkeypatch.setattr(subprocess, "run", _run)

    with pytest.raises(ShutdownError, match="status 1"):
        CommandShutdown(["systemctl", "poweroff"]).request_shutdown()


def test_command_shutdown_missing_binary(monkeypatch) -> None:
    def _run(cmd, check):
        raise FileNotFoundError(2, "No such file or directory")

    monkeypatch.setattr(subprocess, "run", _run)

    with pytest.raises(ShutdownError, match="Cannot run 'shutdown'"):
        CommandShutdown(["shutdown", "-h", "now"]).request_shutdown()


def test_fake_shutdown_only_prints(capsys) -> None:
    FakeShutdown().request_shutdown()

    assert capsys.readouterr().out == "fake shutdown.\n"


@pytest.mark.parametrize(
    "method, command",
    [("shutdown", ["shutdown", "-h", "now"]), ("systemctl", ["systemctl", "poweroff"])],
)
def test_make_shutdown_trigger(method: str, command: list[str]) -> None:
    trigger = make_shutdown_trigger(method)

    assert isinstance(trigger, CommandShutdown)
    assert trigger.command == command


def test_make_shutdown_trigger_dry_run() -> None:
    assert isinstance(make_shutdown_trigger("dry-run"), FakeShutdown)


def test_send_notification(monkeypatch) -> None:
    calls: list = []
    monkeypatch.setattr(shutdown.subprocess, "run", lambda cmd, check: calls.append(cmd))

    send_notification("Battery at 4%", timeout=3000)

    assert calls == [["notify-send", "-u", "critical", "-t", "3000", "autosd", "Battery at 4%"]]


def test_send_notification_failure_is_only_a_warning(monkeypatch, capsys) -> None:
    def _run(cmd, check):
        raise FileNotFoundError(2, "No such file or directory")

    monkeypatch.setattr(shutdown.subprocess, "run", _run)

    send_notification("Battery at 4%")

    assert "Failed to send notification" in capsys.readouterr().err
