import os
from types import SimpleNamespace

from autosd import instance
from autosd.instance import another_instance_running


def _proc(pid: int, name: str, cmdline: list[str] | None) -> SimpleNamespace:
    return SimpleNamespace(info={"pid": pid, "name": name, "cmdline": cmdline})


def _fake_processes(monkeypatch, procs: list) -> None:
    monkeypatch.setattr(instance.psutil, "process_iter", lambda attrs: iter(procs))


def test_no_other_instance(monkeypatch) -> None:
    _fake_processes(monkeypatch, [
        _proc(1, "systemd", ["/sbin/init"]),
        _proc(os.getpid(), "autosd", ["/usr/bin/python3", "/usr/local/bin/autosd"]),
        _proc(4321, "bash", None),
    ])

    assert another_instance_running() is False


def test_instance_found_by_name(monkeypatch) -> None:
    _fake_processes(monkeypatch, [_proc(999999, "autosd", [])])

    assert another_instance_running() is True


def test_instance_found_by_script_path(monkeypatch) -> None:
    _fake_processes(monkeypatch, [_proc(999999, "python3", ["/usr/bin/python3", "/home/bob/.local/bin/autosd", "-m"])])

    assert another_instance_running() is True


def test_instance_found_as_module(monkeypatch) -> None:
    _fake_processes(monkeypatch, [_proc(999999, "python3", ["python3", "-m", "autosd", "--monitor"])])

    assert another_instance_running() is True


def test_similar_names_do_not_match(monkeypatch) -> None:
    _fake_processes(monkeypatch, [_proc(999999, "vim", ["vim", "autosd.cfg"])])

    assert another_instance_running() is False


def test_parent_shell_is_ignored(monkeypatch) -> None:
    _fake_processes(monkeypatch, [_proc(os.getppid(), "sh", ["/bin/sh", "-c", "autosd"])])

    assert another_instance_running() is False


def test_editor_on_project_directory_is_not_an_instance(monkeypatch) -> None:
    _fake_processes(monkeypatch, [
        _proc(999998, "code", ["/usr/bin/code", "/home/bob/src/autosd"]),
        _proc(999999, "bash", ["bash", "/home/bob/bin/autosd"]),
    ])

    assert another_instance_running() is False


def test_python_running_something_else_is_not_an_instance(monkeypatch) -> None:
    _fake_processes(monkeypatch, [_proc(999999, "python3", ["python3", "-m", "pytest", "/home/bob/src/autosd"])])

    assert another_instance_running() is False
