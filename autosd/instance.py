import os
from pathlib import Path

import psutil


def _is_interpreter(arg: str) -> bool:
    return Path(arg).name.startswith("python")


def _is_instance(info: dict, name: str) -> bool:
    if info.get("name") == name:
        return True
    cmdline = info.get("cmdline") or []
    if len(cmdline) < 2 or not _is_interpreter(cmdline[0]):
        return False
    # python /usr/local/bin/autosd
    if Path(cmdline[1]).name == name:
        return True
    # python -m autosd
    return cmdline[1:3] == ["-m", name]


def another_instance_running(name: str = "autosd") -> bool:
    """
    @brief Checks whether another copy of the program is already running.
    @param name The program name to look for.
    @return True if a process other than this one matches.
    """
    own_pids = {os.getpid(), os.getppid()}
    for proc in psutil.process_iter(["pid", "name", "cmdline"]):
        if proc.info["pid"] in own_pids:
            continue
        if _is_instance(proc.info, name):
            return True
    return False
