from dataclasses import dataclass
from pathlib import Path

import psutil
import pyudev

from autosd.errors import PowerReadError

POWER_SUPPLY_ROOT = Path("/sys/class/power_supply")
AC_ONLINE_PATH = POWER_SUPPLY_ROOT / "AC0/online"
BATTERY_CAPACITY_PATH = POWER_SUPPLY_ROOT / "BAT0/capacity"


@dataclass(frozen=True)
class PowerSample:
    on_battery: bool
    battery_percent: int


class PowerReader:
    """Source of AC and battery readings. Every read failure raises PowerReadError."""

    def read_ac_online(self) -> bool:
        raise NotImplementedError

    def read_battery_percent(self) -> int:
        raise NotImplementedError

    def sample(self) -> PowerSample:
        on_ac = self.read_ac_online()
        percent = self.read_battery_percent()
        return PowerSample(on_battery=not on_ac, battery_percent=percent)


def _read_pseudo_file(path: Path) -> str:
    # stat() sizes are meaningless under /sys, so just read what is there
    try:
        with open(path, encoding="ascii") as f:
            return f.readline()
    except OSError as e:
        raise PowerReadError(f"{path}: {e.strerror}") from e
    except UnicodeDecodeError as e:
        raise PowerReadError(f"{path}: unreadable status value ({e.reason})") from e


class SysfsPowerReader(PowerReader):
    def __init__(self, ac_path: Path = AC_ONLINE_PATH, battery_path: Path = BATTERY_CAPACITY_PATH) -> None:
        self.ac_path = Path(ac_path)
        self.battery_path = Path(battery_path)

    def read_ac_online(self) -> bool:
        """
        @brief Reads the AC adapter state.
        @return False when the supply reports '0', True for anything else.
        @throws PowerReadError If the file is missing, unreadable or empty.
        """
        content = _read_pseudo_file(self.ac_path)
        if not content:
            raise PowerReadError(f"{self.ac_path}: empty status file")
        return content[0] != "0"

    def read_battery_percent(self) -> int:
        """
        @brief Reads the battery charge.
        @return The capacity, clamped to 0-100.
        @throws PowerReadError If the file is missing, unreadable or not a number.
        """
        content = _read_pseudo_file(self.battery_path).strip()
        try:
            percent = int(content, 10)
        except ValueError as e:
            raise PowerReadError(f"{self.battery_path}: not a capacity value: {content!r}") from e
        return max(0, min(100, percent))


def find_power_supplies() -> tuple[Path, Path]:
    """
    @brief Locates the mains adapter and system battery through udev.
    @return The AC `online` path and the battery `capacity` path.
    @throws PowerReadError If either supply cannot be found.
    """
    context = pyudev.Context()
    ac_path: Path | None = None
    battery_path: Path | None = None

    for device in context.list_devices(subsystem="power_supply"):
        supply_type = device.properties.get("POWER_SUPPLY_TYPE", "")
        # mice, keyboards and headsets report their own batteries
        if device.properties.get("POWER_SUPPLY_SCOPE") == "Device":
            continue
        if supply_type == "Mains" and ac_path is None:
            ac_path = Path(device.sys_path) / "online"
        elif supply_type == "Battery" and battery_path is None:
            battery_path = Path(device.sys_path) / "capacity"

    if ac_path is None:
        raise PowerReadError("No mains power supply found by udev")
    if battery_path is None:
        raise PowerReadError("No system battery found by udev")
    return ac_path, battery_path


class UdevPowerReader(SysfsPowerReader):
    def __init__(self) -> None:
        super().__init__(*find_power_supplies())


class PsutilPowerReader(PowerReader):
    def _battery(self):
        battery = psutil.sensors_battery()
        if battery is None:
            raise PowerReadError("No battery reported by the system")
        return battery

    def read_ac_online(self) -> bool:
        plugged = self._battery().power_plugged
        if plugged is None:
            raise PowerReadError("AC adapter state cannot be determined")
        return plugged

    def read_battery_percent(self) -> int:
        return max(0, min(100, int(self._battery().percent)))


POWER_SOURCES = {
    "sysfs": SysfsPowerReader,
    "udev": UdevPowerReader,
    "psutil": PsutilPowerReader,
}


def make_power_reader(source: str, ac_path: Path | None = None, battery_path: Path | None = None) -> PowerReader:
    """
    @brief Builds the power reader for a source name.
    @param source One of POWER_SOURCES.
    @param ac_path Override for the sysfs AC status file.
    @param battery_path Override for the sysfs battery capacity file.
    @return The reader.
    """
    if source == "sysfs":
        return SysfsPowerReader(ac_path or AC_ONLINE_PATH, battery_path or BATTERY_CAPACITY_PATH)
    return POWER_SOURCES[source]()
