import re
from dataclasses import dataclass
from pathlib import Path

from autosd.errors import (
    ConfigError,
    CorruptLineError,
    InsaneValueError,
    MissingParameterError,
    UnknownParameterError,
)

CONFIG_PATH = Path.home() / ".config/autosd/autosd.cfg"

# name -> (lowest, highest) accepted value
PARAMETER_RANGES: dict[str, tuple[int, int]] = {
    "check_interval": (1, 8 * 60),
    "monitor_level": (10, 100),
    "quit_level": (1, 100),
}

_LEADING_INT = re.compile(r"\s*([+-]?[0-9]+)")


@dataclass(frozen=True)
class PowerConfig:
    quit_percent: int
    monitor_percent: int
    poll_interval_seconds: int


def read_config_lines(path: Path) -> list[str]:
    """
    @brief Reads the configuration file and returns its data lines.
    @param path The configuration file path.
    @return The stripped `name=value` lines, comments and blank lines removed.
    @throws ConfigError If the file is missing or unreadable.
    """
    if not path.is_file():
        raise ConfigError(
            f"Configuration file not found at {path} "
            "(copy autosd.cfg.example there and edit it)"
        )
    try:
        content = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e.strerror}") from e
    except UnicodeDecodeError as e:
        raise ConfigError(f"Cannot read {path}: not UTF-8 text ({e.reason} at byte {e.start})") from e

    lines = []
    for raw in content.splitlines():
        line = raw.split("#", 1)[0].strip()
        if line:
            lines.append(line)
    return lines


def split_config_line(line: str) -> tuple[str, str]:
    """
    @brief Splits a `name=value` line.
    @param line The configuration line.
    @return The trimmed name and value.
    @throws CorruptLineError If the line does not hold exactly one '='.
    """
    if line.count("=") != 1:
        raise CorruptLineError(line)
    name, value = line.split("=")
    return name.strip(), value.strip()


def parse_int(value: str) -> int:
    """
    @brief Base-10 conversion that reads the leading number only.
    @param value The text to convert.
    @return The parsed integer, or 0 when the text does not start with one.
    """
    match = _LEADING_INT.match(value)
    return int(match.group(1)) if match else 0


def sanity_check(value: int, low: int, high: int, name: str) -> None:
    if value < low or value > high:
        raise InsaneValueError(name, value)


def parse_config(lines: list[str]) -> PowerConfig:
    """
    @brief Builds a validated PowerConfig from configuration lines.
    @param lines The `name=value` lines, in file order.
    @return The power configuration.
    @throws ConfigError On a corrupt line, unknown name, insane or missing value.
    """
    values: dict[str, int] = {}
    for line in lines:
        name, raw_value = split_config_line(line)
        if name not in PARAMETER_RANGES:
            raise UnknownParameterError(name)
        value = parse_int(raw_value)
        low, high = PARAMETER_RANGES[name]
        sanity_check(value, low, high, name)
        values[name] = value

    missing = [name for name in PARAMETER_RANGES if name not in values]
    if missing:
        raise MissingParameterError(missing)

    return PowerConfig(
        quit_percent=values["quit_level"],
        monitor_percent=values["monitor_level"],
        # given in minutes, slept in seconds
        poll_interval_seconds=values["check_interval"] * 60,
    )


def load_config(path: Path = CONFIG_PATH) -> PowerConfig:
    return parse_config(read_config_lines(path))
