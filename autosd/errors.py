class AutosdError(Exception):
    """Base class for every error that ends the program."""


class ConfigError(AutosdError):
    """The configuration file is missing, unreadable or invalid."""


class CorruptLineError(ConfigError):
    def __init__(self, line: str) -> None:
        super().__init__(f"Corrupt config line: {line}")
        self.line = line


class UnknownParameterError(ConfigError):
    def __init__(self, name: str) -> None:
        super().__init__(f"Unknown parameter name in config file: {name}")
        self.name = name


class InsaneValueError(ConfigError):
    def __init__(self, name: str, value: int) -> None:
        super().__init__(f"Insane value for '{name}' in config file.")
        self.name = name
        self.value = value


class MissingParameterError(ConfigError):
    def __init__(self, names: list[str]) -> None:
        super().__init__(f"Missing required parameter(s) in config file: {', '.join(names)}")
        self.names = names


class PowerReadError(AutosdError):
    """A power supply status could not be read."""


class ShutdownError(AutosdError):
    """The shutdown request could not be issued."""
