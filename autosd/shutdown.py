import subprocess
import sys

from autosd.errors import ShutdownError

SHUTDOWN_COMMANDS: dict[str, list[str]] = {
    "shutdown": ["shutdown", "-h", "now"],
    "systemctl": ["systemctl", "poweroff"],
}


def send_notification(message: str, timeout: int = 10000) -> None:
    """
    @brief Sends a critical desktop notification.
    @param message The notification message.
    @param timeout The notification timeout in milliseconds.
    """
    try:
        subprocess.run(["notify-send", "-u", "critical", "-t", str(timeout), "autosd", message], check=True)
    except (subprocess.CalledProcessError, OSError) as e:
        print(f"Failed to send notification: {e}", file=sys.stderr)


class ShutdownTrigger:
    def request_shutdown(self) -> None:
        raise NotImplementedError


class CommandShutdown(ShutdownTrigger):
    """Powers the host off by running a privileged command."""

    def __init__(self, command: list[str]) -> None:
        self.command = command

    def request_shutdown(self) -> None:
        """
        @brief Runs the shutdown command once.
        @throws ShutdownError If the command is missing or fails.
        """
        try:
            subprocess.run(self.command, check=True)
        except subprocess.CalledProcessError as e:
            raise ShutdownError(f"'{' '.join(self.command)}' failed with status {e.returncode}") from e
        except OSError as e:
            raise ShutdownError(f"Cannot run '{self.command[0]}': {e.strerror}") from e


class FakeShutdown(ShutdownTrigger):
    def request_shutdown(self) -> None:
        print("fake shutdown.")


def make_shutdown_trigger(method: str) -> ShutdownTrigger:
    if method == "dry-run":
        return FakeShutdown()
    return CommandShutdown(SHUTDOWN_COMMANDS[method])
