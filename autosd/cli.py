import argparse
import platform
import sys
from pathlib import Path

from autosd import __version__
from autosd.config import CONFIG_PATH, load_config
from autosd.errors import AutosdError
from autosd.instance import another_instance_running
from autosd.monitor import check_power_status
from autosd.power import POWER_SOURCES, make_power_reader
from autosd.shutdown import SHUTDOWN_COMMANDS, make_shutdown_trigger, send_notification


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="autosd",
        description="Shut the machine down before the battery runs flat.",
        epilog="Run it from cron every few minutes, or with --monitor to watch "
               "readings while choosing the levels in the config file.",
    )
    parser.add_argument("-m", "--monitor", action="store_true",
                        help="keep polling while on battery and print each reading")
    parser.add_argument("-c", "--config", type=Path, default=CONFIG_PATH,
                        help=f"configuration file (default: {CONFIG_PATH})")
    parser.add_argument("--source", choices=sorted(POWER_SOURCES), default="sysfs",
                        help="where power readings come from (default: sysfs)")
    parser.add_argument("--ac", type=Path, help="sysfs AC 'online' file (sysfs source only)")
    parser.add_argument("--battery", type=Path, help="sysfs battery 'capacity' file (sysfs source only)")
    parser.add_argument("--shutdown", choices=[*SHUTDOWN_COMMANDS, "dry-run"], default="shutdown",
                        help="how to power off (default: shutdown -h now)")
    parser.add_argument("-n", "--notify", action="store_true",
                        help="send a desktop notification before shutting down")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv: list[str] | None = None) -> int:
    """
    @brief Main function.
    @param argv Command line arguments, sys.argv when None.
    @return The process exit status.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.source != "sysfs" and (args.ac or args.battery):
        parser.error(f"--ac and --battery only apply to the sysfs source, not {args.source}")

    if platform.system() != "Linux":
        print("This script is designed for Linux systems.", file=sys.stderr)
        return 1

    if another_instance_running():
        return 0

    try:
        config = load_config(args.config)
        reader = make_power_reader(args.source, args.ac, args.battery)
        trigger = make_shutdown_trigger(args.shutdown)
        check_power_status(
            reader,
            config,
            trigger,
            monitor=args.monitor,
            notify=send_notification if args.notify else None,
        )
    except AutosdError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("\nStopping autosd...")
        return 0
    return 0


if __name__ == "__main__":
    sys.exit(main())
