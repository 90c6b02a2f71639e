import time
from collections.abc import Callable

from autosd.config import PowerConfig
from autosd.power import PowerReader
from autosd.shutdown import ShutdownTrigger


def check_power_status(
    reader: PowerReader,
    config: PowerConfig,
    trigger: ShutdownTrigger,
    monitor: bool = False,
    sleep: Callable[[float], None] = time.sleep,
    notify: Callable[[str], None] | None = None,
) -> str:
    """
    @brief Polls the power supply while on battery and shuts down below the quit level.
    @param reader The power state reader.
    @param config The validated configuration.
    @param trigger The shutdown strategy.
    @param monitor Keep polling above the monitor level and print each reading.
    @param sleep The function used to wait between samples.
    @param notify Called with a warning message before the shutdown request.
    @return "on_ac" when mains power is (or comes back) online, "charged" when
            the battery is above the monitor level outside monitor mode, or
            "shutdown" once the shutdown has been requested.
    @throws PowerReadError If a reading fails.
    @throws ShutdownError If the shutdown request fails.
    """
    sample = reader.sample()
    while sample.on_battery:
        percent = sample.battery_percent
        if percent < config.quit_percent:
            if notify is not None:
                notify(f"Battery at {percent}%, shutting down now.")
            trigger.request_shutdown()
            return "shutdown"
        if percent > config.monitor_percent and not monitor:
            # leave the next check to the scheduler
            return "charged"
        if monitor:
            print(f"Battery percentage: {percent}")
        sleep(config.poll_interval_seconds)
        sample = reader.sample()

    if monitor:
        print("AC power online.")
    return "on_ac"
