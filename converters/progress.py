import time

from loguru import logger

from converters.errors import ConfigurationError

DEFAULT_PROGRESS_INTERVAL = 10  # Data rows between two running time lines


class ProgressReporter:
    """Logs the wall-clock time elapsed since the input stream was opened."""

    def __init__(self, interval=DEFAULT_PROGRESS_INTERVAL):
        if interval is not None and interval < 0:
            raise ConfigurationError(
                f"Progress interval must be zero or positive, got {interval}."
            )
        self.interval = interval
        self.start_time = None

    def start(self):
        self.start_time = time.time()

    def elapsed(self):
        if self.start_time is None:
            return 0.0
        return time.time() - self.start_time

    def row_dispatched(self, row_index):
        if self.interval and row_index % self.interval == 0:
            logger.info(
                f"============ running time: {self.elapsed():.3f}s "
                f"({row_index} rows) ============"
            )

    def finish(self):
        logger.info(
            f"============ running time total: {self.elapsed():.3f}s ============"
        )
