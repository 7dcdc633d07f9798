"""
Line reading and routing for the converters.

The dispatcher owns the run counters and routes every line of the input
stream to either the header hook or the data hook of a converter. It does not
catch anything the hooks raise: a failing hook aborts the run.
"""

from dataclasses import dataclass
from typing import Callable, Iterable, Optional

from loguru import logger

from converters.progress import ProgressReporter

HEADER_PREFIX = "#"


@dataclass
class RunCounters:
    """Counters for one pass over an input stream."""

    line_number: int = 0  # Lines read, header and blank lines included
    row_index: int = 0  # Data lines handed to the data hook


def is_header_line(line: str, prefix: str = HEADER_PREFIX) -> bool:
    """Return True when the line is a header (or shebang style) comment."""
    return line.startswith(prefix)


class RowDispatcher:
    def __init__(
        self,
        header_hook: Callable[[str], None],
        row_hook: Callable[[str], None],
        reporter: Optional[ProgressReporter] = None,
        header_prefix: str = HEADER_PREFIX,
    ) -> None:
        self.header_hook = header_hook
        self.row_hook = row_hook
        self.reporter = reporter if reporter is not None else ProgressReporter()
        self.header_prefix = header_prefix
        self.counters = RunCounters()

    def dispatch(self, lines: Iterable[str]) -> RunCounters:
        """
        Route each line of `lines` to the matching hook, in input order.

        Trailing whitespace (including the newline) is stripped before the
        line is classified and handed over.

        Returns:
            RunCounters: the counters after the stream is exhausted.
        """
        self.reporter.start()
        for raw_line in lines:
            self.counters.line_number += 1
            line = raw_line.rstrip()
            if is_header_line(line, self.header_prefix):
                self.header_hook(line)
            elif line:
                self.counters.row_index += 1
                self.row_hook(line)
                self.reporter.row_dispatched(self.counters.row_index)
            else:
                logger.debug(f"Skipping blank line {self.counters.line_number}")
        self.reporter.finish()
        return self.counters
