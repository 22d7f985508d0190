"""Leveled logging governed by a numeric DEBUG_LEVEL setting.

A debug level of 0xFF (the default) means "no level configured": every
message is passed on at its natural severity.  A level between 1 and 5
enables messages up to that severity and reports all of them as errors,
so they show up regardless of the host's log filtering.  Any other level
silences everything.
"""

from __future__ import annotations

import logging
import time

DEFAULT_DEBUG_LEVEL = 0xFF

VERBOSE = 5
logging.addLevelName(VERBOSE, "VERBOSE")

SEVERITY_ERROR = 1
SEVERITY_WARNING = 2
SEVERITY_INFO = 3
SEVERITY_DEBUG = 4
SEVERITY_VERBOSE = 5

BOOL_STR = ("False", "True")
VOID_RET = "None"
FROM_AFW = "===>"
TO_MODEM = "--->"
FROM_MODEM = "<---"
TO_AFW = "<==="
EXIT_TAG = "Exiting"
ENTRY_TAG = "Entering"

# severity -> (natural logging level, message prefix)
_SEVERITIES = {
    SEVERITY_ERROR: (logging.ERROR, "W/"),
    SEVERITY_WARNING: (logging.WARNING, "W/"),
    SEVERITY_INFO: (logging.INFO, "I/"),
    SEVERITY_DEBUG: (logging.DEBUG, "D/"),
    SEVERITY_VERBOSE: (VERBOSE, "V/"),
}


def get_timestamp(now=None):
    """Format a time in seconds since the epoch as HH:MM:SS.uuuuuu (UTC)."""
    if now is None:
        now = time.time()
    total_us = int(round(now * 1_000_000))
    seconds, usec = divmod(total_us, 1_000_000)
    hh = seconds // 3600 % 24
    mm = seconds % 3600 // 60
    ss = seconds % 60
    return f"{hh:02d}:{mm:02d}:{ss:02d}.{usec:06d}"


class LocLogger:
    """A logger filtered by a DEBUG_LEVEL and optionally timestamping traces."""

    def __init__(self, name="rhineutils", debug_level=DEFAULT_DEBUG_LEVEL, timestamp=0):
        self._logger = logging.getLogger(name)
        self.debug_level = debug_level
        self.timestamp = timestamp

    def configure(self, debug_level, timestamp):
        """Set the debug level and the timestamp flag."""
        self.debug_level = debug_level
        self.timestamp = timestamp

    def emit_level(self, severity):
        """Return the logging level a message of this severity goes out at, or None."""
        try:
            natural, _ = _SEVERITIES[severity]
        except KeyError:
            raise ValueError(f"unknown severity: {severity!r}") from None
        if severity <= self.debug_level <= SEVERITY_VERBOSE:
            return logging.ERROR
        if self.debug_level == DEFAULT_DEBUG_LEVEL:
            return natural
        return None

    def _emit(self, severity, msg, args):
        level = self.emit_level(severity)
        if level is None:
            return False
        prefix = _SEVERITIES[severity][1]
        self._logger.log(level, prefix + msg, *args)
        return True

    def error(self, msg, *args):
        """Log an error; return whether it was emitted."""
        return self._emit(SEVERITY_ERROR, msg, args)

    def warning(self, msg, *args):
        """Log a warning; return whether it was emitted."""
        return self._emit(SEVERITY_WARNING, msg, args)

    def info(self, msg, *args):
        """Log an informational message; return whether it was emitted."""
        return self._emit(SEVERITY_INFO, msg, args)

    def debug(self, msg, *args):
        """Log a debug message; return whether it was emitted."""
        return self._emit(SEVERITY_DEBUG, msg, args)

    def verbose(self, msg, *args):
        """Log a verbose message; return whether it was emitted."""
        return self._emit(SEVERITY_VERBOSE, msg, args)

    def trace(self, tag, what, value):
        """Log a call-flow line at info severity and return its text."""
        body = f"{tag} {what} {value}"
        msg = f"[{get_timestamp()}] {body}" if self.timestamp else body
        self._emit(SEVERITY_INFO, "%s", (msg,))
        return msg


loc_logger = LocLogger()


def logger_init(debug, timestamp):
    """Configure the shared logger and return it."""
    loc_logger.configure(debug, timestamp)
    return loc_logger