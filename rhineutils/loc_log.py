"""Name lookups and time strings used in location service log messages."""

from __future__ import annotations

import time

from rhineutils.loc_target import GnssTarget, SscType, target_gnss_type
from rhineutils.msg_q import MsgQStatus

UNKNOWN_STR = "UNKNOWN"

MSG_Q_STATUS_NAMES = tuple((f"eMSG_Q_{status.name}", int(status)) for status in MsgQStatus)

TARGET_NAMES = tuple((f"GNSS_{gnss.name}", int(gnss)) for gnss in GnssTarget)


def name_from_mask(table, mask):
    """Return the name of the first (name, value) entry sharing a bit with mask."""
    for name, value in table:
        if value & int(mask):
            return name
    return UNKNOWN_STR


def name_from_val(table, value):
    """Return the name of the first (name, value) entry equal to value."""
    for name, entry_value in table:
        if entry_value == int(value):
            return name
    return UNKNOWN_STR


def msg_q_status_name(status):
    """Return the symbolic name of a message queue status code."""
    return name_from_val(MSG_Q_STATUS_NAMES, status)


def succ_fail_string(is_succ):
    """Return "successful" or "failed"."""
    return "successful" if is_succ else "failed"


def target_name(target):
    """Describe a target code by its GNSS type and whether it has an SSC."""
    target = int(target)
    index = target_gnss_type(target)
    if index >= len(TARGET_NAMES) or index < 0:
        index = len(TARGET_NAMES) - 1
    name = name_from_val(TARGET_NAMES, index)
    if target & SscType.HAS_SSC == SscType.HAS_SSC:
        return f" {name} with SSC"
    return f" {name}  without SSC"


def get_time(now=None):
    """Format a time in seconds since the epoch as local HH:MM:SS.mmm."""
    if now is None:
        now = time.time()
    total_us = int(round(now * 1_000_000))
    seconds, usec = divmod(total_us, 1_000_000)
    hms = time.strftime("%H:%M:%S", time.localtime(seconds))
    return f"{hms}.{usec // 1000:03d}"