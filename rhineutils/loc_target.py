"""Detection of the GNSS hardware target of the device."""

from __future__ import annotations

import time
from enum import IntEnum
from pathlib import Path

from rhineutils.log_util import loc_logger


class GnssTarget(IntEnum):
    """Kind of GNSS engine present on the device."""

    NONE = 0
    MSM = 1
    GSS = 2
    MDM = 3
    QCA1530 = 4
    UNKNOWN = 5


class SscType(IntEnum):
    """Whether a sensor subsystem core is present."""

    NO_SSC = 0
    HAS_SSC = 1


def target_set(gnss, ssc):
    """Combine a GNSS type and an SSC flag into a target code."""
    return (int(gnss) << 1) | int(ssc)


def target_gnss_type(target):
    """Return the GNSS type part of a target code."""
    return int(target) >> 1


TARGET_DEFAULT = target_set(GnssTarget.MSM, SscType.HAS_SSC)
TARGET_MDM = target_set(GnssTarget.MDM, SscType.HAS_SSC)
TARGET_APQ_SA = target_set(GnssTarget.GSS, SscType.NO_SSC)
TARGET_MPQ = target_set(GnssTarget.NONE, SscType.NO_SSC)
TARGET_MSM_NO_SSC = target_set(GnssTarget.MSM, SscType.NO_SSC)
TARGET_QCA1530 = target_set(GnssTarget.QCA1530, SscType.NO_SSC)
TARGET_UNKNOWN = target_set(GnssTarget.UNKNOWN, SscType.NO_SSC)
# Reported when a board looks like an MDM platform but has no modem device.
TARGET_UNDETECTED = 0xFFFFFFFF

APQ8064_ID_1 = "109"
APQ8064_ID_2 = "153"
MPQ8064_ID_1 = "130"
MSM8930_ID_1 = "142"
MSM8930_ID_2 = "116"
APQ8030_ID_1 = "157"
APQ8074_ID_1 = "184"

LINE_LEN = 100
STR_LIQUID = "Liquid"
STR_SURF = "Surf"
STR_MTP = "MTP"
STR_APQ = "apq"

QCA1530_PROPERTY = "persist.qca1530"
QCA1530_DETECT_TIMEOUT = 30
QCA1530_DETECT_PRESENT = "yes"
QCA1530_DETECT_PROGRESS = "detect"

HW_PLATFORM = "/sys/devices/soc0/hw_platform"
SOC_ID = "/sys/devices/soc0/soc_id"
HW_PLATFORM_DEP = "/sys/devices/system/soc/soc0/hw_platform"
SOC_ID_DEP = "/sys/devices/system/soc/soc0/id"
MDM_DEVICE = "/dev/mdm"


def read_a_line(path, line_size=LINE_LEN):
    """Return the first line of a file, at most line_size - 1 characters long.

    The line keeps its newline if it fits. Raises OSError if the file
    cannot be read.
    """
    try:
        with open(path, encoding="utf-8", errors="replace") as handle:
            line = handle.readline(max(line_size - 1, 0))
    except OSError as exc:
        loc_logger.error("open failed: %s: %s", path, exc.strerror or exc)
        raise
    loc_logger.debug("cat %s: %s", path, line)
    return line


def _is_token(text, token):
    """True if text starts with token followed by end of string or line."""
    if not text.startswith(token):
        return False
    return len(text) == len(token) or text[len(token)] in "\n\r\0"


def _no_properties(name, default):
    return default


class TargetDetector:
    """Works out the target code from system properties and sysfs files.

    get_property(name, default) returns a property's value; it may raise
    OSError when properties cannot be read. root is the directory that
    the absolute system paths are resolved against.
    """

    def __init__(self, root="/", get_property=None, sleep=time.sleep,
                 detect_timeout=QCA1530_DETECT_TIMEOUT):
        self.root = Path(root)
        self._get_property = get_property or _no_properties
        self._sleep = sleep
        self.detect_timeout = detect_timeout
        self._target = None

    def _path(self, system_path):
        return self.root / system_path.lstrip("/")

    def _read(self, system_path):
        try:
            return read_a_line(self._path(system_path))
        except OSError:
            return ""

    def is_qca1530(self):
        """Return whether the QCA1530 SoC is configured, waiting out detection."""
        present = False
        for _ in range(self.detect_timeout):
            try:
                value = self._get_property(QCA1530_PROPERTY, None)
            except OSError as exc:
                loc_logger.verbose("qca1530: property %s is not accessible: %s",
                                   QCA1530_PROPERTY, exc)
                break
            value = value or ""
            loc_logger.verbose("qca1530: property %s is set to %s", QCA1530_PROPERTY, value)
            if value == QCA1530_DETECT_PRESENT:
                present = True
                break
            if value == QCA1530_DETECT_PROGRESS:
                loc_logger.verbose("qca1530: SoC detection is in progress.")
                self._sleep(1)
                continue
            break
        loc_logger.debug("qca1530: detected=%s", "true" if present else "false")
        return present

    def detect(self):
        """Return the target code, computing it on first success."""
        if self._target is not None:
            return self._target
        target = self._probe()
        if target != TARGET_UNDETECTED:
            self._target = target
        loc_logger.debug("HAL: detect returned %d", target)
        return target

    def _probe(self):
        if self.is_qca1530():
            return TARGET_QCA1530

        baseband = self._get_property("ro.baseband", "") or ""
        if self._path(HW_PLATFORM).exists():
            hw_platform = self._read(HW_PLATFORM)
        else:
            hw_platform = self._read(HW_PLATFORM_DEP)
        if self._path(SOC_ID).exists():
            soc_id = self._read(SOC_ID)
        else:
            soc_id = self._read(SOC_ID_DEP)

        if baseband.startswith(STR_APQ):
            if _is_token(soc_id, MPQ8064_ID_1):
                return TARGET_MPQ
            return TARGET_APQ_SA

        if any(_is_token(hw_platform, name) for name in (STR_LIQUID, STR_SURF, STR_MTP)):
            try:
                read_a_line(self._path(MDM_DEVICE))
            except OSError:
                return TARGET_UNDETECTED
            return TARGET_MDM
        if _is_token(soc_id, MSM8930_ID_1) or _is_token(soc_id, MSM8930_ID_2):
            return TARGET_MSM_NO_SSC
        return TARGET_UNKNOWN