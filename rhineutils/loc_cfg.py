"""Reading NAME=value configuration files into a table of parameters."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum

from rhineutils.log_util import DEFAULT_DEBUG_LEVEL, loc_logger, logger_init

LOC_MAX_PARAM_NAME = 48
LOC_MAX_PARAM_STRING = 80
LOC_MAX_PARAM_LINE = 80

_WS = " \t\n\v\f\r"
_HEX_RE = re.compile(r"[ \t\n\v\f\r]*([+-]?)(?:0[xX](?=[0-9a-fA-F]))?([0-9a-fA-F]*)")
_INT_RE = re.compile(r"[ \t\n\v\f\r]*([+-]?\d+)")
_FLOAT_RE = re.compile(
    r"[ \t\n\v\f\r]*([+-]?(?:(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|inf(?:inity)?|nan))",
    re.IGNORECASE,
)


class ParamType(Enum):
    """Kind of value a parameter holds."""

    NUMBER = "n"
    STRING = "s"
    FLOAT = "f"


@dataclass
class ConfigValue:
    """One NAME=value pair parsed from a configuration line."""

    name: str
    str_value: str
    int_value: int = 0
    double_value: float = 0.0


_DEFAULTS = {ParamType.NUMBER: 0, ParamType.STRING: "", ParamType.FLOAT: 0.0}


@dataclass
class ConfigParam:
    """A named parameter that a configuration file may set."""

    name: str
    param_type: ParamType
    value: object = None
    is_set: bool = False

    def __post_init__(self):
        self.param_type = ParamType(self.param_type)
        if self.value is None:
            self.value = _DEFAULTS[self.param_type]

    def apply(self, value):
        """Take the value if its name matches this parameter; return whether it did."""
        if value.name != self.name:
            return False
        if self.param_type is ParamType.STRING:
            if value.str_value == "NULL":
                self.value = ""
            else:
                self.value = value.str_value[:LOC_MAX_PARAM_STRING]
            loc_logger.debug("PARAM %s = %s", self.name, self.value)
        elif self.param_type is ParamType.NUMBER:
            self.value = value.int_value
            loc_logger.debug("PARAM %s = %d", self.name, self.value)
        else:
            self.value = value.double_value
            loc_logger.debug("PARAM %s = %f", self.name, self.value)
        self.is_set = True
        return True


def trim_space(text):
    """Strip leading and trailing whitespace; a string of only spaces is kept."""
    stripped = text.strip(_WS)
    return stripped if stripped else text


def _strtol16(text):
    match = _HEX_RE.match(text)
    digits = match.group(2)
    if not digits:
        return 0
    number = int(digits, 16)
    return -number if match.group(1) == "-" else number


def _atoi(text):
    match = _INT_RE.match(text)
    return int(match.group(1)) if match else 0


def _atof(text):
    match = _FLOAT_RE.match(text)
    return float(match.group(1)) if match else 0.0


def parse_line(line):
    """Parse a NAME=value line; return None if it lacks either part."""
    tokens = [token for token in line.split("=") if token]
    if len(tokens) < 2:
        return None
    name = trim_space(tokens[0])
    str_value = trim_space(tokens[1])
    value = ConfigValue(name=name, str_value=str_value)
    if str_value[:1] == "0" and str_value[1:2].lower() == "x":
        value.int_value = _strtol16(str_value[2:])
    else:
        value.double_value = _atof(str_value)
        value.int_value = _atoi(str_value)
    return value


logging_params = (
    ConfigParam("DEBUG_LEVEL", ParamType.NUMBER, DEFAULT_DEBUG_LEVEL),
    ConfigParam("TIMESTAMP", ParamType.NUMBER, 0),
)


def _init_logger():
    logger_init(logging_params[0].value, logging_params[1].value)


def _line_chunks(handle):
    size = LOC_MAX_PARAM_LINE - 1
    for line in handle:
        for start in range(0, len(line), size):
            yield line[start:start + size]


def read_conf(path, table=None):
    """Set the table's parameters from a configuration file.

    The DEBUG_LEVEL and TIMESTAMP settings also configure the shared logger.
    Returns False if the file could not be opened.
    """
    table = list(table or ())
    try:
        handle = open(path, encoding="utf-8", errors="replace", newline="")
    except OSError:
        loc_logger.warning("no %s file found", path)
        _init_logger()
        return False
    loc_logger.debug("using %s", path)
    for param in table:
        param.is_set = False
    with handle:
        for chunk in _line_chunks(handle):
            value = parse_line(chunk)
            if value is None:
                continue
            for param in table:
                param.apply(value)
            for param in logging_params:
                param.apply(value)
    _init_logger()
    return True