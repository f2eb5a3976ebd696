"""
Query parameter parsing for the render endpoint.

Missing or empty values fall back to the default quietly. Values that do not
parse are logged and also fall back, so a bad query string never fails the
request. No range checks are made beyond what fits a 64-bit number.
"""

import logging
import math
import re
from dataclasses import dataclass

log = logging.getLogger(__name__)

# Render defaults
DEFAULT_CYCLES = 5.0     # complete x oscillator revolutions
DEFAULT_RES = 0.001      # angular resolution
DEFAULT_SIZE = 100       # canvas covers [-size..+size]
DEFAULT_NFRAMES = 64     # animation frames
DEFAULT_DELAY = 8        # delay between frames in 10ms units

INT64_MIN = -2 ** 63
INT64_MAX = 2 ** 63 - 1

_INT_RE = re.compile(r"[+-]?[0-9]+")
_NON_FINITE = {"inf", "infinity", "nan"}


def _lookup(args, name):
    value = args.get(name)
    if value is None or value == "":
        return None
    return value


def parse_int(value):
    """Signed base 10 integer that fits in 64 bits; ``ValueError`` otherwise."""
    if not _INT_RE.fullmatch(value):
        raise ValueError(f"invalid syntax: {value!r}")
    n = int(value, 10)
    if not INT64_MIN <= n <= INT64_MAX:
        raise ValueError(f"value out of range: {value!r}")
    return n


def parse_float(value):
    """
    Decimal float; ``ValueError`` otherwise.

    Surrounding whitespace and ``_`` separators are rejected, and so is a
    finite literal that overflows to infinity. ``inf``, ``infinity`` and
    ``nan`` (any case, optional sign) are accepted as written.
    """
    if "_" in value or value != value.strip():
        raise ValueError(f"invalid syntax: {value!r}")
    f = float(value)
    if math.isinf(f) and value.lstrip("+-").lower() not in _NON_FINITE:
        raise ValueError(f"value out of range: {value!r}")
    return f


def get_int_param(args, name, default):
    """Base 10 integer from ``args[name]``, or ``default``."""
    value = _lookup(args, name)
    if value is None:
        return default
    try:
        return parse_int(value)
    except ValueError:
        log.warning("Invalid value for %s: %s, using default: %d", name, value, default)
        return default


def get_float_param(args, name, default):
    """Float from ``args[name]``, or ``default``."""
    value = _lookup(args, name)
    if value is None:
        return default
    try:
        return parse_float(value)
    except ValueError:
        log.warning("Invalid value for %s: %s, using default: %f", name, value, default)
        return default


@dataclass(frozen=True)
class RenderParams:
    cycles: float = DEFAULT_CYCLES
    res: float = DEFAULT_RES
    size: int = DEFAULT_SIZE
    nframes: int = DEFAULT_NFRAMES
    delay: int = DEFAULT_DELAY

    @classmethod
    def from_args(cls, args):
        """Resolve all five values from a query-string mapping."""
        return cls(
            cycles=get_float_param(args, "cycles", DEFAULT_CYCLES),
            res=get_float_param(args, "res", DEFAULT_RES),
            size=get_int_param(args, "size", DEFAULT_SIZE),
            nframes=get_int_param(args, "nframes", DEFAULT_NFRAMES),
            delay=get_int_param(args, "delay", DEFAULT_DELAY),
        )
