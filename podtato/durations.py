from __future__ import annotations

import re

_UNITS: dict[str, float] = {
    "ns": 1e-9,
    "us": 1e-6,
    "µs": 1e-6,
    "μs": 1e-6,
    "ms": 1e-3,
    "s": 1.0,
    "m": 60.0,
    "h": 3600.0,
}

_PART = re.compile(r"(\d+(?:\.\d*)?|\.\d+)(ns|us|µs|μs|ms|s|m|h)")


class InvalidDuration(ValueError):
    pass


def parse_duration(text: str) -> float:
    """Parse a duration such as "300ms", "5s" or "1h2m3.5s" into seconds.

    Same grammar as Go's time.ParseDuration: an optional sign followed by one
    or more <number><unit> groups. A bare "0" is accepted.
    """
    raw = text.strip()
    if not raw:
        raise InvalidDuration("empty duration")

    sign = 1.0
    body = raw
    if body[0] in "+-":
        if body[0] == "-":
            sign = -1.0
        body = body[1:]
    if body == "0":
        return 0.0
    if not body:
        raise InvalidDuration(f"invalid duration {text!r}")

    total = 0.0
    pos = 0
    while pos < len(body):
        m = _PART.match(body, pos)
        if m is None:
            raise InvalidDuration(f"invalid duration {text!r}")
        total += float(m.group(1)) * _UNITS[m.group(2)]
        pos = m.end()
    return sign * total
