"""Parsing of healthcheck durations such as ``5s`` or ``2m``."""

import re

_DURATION = re.compile(r"^(\d+)([sm])$")


def parse_duration(value: str) -> int:
    """Convert a duration string to seconds.

    Args:
        value: An integer followed by ``s`` (seconds) or ``m`` (minutes)

    Returns:
        Number of seconds

    Raises:
        ValueError: If the format is not recognised
    """
    match = _DURATION.match(value.strip())
    if not match:
        raise ValueError(f"Invalid duration format: {value!r}")
    amount, unit = match.groups()
    return int(amount) * 60 if unit == "m" else int(amount)
