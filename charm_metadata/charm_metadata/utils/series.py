from __future__ import annotations

import re

_SERIES_RE = re.compile(r"^[a-z]+([a-z0-9]+)?$")


def is_valid_series(series: str) -> bool:
    """Return whether ``series`` is a well-formed series name (e.g. ``trusty``)."""
    return isinstance(series, str) and _SERIES_RE.fullmatch(series) is not None
