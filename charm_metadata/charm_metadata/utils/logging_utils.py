import logging
import sys
from typing import IO, Optional

DEFAULT_FORMAT = "%(name)s - %(levelname)s - %(message)s"

# Marks the handlers installed here so a second call replaces them and
# leaves handlers added by anyone else alone.
_HANDLER_TAG = "_charm_metadata_handler"


class _BelowLevelFilter(logging.Filter):
    def __init__(self, limit: int) -> None:
        super().__init__()
        self._limit = limit

    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno < self._limit


def _handler(stream: IO[str], level: int, formatter: logging.Formatter) -> logging.Handler:
    handler = logging.StreamHandler(stream=stream)
    handler.setLevel(level)
    handler.setFormatter(formatter)
    setattr(handler, _HANDLER_TAG, True)
    return handler


def configure_split_stream_logging(
    *,
    level: int = logging.INFO,
    stderr_level: int = logging.WARNING,
    formatter: Optional[logging.Formatter] = None,
) -> None:
    """Configure root logging so that records below ``stderr_level`` go to
    stdout and the rest go to stderr.

    Lint reports are printed on stdout, so keeping warnings and errors on
    stderr lets callers redirect either stream on its own.
    """
    root = logging.getLogger()
    for existing in [h for h in root.handlers if getattr(h, _HANDLER_TAG, False)]:
        root.removeHandler(existing)
    root.setLevel(level)

    formatter = formatter or logging.Formatter(DEFAULT_FORMAT)
    stderr_level = max(stderr_level, logging.DEBUG)

    stdout_handler = _handler(sys.stdout, logging.DEBUG, formatter)
    stdout_handler.addFilter(_BelowLevelFilter(stderr_level))
    root.addHandler(stdout_handler)
    root.addHandler(_handler(sys.stderr, stderr_level, formatter))


def level_for_verbosity(verbosity: int, base_level: int = logging.WARNING) -> int:
    """Map a count of ``-v`` flags onto a logging level, one step per flag."""
    return max(logging.DEBUG, base_level - 10 * verbosity)
