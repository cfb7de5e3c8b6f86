"""
Logging configuration for the sink hole.

Two streams: the operational log (startup banner, warnings) and the
statistics log (one 'n=<count>' line per report). They get separate
handlers and formats so the statistics can be redirected on their own.
Twisted's own log events are forwarded into the operational log.
"""
import logging
import sys
from twisted.python import log as twisted_log
from constants import OPS_LOG_FORMAT, STATS_LOG_FORMAT, STATS_LOGGER_NAME

_handlers = {}
_observer = None


def _install(target: logging.Logger, key: str, stream, fmt: str) -> logging.Handler:
    previous = _handlers.pop(key, None)
    if previous is not None:
        target.removeHandler(previous)
    handler = logging.StreamHandler(stream)
    handler.setFormatter(logging.Formatter(fmt))
    target.addHandler(handler)
    _handlers[key] = handler
    return handler


def configure_logging(level=logging.DEBUG, stats_stream=None, ops_stream=None):
    """Call once at process entry, before anything logs. Safe to call again."""
    global _observer

    root = logging.getLogger()
    root.setLevel(level)
    _install(root, 'ops', ops_stream if ops_stream is not None else sys.stderr, OPS_LOG_FORMAT)

    stats = logging.getLogger(STATS_LOGGER_NAME)
    stats.setLevel(logging.INFO)
    stats.propagate = False
    _install(stats, 'stats', stats_stream if stats_stream is not None else sys.stdout, STATS_LOG_FORMAT)

    if _observer is None:
        _observer = twisted_log.PythonLoggingObserver(loggerName='twisted')
        _observer.start()

