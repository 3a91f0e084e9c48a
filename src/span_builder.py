"""Assemble a :class:`Span` from a tokenized expweb trace record.

Steps, in order:
  1. Identity and timing: traceid, messageid, parentmessageid, eventtime, duration
  2. Operation name from eventname
  3. Fixed clientVersion / hostIP tags
  4. Derived error tag, then context tags
  5. Lifecycle log events from transactiontype (sr/ss or cs/cr)

Input times are milliseconds; every time on the span is microseconds.
"""

from __future__ import annotations

import logging
import re

from src import trace_tags
from src.classifier import classify
from src.models import LogEvent, Span, StringTag

logger = logging.getLogger(__name__)

MICROS_PER_MILLI = 1000

_LONG_RE = re.compile(r"[+-]?[0-9]+")
_INT64_MIN, _INT64_MAX = -(2**63), 2**63 - 1

# transaction type -> (start event, end event)
_LIFECYCLE_EVENTS = {
    "server": ("sr", "ss"),
    "client": ("cs", "cr"),
}


class ConversionError(Exception):
    """Base class for records that cannot be turned into a span."""


class MalformedRecordError(ConversionError):
    """Raised when a required identity or timing field is missing or invalid."""


class TransactionTypeError(ConversionError):
    """Raised when transactiontype is missing or not server/client."""


# ---------------------------------------------------------------------------
# Field helpers
# ---------------------------------------------------------------------------


def _require(kvs: dict[str, str], key: str) -> str:
    value = kvs.get(key)
    if value is None:
        raise MalformedRecordError(f"Missing required field: '{key}'")
    return value


def _require_long(kvs: dict[str, str], key: str) -> int:
    value = _require(kvs, key)
    if not _LONG_RE.fullmatch(value):
        raise MalformedRecordError(f"'{key}' must be an integer, got {value!r}")
    number = int(value)
    if not _INT64_MIN <= number <= _INT64_MAX:
        raise MalformedRecordError(f"'{key}' is out of int64 range: {value}")
    return number


def _check_micros(name: str, millis: int) -> None:
    if not _INT64_MIN <= millis * MICROS_PER_MILLI <= _INT64_MAX:
        raise MalformedRecordError(
            f"'{name}' of {millis} ms is out of int64 range in microseconds"
        )


def _event(timestamp: int, name: str) -> LogEvent:
    return LogEvent(timestamp=timestamp, fields=(StringTag("event", name),))


def lifecycle_logs(
    transaction_type: str | None, start_ms: int, end_ms: int
) -> tuple[LogEvent, LogEvent]:
    """Return the start/end lifecycle events for *transaction_type*.

    Raises:
        TransactionTypeError: If the type is missing or unknown.
    """
    events = _LIFECYCLE_EVENTS.get((transaction_type or "").casefold())
    if events is None:
        raise TransactionTypeError(
            f"TransactionType is missing from trace or unknown: {transaction_type!r}"
        )
    start_event, end_event = events
    return (
        _event(start_ms * MICROS_PER_MILLI, start_event),
        _event(end_ms * MICROS_PER_MILLI, end_event),
    )


# ---------------------------------------------------------------------------
# Builder
# ---------------------------------------------------------------------------


def build_span(kvs: dict[str, str]) -> Span:
    """Build a complete span from *kvs* or raise; nothing partial is returned.

    Raises:
        MalformedRecordError: traceid/messageid missing, or eventtime/duration
            missing, not an integer, or too large once in microseconds.
        TransactionTypeError: transactiontype missing or not server/client.
    """
    trace_id = _require(kvs, trace_tags.TRACE_ID)
    span_id = _require(kvs, trace_tags.MESSAGE_ID)
    parent_span_id = kvs.get(trace_tags.PARENT_MESSAGE_ID)
    event_time = _require_long(kvs, trace_tags.EVENT_TIME)
    duration = _require_long(kvs, trace_tags.DURATION)
    start_time = event_time - duration
    _check_micros("start time", start_time)
    _check_micros(trace_tags.EVENT_TIME, event_time)
    _check_micros(trace_tags.DURATION, duration)

    logs = lifecycle_logs(kvs.get(trace_tags.TRANSACTION_TYPE), start_time, event_time)

    error_tag, context = classify(kvs)
    tags = [
        StringTag("clientVersion", kvs.get(trace_tags.CLIENT, "")),
        StringTag("hostIP", kvs.get(trace_tags.CLIENT_IP, "")),
    ]
    if error_tag is not None:
        tags.append(error_tag)
    tags.extend(context)

    span = Span(
        trace_id=trace_id,
        span_id=span_id,
        parent_span_id=parent_span_id or None,
        operation_name=kvs.get(trace_tags.EVENT_NAME, ""),
        start_time=start_time * MICROS_PER_MILLI,
        duration=duration * MICROS_PER_MILLI,
        tags=tuple(tags),
        logs=logs,
    )
    logger.debug("Built span %s/%s with %d tags", trace_id, span_id, len(tags))
    return span
