"""Known trace-identity keys carried by expweb trace log lines."""

from __future__ import annotations

# Canonical (lowercase) key -> role in the span.
TRACE_TAGS: dict[str, str] = {
    "client": "client_version",
    "transactiontype": "transaction_type",
    "eventname": "operation_name",
    "traceid": "trace_id",
    "messageid": "span_id",
    "parentmessageid": "parent_span_id",
    "eventtime": "event_time",
    "duration": "duration",
    "clientip": "host_ip",
}

CLIENT = "client"
TRANSACTION_TYPE = "transactiontype"
EVENT_NAME = "eventname"
TRACE_ID = "traceid"
MESSAGE_ID = "messageid"
PARENT_MESSAGE_ID = "parentmessageid"
EVENT_TIME = "eventtime"
DURATION = "duration"
CLIENT_IP = "clientip"


def is_trace_tag(key: str) -> bool:
    """Return True if *key* names a trace tag, ignoring case."""
    return key.lower() in TRACE_TAGS


def canonical_key(key: str) -> str:
    """Lowercase trace-tag keys; leave every other key untouched."""
    lowered = key.lower()
    return lowered if lowered in TRACE_TAGS else key
