"""Serialize and deserialize spans as Haystack protobuf messages."""

from __future__ import annotations

import json
import struct
from typing import BinaryIO

from google.protobuf import json_format
from google.protobuf.message import DecodeError

from src.models import BoolTag, LogEvent, Span, StringTag, Tag
from src.span_schema import (
    TAG_TYPE_BOOL,
    TAG_TYPE_STRING,
    LogMessage,
    SpanMessage,
    TagMessage,
)

LENGTH_PREFIX_FORMAT = "!I"  # 4-byte uint32 big-endian
LENGTH_PREFIX_SIZE = struct.calcsize(LENGTH_PREFIX_FORMAT)


class SerializationError(Exception):
    """Raised when serialization or deserialization fails."""


# ---------------------------------------------------------------------------
# Internal model <-> proto converters
# ---------------------------------------------------------------------------


def _tag_to_proto(tag: Tag) -> TagMessage:
    proto_tag = TagMessage(key=tag.key)
    if isinstance(tag, BoolTag):
        proto_tag.type = TAG_TYPE_BOOL
        proto_tag.vBool = tag.value
    else:
        proto_tag.type = TAG_TYPE_STRING
        proto_tag.vStr = tag.value
    return proto_tag


def _proto_to_tag(proto_tag: TagMessage) -> Tag:
    kind = proto_tag.WhichOneof("myvalue")
    if kind == "vBool":
        return BoolTag(proto_tag.key, proto_tag.vBool)
    if kind in ("vStr", None):
        return StringTag(proto_tag.key, proto_tag.vStr)
    raise SerializationError(
        f"Unsupported value type '{kind}' for tag '{proto_tag.key}'"
    )


def span_to_proto(span: Span) -> SpanMessage:
    """Convert a :class:`Span` to a Haystack ``Span`` protobuf message."""
    proto_span = SpanMessage(
        traceId=span.trace_id,
        spanId=span.span_id,
        serviceName=span.service_name,
        operationName=span.operation_name,
        startTime=span.start_time,
        duration=span.duration,
    )
    if span.parent_span_id:
        proto_span.parentSpanId = span.parent_span_id

    for tag in span.tags:
        proto_span.tags.append(_tag_to_proto(tag))

    for event in span.logs:
        proto_log = LogMessage(timestamp=event.timestamp)
        for field in event.fields:
            proto_log.fields.append(_tag_to_proto(field))
        proto_span.logs.append(proto_log)

    return proto_span


def proto_to_span(proto_span: SpanMessage) -> Span:
    """Convert a Haystack ``Span`` protobuf message back to a :class:`Span`."""
    return Span(
        trace_id=proto_span.traceId,
        span_id=proto_span.spanId,
        parent_span_id=proto_span.parentSpanId or None,
        service_name=proto_span.serviceName,
        operation_name=proto_span.operationName,
        start_time=proto_span.startTime,
        duration=proto_span.duration,
        tags=tuple(_proto_to_tag(t) for t in proto_span.tags),
        logs=tuple(
            LogEvent(
                timestamp=log.timestamp,
                fields=tuple(_proto_to_tag(f) for f in log.fields),
            )
            for log in proto_span.logs
        ),
    )


# ---------------------------------------------------------------------------
# Protobuf serialization
# ---------------------------------------------------------------------------


def encode_span(span: Span) -> bytes:
    """Serialize *span* to protobuf bytes.

    Serialization is deterministic: equal spans always give equal bytes.

    Raises:
        SerializationError: If a field value cannot be encoded.
    """
    try:
        return span_to_proto(span).SerializeToString(deterministic=True)
    except (TypeError, ValueError) as exc:
        raise SerializationError(f"Protobuf serialization failed: {exc}") from exc


def decode_span(data: bytes) -> Span:
    """Parse protobuf bytes produced by :func:`encode_span`.

    Raises:
        SerializationError: If the bytes are not a valid span.
    """
    try:
        proto_span = SpanMessage.FromString(data)
    except DecodeError as exc:
        raise SerializationError(f"Protobuf deserialization failed: {exc}") from exc
    return proto_to_span(proto_span)


# ---------------------------------------------------------------------------
# JSON rendering
# ---------------------------------------------------------------------------


def span_to_json(span: Span) -> str:
    """Render *span* as one compact JSON line using the proto field names."""
    as_dict = json_format.MessageToDict(
        span_to_proto(span), preserving_proto_field_name=True
    )
    return json.dumps(as_dict, separators=(",", ":"))


# ---------------------------------------------------------------------------
# Length-delimited framing
# ---------------------------------------------------------------------------


def write_delimited(stream: BinaryIO, payload: bytes) -> int:
    """Write ``[4-byte length][payload]`` to *stream*; return bytes written."""
    stream.write(struct.pack(LENGTH_PREFIX_FORMAT, len(payload)))
    stream.write(payload)
    return LENGTH_PREFIX_SIZE + len(payload)


def read_delimited(stream: BinaryIO) -> bytes | None:
    """Read one framed payload from *stream*, or None at a clean EOF.

    Raises:
        SerializationError: If the stream ends inside a frame.
    """
    header = stream.read(LENGTH_PREFIX_SIZE)
    if not header:
        return None
    if len(header) != LENGTH_PREFIX_SIZE:
        raise SerializationError(
            f"Truncated length prefix: got {len(header)} of {LENGTH_PREFIX_SIZE} bytes"
        )
    (length,) = struct.unpack(LENGTH_PREFIX_FORMAT, header)
    payload = stream.read(length)
    if len(payload) != length:
        raise SerializationError(
            f"Truncated frame: expected {length} bytes, got {len(payload)}"
        )
    return payload
