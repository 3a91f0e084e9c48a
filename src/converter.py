"""Convert one raw expweb trace line into an encoded Haystack span.

``convert`` is a pure function: bytes in, bytes out, or a
:class:`~src.span_builder.ConversionError`.  It keeps no state between calls
and may be used from many threads at once.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from src.models import Span
from src.serializer import encode_span
from src.span_builder import MalformedRecordError, build_span
from src.tokenizer import split_record

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Record:
    """An encoded span keyed for a sharded stream (one shard per trace)."""

    partition_key: str
    data: bytes


def record_to_span(record: str) -> Span:
    """Tokenize and build a span from a decoded log line."""
    return build_span(split_record(record))


def convert(data: bytes) -> bytes:
    """Convert a UTF-8 encoded log line into serialized span bytes.

    Raises:
        MalformedRecordError: If the input is not UTF-8 or lacks a required field.
        TransactionTypeError: If transactiontype is missing or unknown.
        SerializationError: If the span cannot be encoded.
    """
    try:
        record = data.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise MalformedRecordError(f"Record is not valid UTF-8: {exc}") from exc
    encoded = encode_span(record_to_span(record))
    logger.debug("Converted %d input bytes into %d span bytes", len(data), len(encoded))
    return encoded


def to_record(span: Span) -> Record:
    """Wrap *span* for a stream producer, partitioned by trace id."""
    return Record(partition_key=span.trace_id, data=encode_span(span))


class SpanConverter:
    """Plug-in style wrapper around :func:`convert` for host pipelines."""

    def convert(self, data: bytes) -> bytes:
        return convert(data)

    def __str__(self) -> str:
        return type(self).__name__
