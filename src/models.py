"""Span data model — immutable dataclasses mirroring the Haystack span schema."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

SERVICE_NAME = "expweb"


@dataclass(frozen=True)
class StringTag:
    key: str
    value: str = ""


@dataclass(frozen=True)
class BoolTag:
    key: str
    value: bool = False


Tag = Union[StringTag, BoolTag]


@dataclass(frozen=True)
class LogEvent:
    """A point-in-time marker on a span; ``timestamp`` is in microseconds."""

    timestamp: int
    fields: tuple[Tag, ...] = ()


@dataclass(frozen=True)
class Span:
    """A single timed operation.  ``start_time`` and ``duration`` are microseconds."""

    trace_id: str
    span_id: str
    operation_name: str
    start_time: int
    duration: int
    parent_span_id: str | None = None
    service_name: str = SERVICE_NAME
    tags: tuple[Tag, ...] = ()
    logs: tuple[LogEvent, ...] = ()
