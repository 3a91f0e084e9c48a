"""Partition a tokenized record into the derived error tag and context tags."""

from __future__ import annotations

from src.models import BoolTag, StringTag
from src.trace_tags import is_trace_tag

ERROR_KEY = "error"
SUCCESS_KEY = "success"


def derive_error_tag(kvs: dict[str, str]) -> BoolTag | None:
    """Build the boolean ``error`` tag from ``error`` or ``success``.

    ``error`` wins when both are present: it is true only for ``"true"``.
    Otherwise ``success=false`` means an error and any other ``success``
    value means none.  Returns None when neither key exists.
    """
    if ERROR_KEY in kvs:
        return BoolTag(ERROR_KEY, kvs[ERROR_KEY].casefold() == "true")
    if SUCCESS_KEY in kvs:
        return BoolTag(ERROR_KEY, kvs[SUCCESS_KEY].casefold() == "false")
    return None


def context_tags(kvs: dict[str, str]) -> list[StringTag]:
    """Turn every non-trace, non-``error`` pair into a string tag, in map order.

    ``success`` is kept here as well as feeding :func:`derive_error_tag`.
    """
    tags = []
    for key, value in kvs.items():
        if key.casefold() == ERROR_KEY or is_trace_tag(key):
            continue
        tags.append(StringTag(key, value if value is not None else ""))
    return tags


def classify(kvs: dict[str, str]) -> tuple[BoolTag | None, list[StringTag]]:
    return derive_error_tag(kvs), context_tags(kvs)
