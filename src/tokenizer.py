"""Split a raw expweb trace line into a key/value map.

Grammar: ``key=value(,key=value)*`` where a value is either a double-quoted
string (taken verbatim, commas included) or a run of characters up to the
next comma.  Fragments that do not match are skipped.
"""

from __future__ import annotations

import re

from src.trace_tags import canonical_key

# ---------------------------------------------------------------------------
# Compiled regex pattern
# ---------------------------------------------------------------------------

_KV_RE = re.compile(r'(\w+)=("([^"]*)"|([^,]*))', re.ASCII)


def split_record(record: str) -> dict[str, str]:
    """Tokenize *record* into an ordered ``{key: value}`` dict.

    Trace-tag keys are normalized to lowercase; other keys keep their
    original casing.  A repeated key keeps its first position and takes
    the last value.
    """
    kv_pairs: dict[str, str] = {}
    for m in _KV_RE.finditer(record):
        quoted = m.group(3)
        value = quoted if quoted is not None else m.group(2)
        kv_pairs[canonical_key(m.group(1))] = value or ""
    return kv_pairs
