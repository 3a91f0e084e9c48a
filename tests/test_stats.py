"""Tests for src.stats."""

from __future__ import annotations

from src.serializer import SerializationError
from src.span_builder import MalformedRecordError, TransactionTypeError
from src.stats import ConversionStats, format_stats_text


def test_counts_by_failure_kind():
    stats = ConversionStats()
    stats.record_success(40)
    stats.record_success(60)
    stats.record_failure(MalformedRecordError("no traceid"))
    stats.record_failure(TransactionTypeError("proxy"))
    stats.record_failure(SerializationError("bad"))

    assert stats.total_records == 5
    assert stats.converted == 2
    assert stats.bytes_written == 100
    assert stats.malformed == 1
    assert stats.bad_transaction_type == 1
    assert stats.other_failures == 1
    assert stats.failed == 3


def test_format_stats_text():
    stats = ConversionStats(total_records=3, converted=2, malformed=1, bytes_written=90)
    text = format_stats_text(stats)
    assert "Records read:          3" in text
    assert "Spans written:         2" in text
    assert "Malformed records:     1" in text
    assert "Bytes written:         90" in text
