"""Per-run conversion counters."""

from __future__ import annotations

from dataclasses import dataclass

from src.span_builder import MalformedRecordError, TransactionTypeError


@dataclass
class ConversionStats:
    total_records: int = 0
    converted: int = 0
    malformed: int = 0
    bad_transaction_type: int = 0
    other_failures: int = 0
    bytes_written: int = 0

    @property
    def failed(self) -> int:
        return self.malformed + self.bad_transaction_type + self.other_failures

    def record_success(self, bytes_written: int) -> None:
        self.total_records += 1
        self.converted += 1
        self.bytes_written += bytes_written

    def record_failure(self, exc: Exception) -> None:
        self.total_records += 1
        if isinstance(exc, MalformedRecordError):
            self.malformed += 1
        elif isinstance(exc, TransactionTypeError):
            self.bad_transaction_type += 1
        else:
            self.other_failures += 1


def format_stats_text(stats: ConversionStats) -> str:
    """Human-readable stats summary."""
    lines = [
        f"Records read:          {stats.total_records}",
        f"Spans written:         {stats.converted}",
        f"Malformed records:     {stats.malformed}",
        f"Bad transaction type:  {stats.bad_transaction_type}",
        f"Other failures:        {stats.other_failures}",
        f"Bytes written:         {stats.bytes_written}",
    ]
    return "\n".join(lines)
