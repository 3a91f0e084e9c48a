"""Shared pytest fixtures for the expweb span converter test suite."""

from __future__ import annotations

from pathlib import Path

import pytest

FIXTURES = Path(__file__).parent / "fixtures"

BASIC_RECORD = (
    "traceid=T1,messageid=M1,eventtime=1000,duration=200,"
    "transactiontype=server,client=1.0,clientip=10.0.0.1"
)


def load_record(name: str) -> str:
    """Return the single trace line stored in ``tests/fixtures/<name>``."""
    return (FIXTURES / name).read_text(encoding="utf-8").rstrip("\r\n")


@pytest.fixture()
def basic_record() -> str:
    return BASIC_RECORD


@pytest.fixture()
def server_record() -> str:
    return load_record("expweb-server-trace.txt")


@pytest.fixture()
def client_record() -> str:
    return load_record("expweb-client-trace.txt")


@pytest.fixture()
def quoted_record() -> str:
    return load_record("expweb-trace-quote.txt")
