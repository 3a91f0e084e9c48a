"""Tests for src.tokenizer."""

from __future__ import annotations

from src.tokenizer import split_record
from src.trace_tags import canonical_key, is_trace_tag


class TestTraceTags:
    """Trace-tag lookup table."""

    def test_known_keys_match_any_case(self) -> None:
        for key in ("traceid", "TraceId", "TRACEID", "parentMessageId", "ClientIP"):
            assert is_trace_tag(key)

    def test_unknown_keys_do_not_match(self) -> None:
        for key in ("error", "success", "useragent", "trace_id", ""):
            assert not is_trace_tag(key)

    def test_canonical_key(self) -> None:
        assert canonical_key("EventTime") == "eventtime"
        assert canonical_key("pageName") == "pageName"


class TestSplitRecord:
    """Key/value extraction."""

    def test_simple_pairs(self) -> None:
        assert split_record("a=1,b=2,c=three") == {"a": "1", "b": "2", "c": "three"}

    def test_preserves_insertion_order(self) -> None:
        assert list(split_record("z=1,a=2,m=3")) == ["z", "a", "m"]

    def test_trace_tags_are_lowercased(self) -> None:
        kvs = split_record("TraceId=T1,MessageID=M1,pageName=Home")
        assert kvs == {"traceid": "T1", "messageid": "M1", "pageName": "Home"}

    def test_quoted_value_keeps_commas(self) -> None:
        kvs = split_record('useragent="Mozilla/5.0 (X, Y)",a=1')
        assert kvs["useragent"] == "Mozilla/5.0 (X, Y)"
        assert kvs["a"] == "1"

    def test_quotes_are_stripped(self) -> None:
        assert split_record('name="Checkout"') == {"name": "Checkout"}

    def test_empty_values_are_kept(self) -> None:
        assert split_record('a=,b="",c=1') == {"a": "", "b": "", "c": "1"}

    def test_last_duplicate_wins(self) -> None:
        kvs = split_record("traceid=first,TRACEID=second")
        assert kvs == {"traceid": "second"}

    def test_unquoted_value_runs_to_next_comma(self) -> None:
        kvs = split_record("msg=hello world=x,b=2")
        assert kvs["msg"] == "hello world=x"
        assert kvs["b"] == "2"

    def test_unterminated_quote_taken_literally(self) -> None:
        assert split_record('a="open,b=2') == {"a": '"open', "b": "2"}

    def test_garbage_is_skipped(self) -> None:
        assert split_record(",,,no pairs here,,=orphan") == {}

    def test_empty_line(self) -> None:
        assert split_record("") == {}

    def test_fixture_user_agent(self, client_record: str) -> None:
        kvs = split_record(client_record)
        assert kvs["useragent"] == (
            "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_11_6) AppleWebKit/537.36 "
            "(KHTML, like Gecko) Chrome/57.0.2987.133 Safari/537.36"
        )
        assert kvs["transactiontype"] == "CLIENT"

    def test_hyphenated_key_keeps_last_word_run(self) -> None:
        assert split_record("X-A-B=v,c=1") == {"B": "v", "c": "1"}

    def test_fixture_infrastructure_provider_key(self, server_record: str) -> None:
        kvs = split_record(server_record)
        assert kvs["PROVIDER"] == "dc"
        assert "X-HAYSTACK-INFRASTRUCTURE-PROVIDER" not in kvs
