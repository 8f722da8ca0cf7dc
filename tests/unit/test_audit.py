"""Tests for the logging (observation) combinator."""

import io

import pytest

from strata.combinators.audit import LoggingStore
from strata.combinators.serializer import SerializerStore, text_formatter
from strata.core.errors import BackendFailure
from strata.storage.console import ConsoleStore


class TestLoggingStore:
    """Tests for LoggingStore."""

    @pytest.mark.asyncio
    async def test_records_each_operation(self, source, make_spy):
        sink = make_spy()
        store = LoggingStore(source, sink)

        await store.get("a")
        await store.put("a", 1)
        await store.merge("a", 2)
        await store.delete("a")

        entries = [data for _, op, _, data in sink.calls if op == "put"]
        assert entries == ["GET a", "PUT a", "MERGE a", "DELETE a"]
        assert set(sink.refs("put")) == {"log"}

    @pytest.mark.asyncio
    async def test_entry_written_before_operation(self, source, make_spy):
        """The sink sees PUT r strictly before the source's put runs."""
        sink = make_spy()
        store = LoggingStore(source, sink)

        await store.put("r", "v")

        log_seq, _, _, entry = sink.last("put")
        source_seq = source.last("put")[0]
        assert entry == "PUT r"
        assert log_seq < source_seq

    @pytest.mark.asyncio
    async def test_results_pass_through(self, source, make_spy):
        store = LoggingStore(source, make_spy())
        await source.inner.put("a", {"x": 1})

        assert await store.get("a") == {"x": 1}
        assert await store.get("missing") is None

    @pytest.mark.asyncio
    async def test_source_errors_pass_through(self, make_spy):
        source = make_spy(fail_on=("delete",))
        store = LoggingStore(source, make_spy())

        with pytest.raises(BackendFailure) as exc_info:
            await store.delete("a")

        assert exc_info.value.layer is None

    @pytest.mark.asyncio
    async def test_sink_failure_blocks_operation(self, source, make_spy):
        """Logging is not best-effort: a failed entry fails the call."""
        sink = make_spy(fail_on=("put",))
        store = LoggingStore(source, sink)

        with pytest.raises(BackendFailure):
            await store.put("a", 1)

        assert source.calls == []

    @pytest.mark.asyncio
    async def test_custom_sink_ref(self, source, make_spy):
        sink = make_spy()
        store = LoggingStore(source, sink, sink_ref="events")

        await store.get("a")

        assert sink.refs("put") == ["events"]

    @pytest.mark.asyncio
    async def test_empty_sink_ref_is_kept(self, source, make_spy):
        sink = make_spy()
        store = LoggingStore(source, sink, sink_ref="")

        await store.get("a")

        assert sink.refs("put") == [""]

    @pytest.mark.asyncio
    async def test_console_pipeline(self, source):
        """A formatted console sink prints one labelled line per operation."""
        stream = io.StringIO()
        sink = SerializerStore(ConsoleStore(stream), encode=text_formatter("[SOURCE] {}\n"))
        store = LoggingStore(source, sink)

        await store.get("todos/1")
        await store.put("todos/1", "x")

        assert stream.getvalue() == "[SOURCE] GET todos/1\n[SOURCE] PUT todos/1\n"
