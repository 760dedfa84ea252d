"""
Tests for logging helpers.
"""

import asyncio
import json
import logging

import pytest

from weekend_vibes.utils.logging import (
    LogContext,
    StructuredFormatter,
    context_filter,
    current_log_context,
    log_performance,
)


def make_record(message="hello", **extra):
    record = logging.LogRecord("weekend_vibes.test", logging.INFO, __file__, 10, message, None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_structured_formatter_emits_json_with_extras():
    line = StructuredFormatter().format(make_record("活動 fetched", request_id="abc123"))
    data = json.loads(line)

    assert data["message"] == "活動 fetched"
    assert data["level"] == "INFO"
    assert data["logger"] == "weekend_vibes.test"
    assert data["request_id"] == "abc123"


def test_log_context_sets_and_restores():
    with LogContext(request_id="outer"):
        with LogContext(request_id="inner", method="GET"):
            record = make_record()
            context_filter.filter(record)
            assert record.request_id == "inner"
            assert record.method == "GET"
        assert current_log_context() == {"request_id": "outer"}
    assert current_log_context() == {}


@pytest.mark.asyncio
async def test_log_context_isolated_between_interleaved_requests():
    a_entered = asyncio.Event()
    b_entered = asyncio.Event()
    a_finished = asyncio.Event()
    seen = {}

    async def request_a():
        with LogContext(request_id="aaaa", method="GET"):
            a_entered.set()
            await b_entered.wait()
            seen["a"] = current_log_context()
        a_finished.set()

    async def request_b():
        await a_entered.wait()
        with LogContext(request_id="bbbb", method="GET"):
            b_entered.set()
            await a_finished.wait()
            record = make_record()
            context_filter.filter(record)
            seen["b"] = current_log_context()
            seen["b_record"] = record.request_id

    await asyncio.gather(request_a(), request_b())

    assert seen["a"] == {"request_id": "aaaa", "method": "GET"}
    assert seen["b"] == {"request_id": "bbbb", "method": "GET"}
    assert seen["b_record"] == "bbbb"
    assert current_log_context() == {}


@pytest.mark.asyncio
async def test_gateway_requests_leave_no_context_behind(gateway, upstream):
    release = asyncio.Event()
    seen_ids = []

    async def slow_generate(prompt):
        await release.wait()
        seen_ids.append(current_log_context()["request_id"])
        return "[]"

    upstream.generate.side_effect = slow_generate

    first = asyncio.ensure_future(gateway.handle("GET"))
    second = asyncio.ensure_future(gateway.handle("GET"))
    await asyncio.sleep(0)
    release.set()
    responses = await asyncio.gather(first, second)

    assert [r.status_code for r in responses] == [200, 200]
    assert len(set(seen_ids)) == 2
    assert current_log_context() == {}


@pytest.mark.asyncio
async def test_log_performance_async(caplog):
    @log_performance
    async def work():
        return 42

    with caplog.at_level(logging.INFO):
        assert await work() == 42

    assert "Completed work" in caplog.text


def test_log_performance_reraises(caplog):
    @log_performance
    def broken():
        raise RuntimeError("nope")

    with caplog.at_level(logging.ERROR), pytest.raises(RuntimeError):
        broken()

    assert "Failed broken" in caplog.text
