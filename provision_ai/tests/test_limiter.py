"""Tests for admission control."""

import asyncio

import pytest

from provision_ai.services.admission import AdmissionLimiter, AdmissionRejected


@pytest.mark.asyncio
async def test_disabled_limiter_admits_everything():
    limiter = AdmissionLimiter(max_concurrent=0)

    async with limiter.slot():
        async with limiter.slot():
            pass

    assert not limiter.enabled


@pytest.mark.asyncio
async def test_rejects_when_full():
    limiter = AdmissionLimiter(max_concurrent=1, wait_timeout=0.01)

    async with limiter.slot():
        assert limiter.in_flight == 1
        with pytest.raises(AdmissionRejected):
            async with limiter.slot():
                pass

    assert limiter.rejected == 1
    assert limiter.in_flight == 0


@pytest.mark.asyncio
async def test_waiting_request_gets_freed_slot():
    limiter = AdmissionLimiter(max_concurrent=1, wait_timeout=1.0)
    order = []

    async def hold(name: str):
        async with limiter.slot():
            order.append(name)
            await asyncio.sleep(0.01)

    await asyncio.gather(hold("first"), hold("second"))

    assert order == ["first", "second"]
    assert limiter.rejected == 0


@pytest.mark.asyncio
async def test_slot_released_on_error():
    limiter = AdmissionLimiter(max_concurrent=1, wait_timeout=0.01)

    with pytest.raises(RuntimeError):
        async with limiter.slot():
            raise RuntimeError("provider exploded")

    async with limiter.slot():
        assert limiter.in_flight == 1


@pytest.mark.asyncio
async def test_metrics_report_rejections():
    limiter = AdmissionLimiter(max_concurrent=1, wait_timeout=0.01)

    async with limiter.slot():
        assert limiter.get_metrics()["in_flight"] == 1
        with pytest.raises(AdmissionRejected):
            async with limiter.slot():
                pass

    assert limiter.get_metrics() == {
        "enabled": True,
        "max_concurrent": 1,
        "in_flight": 0,
        "rejected": 1,
    }
