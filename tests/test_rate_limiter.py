"""
Unit Tests for the Outbound Token Bucket

Tests for:
- Constructor validation
- Concurrency ceiling of ``capacity`` in-flight requests
- Delayed refill after release
- Cancellation while waiting for a token
- Reset on shutdown
"""

import asyncio

import pytest

from music_discovery.infrastructure.lastfm.rate_limiter import TokenBucket


class TestTokenBucketConstruction:
    def test_defaults(self):
        """Should default to five tokens refilled after 200 ms."""
        bucket = TokenBucket()

        assert bucket.capacity == 5
        assert bucket.refill_interval == pytest.approx(0.2)
        assert bucket.available == 5

    def test_zero_capacity_rejected(self):
        with pytest.raises(ValueError, match="capacity"):
            TokenBucket(capacity=0)

    def test_negative_interval_rejected(self):
        with pytest.raises(ValueError, match="refill_interval"):
            TokenBucket(capacity=1, refill_interval=-0.1)


class TestTokenBucketThrottling:
    async def test_at_most_capacity_requests_in_flight(self):
        """Should never let more than ``capacity`` holders run at once."""
        bucket = TokenBucket(capacity=3, refill_interval=0)
        in_flight = 0
        peak = 0

        async def worker():
            nonlocal in_flight, peak
            async with bucket.slot():
                in_flight += 1
                peak = max(peak, in_flight)
                await asyncio.sleep(0.01)
                in_flight -= 1

        await asyncio.gather(*(worker() for _ in range(12)))

        assert peak == 3
        assert bucket.available == 3

    async def test_token_returns_only_after_refill_interval(self):
        """Should keep the token out of the bucket until the interval elapses."""
        bucket = TokenBucket(capacity=1, refill_interval=0.05)

        async with bucket.slot():
            pass

        assert bucket.available == 0
        await asyncio.sleep(0.1)
        assert bucket.available == 1

    async def test_waiter_proceeds_after_refill(self):
        bucket = TokenBucket(capacity=1, refill_interval=0.02)
        await bucket.acquire()
        bucket.release()

        await asyncio.wait_for(bucket.acquire(), timeout=1.0)

        assert bucket.available == 0

    async def test_cancelled_waiter_does_not_consume_token(self):
        """Should honour task cancellation while blocked on an empty bucket."""
        bucket = TokenBucket(capacity=1, refill_interval=0)
        await bucket.acquire()

        waiter = asyncio.create_task(bucket.acquire())
        await asyncio.sleep(0)
        waiter.cancel()
        with pytest.raises(asyncio.CancelledError):
            await waiter

        bucket.release()
        assert bucket.available == 1

    async def test_reset_returns_pending_tokens(self):
        bucket = TokenBucket(capacity=2, refill_interval=60)

        async with bucket.slot():
            pass
        async with bucket.slot():
            pass
        assert bucket.available == 0

        bucket.reset()

        assert bucket.available == 2
