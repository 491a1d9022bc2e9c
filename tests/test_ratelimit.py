from authkit.ratelimit import ClientRateLimiter, IntervalLimiter, TokenBucket


class FakeClock:
    def __init__(self):
        self.now = 1000.0

    def __call__(self):
        return self.now


def test_bucket_starts_full_and_empties():
    clock = FakeClock()
    bucket = TokenBucket(1.0, 3, clock)
    assert [bucket.take_token() for _ in range(4)] == [True, True, True, False]


def test_bucket_refills_over_time():
    clock = FakeClock()
    bucket = TokenBucket(1.0, 1, clock)
    assert bucket.take_token() is True
    assert bucket.take_token() is False
    clock.now += 1.0
    assert bucket.take_token() is True


def test_bucket_refill_is_capped_at_capacity():
    clock = FakeClock()
    bucket = TokenBucket(1.0, 2, clock)
    bucket.take_token()
    bucket.take_token()
    clock.now += 100.0
    assert [bucket.take_token() for _ in range(3)] == [True, True, False]


def test_client_limiter_burst_then_denied():
    clock = FakeClock()
    limiter = ClientRateLimiter(2, 4, clock=clock)
    results = [limiter.allow("a") for _ in range(5)]
    assert results == [True] * 4 + [False]


def test_client_limiter_clients_are_independent():
    clock = FakeClock()
    limiter = ClientRateLimiter(2, 1, clock=clock)
    assert limiter.allow("a") is True
    assert limiter.allow("a") is False
    assert limiter.allow("b") is True


def test_cleanup_removes_idle_clients_only():
    clock = FakeClock()
    limiter = ClientRateLimiter(2, 4, clock=clock, sweep_interval=10_000)
    limiter.allow("old")
    clock.now += 181
    limiter.allow("new")
    limiter.cleanup()
    assert "old" not in limiter
    assert "new" in limiter
    assert len(limiter) == 1


def test_allow_sweeps_periodically():
    clock = FakeClock()
    limiter = ClientRateLimiter(2, 4, clock=clock)
    limiter.allow("old")
    clock.now += 200
    limiter.allow("new")
    assert "old" not in limiter


def test_interval_limiter():
    clock = FakeClock()
    limiter = IntervalLimiter(10, clock)
    assert limiter.allow("a") is True
    clock.now += 0.05
    assert limiter.allow("a") is False
    assert limiter.allow("b") is True
    clock.now += 0.05
    assert limiter.allow("a") is True