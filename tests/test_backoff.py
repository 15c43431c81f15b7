import pytest

from deepl_sheets import backoff


def test_base_delay_grows_and_is_capped():
    delays = [backoff.base_delay_ms(attempt) for attempt in range(5)]

    assert delays[0] == pytest.approx(1000)
    assert delays[1] == pytest.approx(1600)
    assert delays == sorted(delays)
    assert all(delay <= 60000 for delay in delays)
    assert backoff.base_delay_ms(30) == 60000


def test_jitter_factor_stays_in_range():
    for _ in range(500):
        assert 0.77 <= backoff.jitter_factor() <= 1.23


def test_compute_delay_deducts_time_spent_in_attempt(monkeypatch):
    monkeypatch.setattr(backoff, "jitter_factor", lambda: 1.0)

    delay = backoff.compute_delay(0, attempt_start=10.0, now=10.25)

    assert delay == pytest.approx(0.75)


def test_compute_delay_applies_jitter(monkeypatch):
    monkeypatch.setattr(backoff, "jitter_factor", lambda: 1.23)

    delay = backoff.compute_delay(1, attempt_start=5.0, now=5.0)

    assert delay == pytest.approx(1.6 * 1.23)


def test_compute_delay_never_negative(monkeypatch):
    monkeypatch.setattr(backoff, "jitter_factor", lambda: 0.77)

    assert backoff.compute_delay(0, attempt_start=0.0, now=120.0) == 0.0


def test_compute_delay_uses_monotonic_clock_by_default(monkeypatch):
    monkeypatch.setattr(backoff, "jitter_factor", lambda: 1.0)
    monkeypatch.setattr(backoff.time, "monotonic", lambda: 100.5)

    assert backoff.compute_delay(0, attempt_start=100.0) == pytest.approx(0.5)
