"""
Unit tests for PairStatusTracker.
"""

from crossarb.core.types import PairState
from crossarb.telemetry.status import PairStatusTracker


class TestPairStatusTracker:
    """Tests for PairStatusTracker."""

    def test_record_checked(self, status_tracker: PairStatusTracker) -> None:
        status = status_tracker.record("SOL", aggregator_price=100.5, stream_price=100.0)

        assert status.state == PairState.CHECKED
        assert status.error is None
        assert "SOL" in status_tracker.snapshot()
        assert len(status_tracker) == 1

    def test_record_error(self, status_tracker: PairStatusTracker) -> None:
        status = status_tracker.record("BONK", stream_price=0.00002, error="NO_ROUTE")

        assert status.state == PairState.ERROR
        assert status.error == "NO_ROUTE"
        assert status.aggregator_price is None
        assert status.stream_price == 0.00002

    def test_latest_record_wins(self, status_tracker: PairStatusTracker) -> None:
        status_tracker.record("SOL", error="PROVIDER_ERROR", checked_at_ms=1)
        status_tracker.record("SOL", aggregator_price=101.0, stream_price=100.0, checked_at_ms=2)

        status = status_tracker.get("SOL")
        assert status is not None
        assert status.state == PairState.CHECKED
        assert status.error is None
        assert status.last_checked_ms == 2

    def test_snapshot_is_a_copy(self, status_tracker: PairStatusTracker) -> None:
        status_tracker.record("SOL", aggregator_price=100.0, stream_price=100.0)

        snapshot = status_tracker.snapshot()
        snapshot["SOL"].aggregator_price = 1.0
        snapshot.pop("SOL")

        status = status_tracker.get("SOL")
        assert status is not None
        assert status.aggregator_price == 100.0

    def test_counts(self, status_tracker: PairStatusTracker) -> None:
        status_tracker.record("SOL", aggregator_price=100.0, stream_price=100.0)
        status_tracker.record("JUP", aggregator_price=1.0)
        status_tracker.record("BONK", error="NO_ROUTE")

        assert status_tracker.counts() == {"valid": 1, "errored": 1, "skipped": 1}

    def test_to_dict(self, status_tracker: PairStatusTracker) -> None:
        status_tracker.record(
            "SOL",
            aggregator_price=100.5,
            stream_price=100.0,
            stream_age_ms=250,
            checked_at_ms=1704067200000,
        )

        data = status_tracker.to_dict()
        assert data == {
            "SOL": {
                "last_checked": "2024-01-01T00:00:00+00:00",
                "state": "checked",
                "aggregator_price": 100.5,
                "stream_price": 100.0,
                "stream_age_ms": 250,
                "error": None,
            }
        }

    def test_unknown_pair(self, status_tracker: PairStatusTracker) -> None:
        assert status_tracker.get("NOPE") is None
