"""
Per-pair status tracking.

Keeps only the most recent observation per pair, for answering "what
did we last see for X". Not consulted by the arbitrage decision.
"""

from dataclasses import replace

from crossarb.core.types import PairState, PairStatus
from crossarb.utils.time import get_timestamp_ms


class PairStatusTracker:
    """
    Owner and sole writer of PairStatus records.

    Each `record` overwrites the pair's entry unconditionally; readers
    get copies through `snapshot`.
    """

    __slots__ = ("_statuses",)

    def __init__(self) -> None:
        self._statuses: dict[str, PairStatus] = {}

    def record(
        self,
        pair_key: str,
        aggregator_price: float | None = None,
        stream_price: float | None = None,
        stream_age_ms: int | None = None,
        error: str | None = None,
        checked_at_ms: int | None = None,
    ) -> PairStatus:
        """
        Overwrite the status of a pair with the latest observation.

        The state is `error` when an error is given, else `checked`.
        """
        status = PairStatus(
            last_checked_ms=checked_at_ms if checked_at_ms is not None else get_timestamp_ms(),
            state=PairState.ERROR if error else PairState.CHECKED,
            aggregator_price=aggregator_price,
            stream_price=stream_price,
            stream_age_ms=stream_age_ms,
            error=error,
        )
        self._statuses[pair_key] = status
        return status

    def get(self, pair_key: str) -> PairStatus | None:
        """Copy of one pair's status."""
        status = self._statuses.get(pair_key)
        return replace(status) if status else None

    def snapshot(self) -> dict[str, PairStatus]:
        """Read-only copy of all statuses."""
        return {key: replace(s) for key, s in self._statuses.items()}

    def counts(self) -> dict[str, int]:
        """Pairs with both prices, with an error, and everything else."""
        valid = errored = skipped = 0
        for status in self._statuses.values():
            if status.state == PairState.ERROR:
                errored += 1
            elif status.aggregator_price is not None and status.stream_price is not None:
                valid += 1
            else:
                skipped += 1
        return {"valid": valid, "errored": errored, "skipped": skipped}

    def to_dict(self) -> dict[str, dict[str, object]]:
        return {key: status.to_dict() for key, status in self.snapshot().items()}

    def __len__(self) -> int:
        return len(self._statuses)
