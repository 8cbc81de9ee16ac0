"""SpendLedger — running total of reported agent spend for one evaluation."""


class SpendLedger:
    """Tracks spend against the total budget.

    Costs are reported by the agent after each call; calls that report no
    cost are counted as free. All access happens on one event loop, so no
    locking is needed.
    """

    def __init__(self, total_usd: float) -> None:
        self._total_usd = total_usd
        self._spent_usd = 0.0

    @property
    def spent_usd(self) -> float:
        return self._spent_usd

    @property
    def remaining_usd(self) -> float:
        return self._total_usd - self._spent_usd

    def record(self, cost_usd: float | None) -> None:
        if cost_usd:
            self._spent_usd += cost_usd

    def exhausted(self, reserve_usd: float) -> bool:
        """True once less than reserve_usd is left to spend."""
        return self.remaining_usd < reserve_usd
