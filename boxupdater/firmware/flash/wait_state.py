"""Polling state management for device wait operations."""

from dataclasses import dataclass
from enum import Enum


class WaitOutcome(str, Enum):
    """Current outcome of a polling wait."""

    WAITING = "waiting"
    SATISFIED = "satisfied"
    TIMED_OUT = "timed_out"
    CANCELLED = "cancelled"


@dataclass
class PollingWaitState:
    """State machine for a check-then-sleep polling loop.

    A loop checks, and if the condition does not hold yet it sleeps for
    ``poll_interval``. After ``max_polls`` sleeps without success the next
    failed check times the wait out. ``max_polls=None`` waits forever.
    """

    name: str
    poll_interval: float
    max_polls: int | None = None

    # Runtime state
    polls: int = 0
    checks: int = 0
    outcome: WaitOutcome = WaitOutcome.WAITING

    @property
    def is_done(self) -> bool:
        """Check if the wait has reached a final outcome."""
        return self.outcome is not WaitOutcome.WAITING

    @property
    def budget_exhausted(self) -> bool:
        """Check if the poll budget has been used up."""
        return self.max_polls is not None and self.polls >= self.max_polls

    @property
    def elapsed_estimate(self) -> float:
        """Approximate seconds spent sleeping so far."""
        return self.polls * self.poll_interval

    def record_check(self, satisfied: bool) -> WaitOutcome:
        """Record the result of one check and return the new outcome."""
        self.checks += 1
        if satisfied:
            self.outcome = WaitOutcome.SATISFIED
        elif self.budget_exhausted:
            self.outcome = WaitOutcome.TIMED_OUT
        return self.outcome

    def record_sleep(self) -> None:
        """Record that one poll interval has elapsed."""
        self.polls += 1

    def cancel(self) -> None:
        """Stop the wait."""
        self.outcome = WaitOutcome.CANCELLED
