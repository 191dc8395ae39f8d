"""
Overall time budget shared by the network and subprocess steps of a run.
"""

import time
from typing import Callable, Optional

from .exceptions import DeadlineExceeded


class Deadline:
    """A point in monotonic time after which upstream calls must fail.

    One deadline is created per run and handed to every blocking call, each of
    which uses ``remaining()`` as its own timeout.
    """

    def __init__(self, seconds: float, clock: Callable[[], float] = time.monotonic):
        if seconds <= 0:
            raise ValueError(f"Deadline must be positive, got {seconds}")
        self._clock = clock
        self.seconds = float(seconds)
        self.expires_at = clock() + self.seconds

    @property
    def expired(self) -> bool:
        return self._clock() >= self.expires_at

    def remaining(self, operation: str = "operation") -> float:
        """Seconds left in the budget.

        Raises:
            DeadlineExceeded: If the budget is already spent.
        """
        left = self.expires_at - self._clock()
        if left <= 0:
            raise DeadlineExceeded(
                f"{operation}: {self.seconds:g}s deadline exceeded"
            )
        return left

    def check(self, operation: str = "operation") -> None:
        """Raise DeadlineExceeded if the budget is spent."""
        self.remaining(operation)

    def __repr__(self) -> str:
        return f"Deadline(seconds={self.seconds:g}, remaining={self.expires_at - self._clock():.3f})"


def remaining_or_none(deadline: Optional[Deadline], operation: str) -> Optional[float]:
    """Timeout to pass to a blocking call; None means wait indefinitely."""
    if deadline is None:
        return None
    return deadline.remaining(operation)
