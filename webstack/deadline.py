"""
Process-wide deadline shared by every step of a run.
"""

import time
from typing import Callable

from .errors import DeadlineExceededError


class Deadline:
    """Wall-clock budget measured from the moment the run starts."""
    
    def __init__(self, budget: float, clock: Callable[[], float] = time.monotonic):
        self.budget = budget
        self._clock = clock
        self._expires_at = clock() + budget
    
    def remaining(self) -> float:
        """Seconds left before the deadline, never negative."""
        return max(0.0, self._expires_at - self._clock())
    
    def expired(self) -> bool:
        return self.remaining() <= 0
    
    def check(self, step: str) -> None:
        """
        Raise if the deadline has elapsed.
        
        Args:
            step: Name of the step about to start
            
        Raises:
            DeadlineExceededError: If no budget is left
        """
        if self.expired():
            raise DeadlineExceededError(step, self.budget)
