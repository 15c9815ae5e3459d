"""
Exception hierarchy for provisioning runs.
"""

from typing import List, Optional


class WebstackError(Exception):
    """Base class for every error that aborts a run."""


class ConfigurationError(WebstackError):
    """Startup failed before any resource was created."""


class UserDataError(WebstackError):
    """The user-data script could not be read."""

    def __init__(self, path: str, reason: str):
        self.path = path
        super().__init__(f"error reading {path} file: {reason}")


class StepError(WebstackError):
    """An AWS call inside a provisioning step failed."""

    def __init__(self, step: str, message: str):
        self.step = step
        self.message = message
        super().__init__(message)


class DeadlineExceededError(WebstackError):
    """The run deadline elapsed before the pipeline finished."""

    def __init__(self, step: str, budget: float):
        self.step = step
        self.budget = budget
        super().__init__(f"run deadline of {budget:.0f}s exceeded before step '{step}'")


class WaitError(WebstackError):
    """Instances did not all reach the running state."""

    def __init__(self, message: str, instance_ids: List[str], reason: Optional[str] = None):
        self.instance_ids = instance_ids
        self.reason = reason
        super().__init__(message)


class WaitTimeoutError(WaitError):
    """The wait budget was exhausted while an instance was still pending."""


class InstanceFailedError(WaitError):
    """An instance entered a terminal state other than running."""
