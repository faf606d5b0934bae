from dataclasses import dataclass

from tenacity import RetryCallState
from tenacity.wait import wait_base


@dataclass(frozen=True)
class RetryPolicy:
    """How many times to try an operation and how long to wait in between.

    The default gives 4 attempts in total with waits of 1s, 2s and 4s.
    """

    max_attempts: int = 4
    initial_delay: float = 1.0
    max_delay: float = 10.0
    multiplier: float = 2.0

    def __post_init__(self):
        if self.max_attempts < 1:
            raise ValueError(f"max_attempts must be at least 1, got {self.max_attempts}")
        if self.initial_delay < 0 or self.max_delay < 0:
            raise ValueError("delays must not be negative")
        if self.multiplier <= 0:
            raise ValueError(f"multiplier must be positive, got {self.multiplier}")


class BackoffPolicy(wait_base):
    """Exponential backoff capped at ``policy.max_delay``.

    ``delay`` is pure so it can be checked without any time passing; calling
    the instance adapts it to tenacity's wait protocol, whose attempt numbers
    start at 1.
    """

    def __init__(self, policy: RetryPolicy):
        self.policy = policy

    def delay(self, attempt: int) -> float:
        if attempt < 0:
            raise ValueError(f"attempt must be non-negative, got {attempt}")
        try:
            raw = self.policy.initial_delay * self.policy.multiplier**attempt
        except OverflowError:
            return self.policy.max_delay
        return min(raw, self.policy.max_delay)

    def __call__(self, retry_state: RetryCallState) -> float:
        return self.delay(retry_state.attempt_number - 1)
