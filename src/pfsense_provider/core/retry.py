"""
pfSense Provider - Retry Mechanism

Retries transient API failures with exponential backoff. Configuration errors
are never retried.
"""

import asyncio
import logging
from typing import Any, Callable, List, Optional

from .exceptions import APIError, NetworkError, RateLimitError, TimeoutError

logger = logging.getLogger("pfsense-provider")


class RetryConfig:
    """Configuration for retry mechanism with exponential backoff."""

    def __init__(
        self,
        max_attempts: int = 3,
        base_delay: float = 1.0,
        max_delay: float = 30.0,
        exponential_backoff: bool = True,
        retryable_errors: Optional[List[type]] = None,
    ):
        """Initialize retry configuration.

        Args:
            max_attempts: Maximum number of attempts, including the first one
            base_delay: Base delay in seconds between attempts
            max_delay: Upper bound for a single delay
            exponential_backoff: Double the delay after each failed attempt
            retryable_errors: Error types that trigger a retry
        """
        self.max_attempts = max_attempts
        self.base_delay = base_delay
        self.max_delay = max_delay
        self.exponential_backoff = exponential_backoff
        self.retryable_errors = retryable_errors or [NetworkError, TimeoutError, RateLimitError, APIError]

    def is_retryable(self, error: Exception) -> bool:
        if not isinstance(error, tuple(self.retryable_errors)):
            return False
        # Only server-side API errors are transient
        if type(error) is APIError and error.status_code is not None:
            return error.status_code >= 500
        return True

    def delay_for(self, attempt: int) -> float:
        if self.exponential_backoff:
            return min(self.base_delay * (2**attempt), self.max_delay)
        return self.base_delay


async def retry_with_backoff(
    func: Callable, *args, retry_config: Optional[RetryConfig] = None, **kwargs
) -> Any:
    """Call an async function, retrying transient failures.

    Raises:
        Exception: The last error once all attempts are exhausted, or the
            first non-retryable error
    """
    if retry_config is None:
        retry_config = RetryConfig()

    for attempt in range(retry_config.max_attempts):
        try:
            return await func(*args, **kwargs)
        except Exception as e:
            if not retry_config.is_retryable(e) or attempt == retry_config.max_attempts - 1:
                raise

            delay = retry_config.delay_for(attempt)
            logger.info(f"Attempt {attempt + 1} failed, retrying in {delay}s: {e!s}")
            await asyncio.sleep(delay)
