"""Cancellable deadlines and fixed-interval polling for blocking waits."""

import logging
import threading
import time
from collections.abc import Callable

from seq_client.rpc.errors import DeadlineExceededError, RequestCancelledError

logger = logging.getLogger(__name__)

DEFAULT_WAIT_INTERVAL = 0.5


class Deadline:
    """
    Caller-supplied bound on how long an operation may block.

    A deadline can expire on its own (``timeout``) or be cancelled from any
    thread with :meth:`cancel`. Sleeping through :meth:`sleep` wakes up as
    soon as either happens.

    Parameters
    ----------
    timeout : float | None
        Seconds from now until the deadline expires. None means no time limit;
        the deadline then only ends through :meth:`cancel`.

    """

    def __init__(self, timeout: float | None = None) -> None:
        if timeout is not None and timeout < 0:
            msg = f"timeout must not be negative, got {timeout}"
            raise ValueError(msg)
        self.timeout = timeout
        self._expires_at = None if timeout is None else time.monotonic() + timeout
        self._cancelled = threading.Event()

    def cancel(self) -> None:
        """
        Cancel the deadline, waking any thread sleeping on it.

        A request already in flight is not interrupted. It runs until it
        returns or hits its own timeout, and the wait ends right after.

        """
        self._cancelled.set()

    @property
    def cancelled(self) -> bool:
        """Whether :meth:`cancel` was called."""
        return self._cancelled.is_set()

    @property
    def expired(self) -> bool:
        """Whether the time limit has passed."""
        return self._expires_at is not None and time.monotonic() >= self._expires_at

    def remaining(self) -> float | None:
        """
        Seconds left before the deadline expires.

        Returns
        -------
        float | None
            Remaining seconds (never negative), or None without a time limit

        """
        if self._expires_at is None:
            return None
        return max(0.0, self._expires_at - time.monotonic())

    def check(self) -> None:
        """
        Raise if the deadline is over.

        Raises
        ------
        RequestCancelledError
            If the deadline was cancelled
        DeadlineExceededError
            If the time limit has passed

        """
        if self.cancelled:
            raise RequestCancelledError("wait cancelled")
        if self.expired:
            msg = f"deadline of {self.timeout}s exceeded"
            raise DeadlineExceededError(msg)

    def sleep(self, seconds: float) -> None:
        """
        Suspend the calling thread, waking early on cancellation or expiry.

        Parameters
        ----------
        seconds : float
            Maximum time to sleep

        Raises
        ------
        RequestCancelledError
            If the deadline ends before or during the sleep

        """
        self.check()
        remaining = self.remaining()
        if remaining is not None:
            seconds = min(seconds, remaining)
        if seconds > 0:
            self._cancelled.wait(seconds)
        self.check()


class WaitConfig:
    """
    Backoff policy for polling.

    Parameters
    ----------
    interval : float
        Fixed delay in seconds between two checks

    """

    def __init__(self, interval: float = DEFAULT_WAIT_INTERVAL) -> None:
        if interval < 0:
            msg = f"interval must not be negative, got {interval}"
            raise ValueError(msg)
        self.interval = interval


def wait_until(
    check: Callable[[], bool],
    deadline: Deadline | None = None,
    config: WaitConfig | None = None,
) -> None:
    """
    Call ``check`` until it returns True.

    Runs on the caller's thread. Between attempts it sleeps for the configured
    interval on ``deadline``, so cancelling the deadline ends the wait within
    one interval. A check already running is not interrupted: with no time
    limit on the deadline, a request made by ``check`` is bounded only by the
    request channel timeout.

    Parameters
    ----------
    check : Callable[[], bool]
        Predicate returning True once the awaited condition holds. Any
        exception it raises aborts the wait and propagates.
    deadline : Deadline | None
        Bound on the wait. Waits forever if None.
    config : WaitConfig | None
        Backoff policy. Uses the default interval if None.

    Raises
    ------
    RequestCancelledError
        If the deadline is cancelled or exceeded before ``check`` succeeds

    """
    deadline = deadline or Deadline()
    config = config or WaitConfig()

    attempt = 0
    while True:
        deadline.check()
        attempt += 1
        if check():
            logger.debug("Wait condition met after %d attempt(s)", attempt)
            return
        deadline.sleep(config.interval)
