"""Cancellation and deadline handle threaded through credential calls.

An :class:`OperationContext` is passed to
:meth:`CredentialManager.get_first_valid` and from there to every
:meth:`CredentialSource.get_credentials` call. Sources check it before and
after blocking work so that a cancelled or expired caller is never kept
waiting.

Example:
    >>> from credential_manager import CredentialManager, OperationContext
    >>>
    >>> with OperationContext.with_timeout(10) as ctx:
    ...     credential = manager.get_first_valid(ctx)
"""

import threading
import time
from typing import Optional

from credential_manager.exceptions import (
    ContextError,
    DeadlineExceededError,
    OperationCancelledError,
)


class OperationContext:
    """Carries a cancellation flag and an optional deadline.

    Deadlines are expressed on the :func:`time.monotonic` clock. A context
    created with a ``parent`` is done as soon as its parent is done, and its
    deadline is never later than the parent's.

    Leaving a ``with`` block cancels the context.
    """

    def __init__(
        self,
        deadline: Optional[float] = None,
        parent: Optional["OperationContext"] = None,
    ) -> None:
        if parent is not None and parent.deadline is not None:
            if deadline is None or parent.deadline < deadline:
                deadline = parent.deadline
        self._deadline = deadline
        self._parent = parent
        self._cancelled = threading.Event()

    @classmethod
    def background(cls) -> "OperationContext":
        """Return a context that has no deadline and is only cancelled explicitly."""
        return cls()

    @classmethod
    def with_timeout(
        cls, seconds: float, parent: Optional["OperationContext"] = None
    ) -> "OperationContext":
        """Return a context whose deadline is ``seconds`` from now."""
        return cls(deadline=time.monotonic() + seconds, parent=parent)

    @classmethod
    def with_deadline(
        cls, deadline: float, parent: Optional["OperationContext"] = None
    ) -> "OperationContext":
        """Return a context expiring at the monotonic instant ``deadline``."""
        return cls(deadline=deadline, parent=parent)

    def child(self, timeout: Optional[float] = None) -> "OperationContext":
        """Derive a context that is done when this one is done."""
        deadline = None if timeout is None else time.monotonic() + timeout
        return OperationContext(deadline=deadline, parent=self)

    @property
    def deadline(self) -> Optional[float]:
        return self._deadline

    @property
    def cancelled(self) -> bool:
        if self._cancelled.is_set():
            return True
        return self._parent is not None and self._parent.cancelled

    @property
    def done(self) -> bool:
        return self.err() is not None

    def cancel(self) -> None:
        self._cancelled.set()

    def remaining(self) -> Optional[float]:
        """Seconds until the deadline, clamped at zero; ``None`` without one."""
        if self._deadline is None:
            return None
        return max(0.0, self._deadline - time.monotonic())

    def err(self) -> Optional[ContextError]:
        """Return the error describing why the context is done, if it is.

        Cancellation takes precedence over an elapsed deadline.
        """
        if self.cancelled:
            return OperationCancelledError()
        if self._deadline is not None and time.monotonic() >= self._deadline:
            return DeadlineExceededError()
        return None

    def raise_if_done(self) -> None:
        error = self.err()
        if error is not None:
            raise error

    def wait(self, timeout: Optional[float] = None) -> bool:
        """Block until the context is done or ``timeout`` elapses.

        Returns:
            bool: True if the context is done.
        """
        end = None if timeout is None else time.monotonic() + timeout
        while not self.done:
            # Wake periodically so ancestor cancellation and deadlines are seen.
            slice_ = 0.05
            remaining = self.remaining()
            if remaining is not None:
                slice_ = min(slice_, remaining)
            if end is not None:
                left = end - time.monotonic()
                if left <= 0:
                    return False
                slice_ = min(slice_, left)
            self._cancelled.wait(slice_)
        return True

    def __enter__(self) -> "OperationContext":
        return self

    def __exit__(self, *exc_info) -> None:
        self.cancel()

    def __repr__(self) -> str:
        return (
            f"OperationContext(remaining={self.remaining()!r}, "
            f"cancelled={self.cancelled!r})"
        )
