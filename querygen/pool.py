"""A counting token pool that bounds concurrent work."""

from __future__ import annotations

import threading


class Pool:
    """Hands out at most ``size`` tokens at a time.

    A negative size disables the pool: every operation is a no-op.
    A size of zero makes each ``wait`` hand off directly to a matching ``done``.
    """

    def __init__(self, size: int) -> None:
        self._enabled = size >= 0
        self._size = size if self._enabled else 0
        self._cond = threading.Condition()
        self._issued = 0
        self._outstanding = 0
        self._offered = 0
        self._taken = 0

    def wait(self) -> None:
        """Take a token, blocking until one is free."""
        if not self._enabled:
            return
        with self._cond:
            self._outstanding += 1
            if self._size > 0:
                while self._issued >= self._size:
                    self._cond.wait()
                self._issued += 1
                self._cond.notify_all()
            else:
                self._offered += 1
                ticket = self._offered
                self._cond.notify_all()
                while self._taken < ticket:
                    self._cond.wait()

    def done(self) -> None:
        """Return a token, blocking until one has been taken."""
        if not self._enabled:
            return
        with self._cond:
            if self._size > 0:
                while self._issued == 0:
                    self._cond.wait()
                self._issued -= 1
            else:
                while self._taken >= self._offered:
                    self._cond.wait()
                self._taken += 1
            self._outstanding -= 1
            self._cond.notify_all()

    def num(self) -> int:
        """Return the number of tokens currently handed out."""
        with self._cond:
            return self._issued

    def size(self) -> int:
        """Return the total number of tokens."""
        return self._size

    def wait_all(self) -> None:
        """Block until every token taken or requested has been returned."""
        with self._cond:
            while self._outstanding > 0:
                self._cond.wait()

    def async_wait_all(self) -> threading.Event:
        """Return an event that is set once every token has been returned."""
        event = threading.Event()

        def _watch() -> None:
            self.wait_all()
            event.set()

        threading.Thread(target=_watch, daemon=True).start()
        return event