"""Cooperative cancellation for long-running commands.

A command can only be interrupted where it chooses to look: at its
suspension points (``await token.sleep(...)``, ``await token.race(...)``)
and at loop boundaries (``token.raise_if_cancelled()``).  A handler
that never suspends runs to completion even if the user presses
Ctrl+C.

The session creates a fresh ``CancellationToken`` for every turn and
drops it once the turn settles, so a late ``cancel()`` can never leak
into the next command.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable
from typing import TypeVar

from stellar_term.errors import CommandCancelled

_T = TypeVar("_T")


class CancellationToken:
    """A one-shot cancellation flag that async code can wait on."""

    def __init__(self) -> None:
        """Create a token in the not-cancelled state."""
        self._cancelled = False
        self._event: asyncio.Event | None = None

    @property
    def cancelled(self) -> bool:
        """Return True once ``cancel()`` has been called."""
        return self._cancelled

    def _get_event(self) -> asyncio.Event:
        if self._event is None:
            self._event = asyncio.Event()
            if self._cancelled:
                self._event.set()
        return self._event

    def cancel(self) -> None:
        """Request cancellation (idempotent).

        Must be called from the event loop's thread; use
        ``loop.call_soon_threadsafe(token.cancel)`` from anywhere else.
        """
        self._cancelled = True
        if self._event is not None:
            self._event.set()

    def raise_if_cancelled(self) -> None:
        """Raise ``CommandCancelled`` if cancellation was requested."""
        if self._cancelled:
            raise CommandCancelled

    async def wait(self) -> None:
        """Suspend until the token is cancelled."""
        await self._get_event().wait()

    async def sleep(self, seconds: float) -> None:
        """Sleep for *seconds*, returning early if cancelled.

        Does not raise; call ``raise_if_cancelled()`` afterwards when
        the caller must stop.
        """
        if self._cancelled:
            return
        try:
            await asyncio.wait_for(self.wait(), timeout=seconds)
        except TimeoutError:
            pass

    async def race(self, awaitable: Awaitable[_T], timeout: float | None = None) -> _T:
        """Await *awaitable* unless the token fires or *timeout* passes first.

        Args:
            awaitable: The operation to wait for.
            timeout: Seconds before giving up, or None for no limit.

        Returns:
            The awaitable's result.

        Raises:
            CommandCancelled: If the token fired first.
            TimeoutError: If the timeout elapsed first.

        """
        self.raise_if_cancelled()
        work = asyncio.ensure_future(awaitable)
        stopper = asyncio.ensure_future(self.wait())
        try:
            done, _pending = await asyncio.wait(
                {work, stopper},
                timeout=timeout,
                return_when=asyncio.FIRST_COMPLETED,
            )
        finally:
            stopper.cancel()
        if work in done:
            return work.result()
        work.cancel()
        if stopper in done:
            raise CommandCancelled
        msg = f"timed out after {timeout}s"
        raise TimeoutError(msg)
