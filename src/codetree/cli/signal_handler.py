"""Interrupt handling for the codetree CLI.

While a run is in progress SIGINT only sets a flag. The output writer checks the flag
before each write and stops, and the CLI exits with code 130.

SIGPIPE is left alone. Python ignores it at startup, so a closed stdout surfaces as
BrokenPipeError from print, which the CLI handles directly.
"""

import os
import signal
import sys
import types
from threading import Event
from types import FrameType
from typing import Any, Optional, Type


class InterruptHandler:
    """Records SIGINT while installed instead of raising KeyboardInterrupt.

    The first SIGINT sets ``interrupted`` and restores the previous handler, so a
    second Ctrl+C behaves as it would without codetree's handler.

    Attributes:
        interrupted: Set once SIGINT has been received while installed.

    Example:
        >>> handler = InterruptHandler()
        >>> with handler:  # doctest: +SKIP
        ...     run()
        >>> handler.interrupted.is_set()
        False
    """

    def __init__(self) -> None:
        self.interrupted = Event()
        self._previous: Any = None
        self._installed = False

    def _handle(self, signum: int, frame: Optional[FrameType]) -> None:
        self.interrupted.set()
        self.restore()

    def install(self) -> None:
        """Start recording SIGINT. Clears any earlier interruption."""
        self.interrupted.clear()
        self._previous = signal.signal(signal.SIGINT, self._handle)
        self._installed = True

    def restore(self) -> None:
        """Put back the SIGINT handler that was active before install()."""
        if not self._installed:
            return
        signal.signal(signal.SIGINT, self._previous)
        self._installed = False

    def __enter__(self) -> "InterruptHandler":
        self.install()
        return self

    def __exit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc_val: Optional[BaseException],
        exc_tb: Optional[types.TracebackType],
    ) -> None:
        self.restore()


# Shared by the CLI and the output writer
interrupt_handler = InterruptHandler()


def silence_stdout() -> None:
    """Point stdout at the null device.

    Used after stdout's reader has gone away, so that the interpreter's final flush
    at shutdown does not raise a second BrokenPipeError.
    """
    devnull = os.open(os.devnull, os.O_WRONLY)
    os.dup2(devnull, sys.stdout.fileno())
