"""Keyboard capture through blessed."""

from contextlib import AbstractContextManager
from types import TracebackType

from blessed import Terminal
from blessed.keyboard import Keystroke

from stellar_reality.game.input import KEY_BACKSPACE, KEY_ENTER, KEY_ESCAPE

_KEY_ALIASES = {"\r": KEY_ENTER, "\x08": KEY_BACKSPACE}


def translate_keystroke(term: Terminal, keystroke: Keystroke) -> str | None:
    """
    Map a blessed keystroke onto the keys ``handle_key`` understands.

    Multi-byte sequences (arrows, Home, Delete, function keys) other than
    Enter, Escape and Backspace are dropped.
    """
    if not keystroke:
        return None
    if keystroke.is_sequence:
        return {
            term.KEY_ENTER: KEY_ENTER,
            term.KEY_ESCAPE: KEY_ESCAPE,
            term.KEY_BACKSPACE: KEY_BACKSPACE,
        }.get(keystroke.code)
    return _KEY_ALIASES.get(str(keystroke), str(keystroke))


class RawKeyReader:
    """
    Context manager putting the terminal in cbreak mode.

    ``read_key`` waits at most ``timeout`` seconds so the caller keeps its
    tick cadence while no key is pressed.
    """

    def __init__(self, term: Terminal | None = None) -> None:
        self.term = term or Terminal()
        self._cbreak: AbstractContextManager | None = None

    def __enter__(self) -> "RawKeyReader":
        self._cbreak = self.term.cbreak()
        self._cbreak.__enter__()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        if self._cbreak is not None:
            self._cbreak.__exit__(exc_type, exc, traceback)
            self._cbreak = None

    def read_key(self, timeout: float) -> str | None:
        """Return one key, or None when nothing usable arrived in time."""
        return translate_keystroke(self.term, self.term.inkey(timeout=timeout))
