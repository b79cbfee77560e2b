"""Keyboard handling: command keys and line editing for text prompts."""

from dataclasses import dataclass
from enum import Enum

KEY_ENTER = "\n"
KEY_ESCAPE = "\x1b"
KEY_BACKSPACE = "\x7f"


class Mode(Enum):
    """What the keyboard is currently driving."""

    NORMAL = "normal"
    BUILD = "build"
    RESEARCH = "research"


@dataclass(frozen=True)
class InputMode:
    """Current mode plus the text typed so far in a prompt."""

    mode: Mode = Mode.NORMAL
    text: str = ""

    @property
    def is_prompt(self) -> bool:
        return self.mode is not Mode.NORMAL


NORMAL = InputMode()


@dataclass(frozen=True)
class Command:
    """A committed build or research request."""

    mode: Mode
    name: str


class Quit:
    """Player asked to leave."""


QUIT = Quit()

Action = Command | Quit | None

_MODE_KEYS = {"b": Mode.BUILD, "r": Mode.RESEARCH}


def handle_key(current: InputMode, key: str) -> tuple[InputMode, Action]:
    """
    Apply one key press.

    Returns the next input mode and the resulting action, if any.
    """
    if not current.is_prompt:
        if key == "q":
            return current, QUIT
        if key in _MODE_KEYS:
            return InputMode(_MODE_KEYS[key]), None
        return current, None

    if key == KEY_ENTER:
        name = current.text.strip()
        return NORMAL, Command(current.mode, name) if name else None
    if key == KEY_ESCAPE:
        return NORMAL, None
    if key == KEY_BACKSPACE:
        return InputMode(current.mode, current.text[:-1]), None
    if len(key) == 1 and key.isprintable():
        return InputMode(current.mode, current.text + key), None
    return current, None
