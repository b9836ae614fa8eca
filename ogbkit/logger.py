"""A logger that writes to a stream and keeps recent messages for an in-game view."""

from __future__ import annotations

import enum
import sys
from collections import deque
from dataclasses import dataclass
from typing import Deque, Dict, List, Optional, TextIO, Tuple, Union

DEFAULT_MAX_MESSAGES = 50
INVALID_LEVEL_PREFIX = "[INVALID LOG LEVEL]"


class LogLevel(enum.IntEnum):
    VERBOSE = 0
    INFO = 1
    WARNING = 2
    ERROR = 3


_LEVEL_NAMES: Dict[LogLevel, str] = {
    LogLevel.VERBOSE: "Verbose",
    LogLevel.INFO: "Info",
    LogLevel.WARNING: "Warning",
    LogLevel.ERROR: "Error",
}


def _as_level(level: Union[LogLevel, int]) -> Optional[LogLevel]:
    try:
        return LogLevel(level)
    except ValueError:
        return None


def level_name(level: Union[LogLevel, int]) -> str:
    """Return the display name of ``level``, or an empty string if it is unknown."""
    known = _as_level(level)
    return _LEVEL_NAMES[known] if known is not None else ""


@dataclass(frozen=True)
class LogMessage:
    message: str
    level: Union[LogLevel, int]


class GameLogger:
    """Writes formatted messages to a stream and keeps the most recent ones.

    Each level can be switched off; messages of a disabled level are dropped
    when logged and hidden from ``visible_messages``. Levels outside the known
    range are always logged with an ``[INVALID LOG LEVEL]`` prefix.
    """

    def __init__(self, max_messages: int = DEFAULT_MAX_MESSAGES, stream: Optional[TextIO] = None) -> None:
        if max_messages < 1:
            raise ValueError("max_messages must be at least 1")
        self._stream = stream
        self._messages: Deque[LogMessage] = deque(maxlen=max_messages)
        self._enabled: Dict[LogLevel, bool] = {level: True for level in LogLevel}

    @property
    def messages(self) -> Tuple[LogMessage, ...]:
        """All kept messages, oldest first."""
        return tuple(self._messages)

    def _require_level(self, level: Union[LogLevel, int]) -> LogLevel:
        known = _as_level(level)
        if known is None:
            raise ValueError(f"unknown log level: {level!r}")
        return known

    def log(self, level: Union[LogLevel, int], text: str) -> Optional[LogMessage]:
        """Log ``text`` at ``level``; return the stored message, or None if the level is off."""
        known = _as_level(level)
        if known is None:
            prefix = INVALID_LEVEL_PREFIX
        else:
            if not self._enabled[known]:
                return None
            prefix = f"[{level_name(known)}]"
            level = known

        message = LogMessage(f"{prefix} {text}\n", level)
        stream = self._stream if self._stream is not None else sys.stdout
        stream.write(message.message)
        self._messages.append(message)
        return message

    def is_enabled(self, level: Union[LogLevel, int]) -> bool:
        return self._enabled[self._require_level(level)]

    def set_enabled(self, level: Union[LogLevel, int], enabled: bool) -> None:
        self._enabled[self._require_level(level)] = bool(enabled)

    def toggle(self, level: Union[LogLevel, int]) -> bool:
        """Flip whether ``level`` is enabled and return the new state."""
        known = self._require_level(level)
        self._enabled[known] = not self._enabled[known]
        return self._enabled[known]

    def visible_messages(self) -> List[LogMessage]:
        """Kept messages whose level is enabled, newest first."""
        visible: List[LogMessage] = []
        for message in reversed(self._messages):
            known = _as_level(message.level)
            if known is not None and not self._enabled[known]:
                continue
            visible.append(message)
        return visible