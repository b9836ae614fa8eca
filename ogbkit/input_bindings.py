"""Map actions to a few key codes each."""

from __future__ import annotations

from typing import Callable, Dict, Hashable, List, Optional, Tuple

MAX_KEYS_PER_BINDING = 3

KeyCode = Optional[int]


class KeyBindings:
    """Each action holds a fixed number of key slots; an empty slot is 0 or None."""

    def __init__(self, keys_per_binding: int = MAX_KEYS_PER_BINDING) -> None:
        if keys_per_binding < 1:
            raise ValueError("keys_per_binding must be at least 1")
        self.keys_per_binding = keys_per_binding
        self._binds: Dict[Hashable, List[KeyCode]] = {}

    def bind(self, action: Hashable, slot: int, code: KeyCode) -> None:
        """Put ``code`` in ``slot`` of ``action``; 0 or None clears the slot."""
        if not 0 <= slot < self.keys_per_binding:
            raise IndexError(f"slot {slot} is out of range 0..{self.keys_per_binding - 1}")
        slots = self._binds.setdefault(action, [0] * self.keys_per_binding)
        slots[slot] = code or 0

    def codes(self, action: Hashable) -> Tuple[int, ...]:
        """The codes bound to ``action``, in slot order."""
        return tuple(code for code in self._binds.get(action, ()) if code)

    def is_action_just_pressed(self, action: Hashable, is_key_just_pressed: Callable[[int], bool]) -> bool:
        """True if any key bound to ``action`` was just pressed."""
        return any(is_key_just_pressed(code) for code in self.codes(action))