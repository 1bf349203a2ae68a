"""
Ownership arena: session-owned store of retained token text.

Every token whose text backs a String/Choice destination, and every token
appended to the extras tail, is recorded here in the order it was bound. The
caller's token sequence is never assumed to outlive the session; detaching
hands the recorded strings over as an independent list so parsed values can
outlive a short-lived session.
"""
from collections.abc import Sequence


class Arena(Sequence):
    """
    Append-only sequence of strings.

    - retain(text): record a string, return it.
    - detach(): return every recorded string as a new list and empty the arena.
    - release(): empty the arena, dropping the strings.
    """

    def __init__(self):
        self._values = []

    def retain(self, text, /):
        if not isinstance(text, str):
            raise TypeError("arena can only retain strings")
        self._values.append(text)
        return text

    def detach(self):
        values, self._values = self._values, []
        return values

    def release(self):
        self._values = []

    def __getitem__(self, index):
        if isinstance(index, slice):
            return tuple(self._values[index])
        return self._values[index]

    def __len__(self):
        return len(self._values)

    def __repr__(self):
        return f"Arena({self._values!r})"


__all__ = (
    "Arena",
)
