"""
Argbind destinations: caller-owned, typed cells the parser writes into.

A destination plays the part of the variable a host program hands to the
parser. The host keeps a reference, declares it against a session, and reads
``value`` after parsing. Every destination kind may be declared ``optional``,
in which case it starts out as None and ``isset`` tells "never written" apart
from "written, even to zero/false".

Kinds
- Bool: True/False.
- Integer: signed or unsigned integer of an arbitrary bit width.
- String: raw token text.
- Choice: closed enumeration over an ``enum.Enum`` subclass or a list of names.
- Strings: ordered sequence of strings, used for the extras tail.

Quick example
    >>> context = Integer(32, signed=False, default=3)
    >>> pattern = String(optional=True)
    >>> pattern.value, pattern.isset
    (None, False)
"""
import enum
from collections.abc import Iterable

from .utils import *


class Destination[_T]:
    """
    Base of all destination kinds.

    Subclasses provide ``__zero__`` (the default of a non-optional destination)
    and may validate their defaults in ``_check``.
    """
    __zero__ = None
    __introspectable__ = ("optional",)

    optional = mirror("optional")

    def __init__(self, default=Unset, /, *, optional=False):
        if not isinstance(optional, bool):
            raise TypeError(f"{type(self).__name__.lower()} 'optional' must be a boolean")
        self._optional = optional
        self._default = coalesce(default, None if optional else type(self).__zero__)
        if self._default is not None or not optional:
            self._check(self._default)
        self._value = self._default
        self._isset = False

    def _check(self, value):
        """Validate a default; raise TypeError/ValueError on mismatch."""

    @property
    def default(self):
        return self._default

    @property
    def value(self):
        return self._value

    @value.setter
    def value(self, value):
        if value is not None or not self._optional:
            self._check(value)
        self._store(value)

    @property
    def isset(self):
        """True once the destination was written, by the parser or by the host."""
        return self._isset

    def reset(self):
        """Restore the declared default and the "never written" state."""
        self._value = self._default
        self._isset = False

    def _store(self, value):
        self._value = value
        self._isset = True

    def __rich_repr__(self):
        for name in type(self).__introspectable__:
            yield name, getattr(self, name)
        yield "value", self._value
        yield "isset", self._isset

    def __repr__(self):
        return f"{type(self).__name__}({", ".join("%s=%r" % pair for pair in self.__rich_repr__())})"


class Bool(Destination[bool]):
    __zero__ = False

    def _check(self, value):
        if not isinstance(value, bool):
            raise TypeError("bool destination value must be a boolean")


class Integer(Destination[int]):
    """
    Integer destination of a given bit width and signedness.

    Parameters
    - width: int (positional, >= 1), number of bits; defaults to 64.
    - signed: bool, two's complement range when True, [0, 2**width) otherwise.
    - default: int within range; 0 unless optional.
    - optional: bool.

    Examples
    - Integer(8, signed=False) accepts 0..255
    - Integer(7) accepts -64..63
    """
    __zero__ = 0
    __introspectable__ = ("width", "signed", "optional")

    width = mirror("width")
    signed = mirror("signed")

    def __init__(self, width=64, /, default=Unset, *, signed=True, optional=False):
        if not isinstance(width, int) or isinstance(width, bool):
            raise TypeError("integer 'width' must be an integer")
        if width < 1:
            raise ValueError("integer 'width' must be a positive integer")
        if not isinstance(signed, bool):
            raise TypeError("integer 'signed' must be a boolean")
        self._width = width
        self._signed = signed
        super().__init__(default, optional=optional)

    @property
    def minimum(self):
        return -(1 << (self._width - 1)) if self._signed else 0

    @property
    def maximum(self):
        return (1 << (self._width - 1)) - 1 if self._signed else (1 << self._width) - 1

    def _check(self, value):
        if not isinstance(value, int) or isinstance(value, bool):
            raise TypeError("integer destination value must be an integer")
        if not self.minimum <= value <= self.maximum:
            raise ValueError(f"integer destination value {value} is out of range [{self.minimum}, {self.maximum}]")


class String(Destination[str]):
    __zero__ = ""

    def _check(self, value):
        if not isinstance(value, str):
            raise TypeError("string destination value must be a string")


class Choice[_E](Destination[_E]):
    """
    Closed enumeration destination.

    ``variants`` is either an ``enum.Enum`` subclass, in which case the bound
    value is the matching member, or an iterable of names, in which case the
    bound value is the declared (canonical) name. Matching ignores ASCII case,
    so variant names must be unique regardless of ASCII case. The first variant is
    the default of a non-optional destination.
    """
    __introspectable__ = ("variants", "optional")

    variants = mirror("variants")

    def __init__(self, variants, /, default=Unset, *, optional=False):
        if isinstance(variants, type) and issubclass(variants, enum.Enum):
            members = {member.name: member for member in variants}
        elif isinstance(variants, Iterable) and not isinstance(variants, str):
            members = {}
            for name in variants:
                if not isinstance(name, str):
                    raise TypeError("choice variant names must be strings")
                if name in members:
                    raise ValueError("choice 'variants' cannot contain duplicates")
                members[name] = name
        else:
            raise TypeError("choice 'variants' must be an enum type or an iterable of names")

        if not members:
            raise ValueError("choice must declare at least one variant")

        folded = set()
        for name in members:
            if not name.strip():
                raise ValueError("choice variant names cannot be empty")
            if asciifold(name) in folded:
                raise ValueError(f"choice variant {name!r} clashes with another variant ignoring case")
            folded.add(asciifold(name))

        self._variants = tuple(members)
        self._members = members
        super().__init__(coalesce(default, None if optional else next(iter(members.values()))), optional=optional)

    def lookup(self, raw):
        """Return the value whose name matches ``raw`` ignoring case, or Unset."""
        folded = asciifold(raw)
        for name, member in self._members.items():
            if asciifold(name) == folded:
                return member
        return Unset

    def _check(self, value):
        if value not in self._members.values():
            raise ValueError(f"choice destination value {value!r} is not one of {list(self._variants)}")


class Strings(Destination[list]):
    """Ordered sequence of strings; the destination of the extras tail."""

    def __init__(self, default=(), /):
        super().__init__(tuple(default))
        self._value = list(self._default)

    def reset(self):
        super().reset()
        self._value = list(self._default)

    def _check(self, value):
        if isinstance(value, str) or not all(isinstance(item, str) for item in value):
            raise TypeError("strings destination value must be a sequence of strings")

    def _store(self, value):
        super()._store(list(value))


__all__ = (
    "Destination",
    "Bool",
    "Integer",
    "String",
    "Choice",
    "Strings",
)
