"""
Value binders: type-specific conversion of a raw token into a destination.

One binder class exists per destination kind and exactly one binder is built
for a destination when it is declared (see ``binder``). A binder exposes a
single capability, ``bind(raw)``, which either writes the converted value and
returns None, or leaves the destination untouched and returns a
``ConversionError``. Failures are returned, never raised, at this layer; the
scanner decides how to surface them.

Conversion rules
- Bool: ASCII case-insensitive {true, yes, on, y, 1} / {false, no, off, n, 0}.
- Integer: decimal, optional sign when signed, digits only when unsigned,
  range-checked against the destination's bit width.
- String: verbatim.
- Choice: ASCII case-insensitive match against the variant names.
"""
import logging
import re

from .destinations import *
from .faults import ConversionError
from .utils import Unset, asciifold

logger = logging.getLogger(__name__)

TRUTHY = frozenset({"true", "yes", "on", "y", "1"})
FALSY = frozenset({"false", "no", "off", "n", "0"})


class Binder:
    """
    Type-erased binding capability over one destination.

    Attributes
    - tag: short placeholder shown in usage when no value name was declared
      (None for booleans).
    - retains: True when the bound value is backed by the token text, which
      the session then records in its arena.
    """
    tag = None
    retains = False

    def __init__(self, destination, /):
        self._destination = destination

    @property
    def destination(self):
        return self._destination

    def convert(self, raw):
        """Return the converted value, or raise ValueError with a short reason."""
        raise NotImplementedError

    def bind(self, raw):
        try:
            value = self.convert(raw)
        except ValueError as exception:
            logger.debug("cannot bind %r to %r: %s", raw, self._destination, exception)
            return ConversionError(
                "cannot convert %r: %s" % (raw, exception),
                raw=raw,
                reason=str(exception),
                hint="expected %s" % self.describe(),
            )
        self._destination._store(value)
        return None

    def describe(self):
        return "a value"

    def __repr__(self):
        return f"{type(self).__name__}({self._destination!r})"


class BoolBinder(Binder):

    def convert(self, raw):
        folded = asciifold(raw)
        if folded in TRUTHY:
            return True
        if folded in FALSY:
            return False
        raise ValueError("not a boolean")

    def describe(self):
        return "one of %s or %s" % ("/".join(sorted(TRUTHY)), "/".join(sorted(FALSY)))


class IntegerBinder(Binder):
    tag = "[num]"

    def convert(self, raw):
        destination = self._destination
        if not re.fullmatch(r"[-+]?[0-9]+" if destination.signed else r"[0-9]+", raw):
            if re.fullmatch(r"-[0-9]+", raw):
                raise ValueError("negative value for an unsigned integer")
            raise ValueError("not a decimal integer")
        value = int(raw, 10)
        if not destination.minimum <= value <= destination.maximum:
            raise ValueError("out of range for a %d-bit %s integer" % (
                destination.width,
                "signed" if destination.signed else "unsigned"
            ))
        return value

    def describe(self):
        destination = self._destination
        return "an integer between %d and %d" % (destination.minimum, destination.maximum)


class StringBinder(Binder):
    tag = "[str]"
    retains = True

    def convert(self, raw):
        return raw

    def describe(self):
        return "a string"


class ChoiceBinder(Binder):
    retains = True

    def __init__(self, destination, /):
        super().__init__(destination)
        self.tag = "[%s]" % "|".join(destination.variants)

    def convert(self, raw):
        if (value := self._destination.lookup(raw)) is Unset:
            raise ValueError("not one of %s" % ", ".join(self._destination.variants))
        return value

    def describe(self):
        return "one of %s" % self.tag


def binder(destination, /):
    """
    Build the binder matching a destination's kind.

    Raises
    - TypeError: when the object is not a scalar destination (Strings is only
      accepted as an extras destination).
    """
    match destination:
        case Bool():
            return BoolBinder(destination)
        case Integer():
            return IntegerBinder(destination)
        case String():
            return StringBinder(destination)
        case Choice():
            return ChoiceBinder(destination)
        case _:
            raise TypeError(f"unsupported destination {destination!r}; expected Bool, Integer, String or Choice")


__all__ = (
    "Binder",
    "BoolBinder",
    "IntegerBinder",
    "StringBinder",
    "ChoiceBinder",
    "binder",
    "TRUTHY",
    "FALSY",
)
