r"""
Argbind declaration records.

Overview
- Specs
  • FlagSpec: named option, long (``--name``) and/or short (``-n``) alias, either
    boolean (``FlagKind.BOOL``) or value-carrying (``FlagKind.VALUE``).
  • PositionalSpec: value bound by position (registration order).
  • ExtrasSpec: catch-all tail of positional tokens beyond the declared positionals.

- Introspection & representation
  • SpecType metaclass provides stable __repr__/__rich_repr__ and exposes the
    fields listed in __introspectable__ as read-only properties.

Metadata (sanitized on construction)
- Shared
  • descr: None | str (short help), non-empty when provided.
- Named (FlagSpec)
  • long: None | str, no leading '-', no '=' and no whitespace.
  • short: None | str of exactly one character, not '-', '=' or whitespace.
  • at least one of long/short is required.
- Value-bearing (FlagSpec/PositionalSpec/ExtrasSpec)
  • metavar/name: None | str, non-empty when provided; defaults to the binder's
    placeholder tag.

Every sanitizing failure caused by a bad declaration raises RegistrationError
(a ValueError); passing objects of the wrong type raises TypeError.
"""
import enum
import functools
import operator
import re

from rich.text import Text

from .binders import binder
from .destinations import Bool, Strings
from .faults import RegistrationError
from .utils import *


class FlagKind(enum.Enum):
    """
    Parsing rules differ between boolean flags and value flags: a boolean may
    omit its value and never takes the next token, a value flag always needs one.
    """
    BOOL = "bool"
    VALUE = "value"


class SpecType(type):
    """
    Metaclass that turns declaration classes into read-only, introspectable records.

    Responsibilities
    - Expose selected fields as read-only properties using mirror() for all
      names listed in __introspectable__.
    - Provide stable, readable __repr__/__rich_repr__ implementations for
      diagnostics and pretty printing.
    - Derive __typename__ from the class name ("FlagSpec" -> "flag-spec") for messages.
    """
    __introspectable__ = ()

    def __new__(cls, name, bases, namespace, **options):
        self = super().__new__(
            cls,
            name,
            bases,
            namespace | {
                "__typename__": re.sub(r"(?<!^)(?=[A-Z])", r"-", name).lower(),
            } | {
                name: mirror(name) for name in namespace.get("__introspectable__", ())
            },
        )

        @rename("__repr__")
        def __repr__(self):
            return f"{type(self).__typename__}({
                ", ".join(map(functools.partial(operator.mod, "%s=%r"), self.__rich_repr__()))
            })"
        self.__repr__ = __repr__

        @rename("__rich_repr__")
        def __rich_repr__(self):
            for name in type(self).__introspectable__:
                yield name, getattr(self, name)
        self.__rich_repr__ = __rich_repr__

        return self


def _sanitize_metadata(cls, metadata, /):
    """
    Internal: normalize and validate the shared 'descr' field.

    - descr: optional short description. If omitted (None), it stays None.
      If provided, it must be a non-empty string (or rich Text) after trimming.
    """
    if not isinstance(descr := metadata["descr"], str | Text | None):
        raise TypeError(f"{cls.__typename__} 'descr' must be a string")
    elif isinstance(descr, str) and not (descr := descr.strip()):
        raise RegistrationError(f"{cls.__typename__} 'descr' cannot be empty")
    metadata["descr"] = descr


def _sanitize_named_metadata(cls, metadata, /):
    """
    Internal: validate the long/short names of a flag.

    Accepted forms
    - long: "verbose", "ignore-case", "flag_equal" (declared without dashes)
    - short: "v", "C"

    Raises
    - TypeError: names of the wrong type.
    - RegistrationError: both names missing, or a name of the wrong shape.
    """
    long, short = metadata["long"], metadata["short"]

    if long is None and short is None:
        raise RegistrationError(
            f"{cls.__typename__} must specify a long name, a short name, or both",
            hint="declare the flag as declare_flag('name', 'n', destination)"
        )

    if long is not None:
        if not isinstance(long, str):
            raise TypeError(f"{cls.__typename__} long name must be a string")
        if not re.fullmatch(r"[^\s=-][^\s=]*", long):
            raise RegistrationError(
                f"{cls.__typename__} long name {long!r} must be non-empty, "
                "must not start with '-' and cannot contain '=' or spaces"
            )

    if short is not None:
        if not isinstance(short, str):
            raise TypeError(f"{cls.__typename__} short name must be a string")
        if not re.fullmatch(r"[^\s=-]", short):
            raise RegistrationError(
                f"{cls.__typename__} short name {short!r} must be a single character other than '-', '=' or a space"
            )


def _sanitize_parametric_metadata(cls, metadata, key, /):
    """
    Internal: validate a display name ('metavar' for flags, 'name' for positionals).
    """
    if not isinstance(value := metadata[key], str | None):
        raise TypeError(f"{cls.__typename__} {key!r} must be a string")
    elif isinstance(value, str) and not (value := value.strip()):
        raise RegistrationError(f"{cls.__typename__} {key!r} cannot be empty")
    metadata[key] = value


class FlagSpec(metaclass=SpecType):
    """
    Named option declaration.

    The kind is derived from the destination: Bool destinations (optional or
    not) give boolean flags, everything else gives value flags. ``metavar``
    defaults to the binder's placeholder tag (``[num]``, ``[str]``,
    ``[A|B|C]``), which is None for boolean flags.
    """

    __introspectable__ = (
        "long",
        "short",
        "metavar",
        "descr",
        "kind",
    )

    def __init__(self, long, short, destination, /, *, metavar=None, descr=None):
        metadata = {
            "long": long,
            "short": short,
            "metavar": metavar,
            "descr": descr,
        }
        _sanitize_metadata(type(self), metadata)
        _sanitize_named_metadata(type(self), metadata)
        _sanitize_parametric_metadata(type(self), metadata, "metavar")

        self._binder = binder(destination)
        self._kind = FlagKind.BOOL if isinstance(destination, Bool) else FlagKind.VALUE
        metadata["metavar"] = metadata["metavar"] or self._binder.tag

        for name, object in metadata.items():
            setattr(self, "_" + name, object)

    @property
    def binder(self):
        return self._binder

    @property
    def destination(self):
        return self._binder.destination

    def render(self):
        """
        Return the "-s, --long=VAL" form of this flag used by usage output.
        """
        value = "" if self._metavar is None else "=" + self._metavar
        if self._short is not None and self._long is not None:
            return "-%s, --%s%s" % (self._short, self._long, value)
        if self._short is not None:
            return "-%s%s" % (self._short, value)
        return "    --%s%s" % (self._long, value)


class PositionalSpec(metaclass=SpecType):
    """
    Positional declaration; ``position`` is its 0-based registration index.
    """

    __introspectable__ = (
        "name",
        "descr",
        "position",
    )

    def __init__(self, destination, /, *, position, name=None, descr=None):
        metadata = {
            "name": name,
            "descr": descr,
            "position": position,
        }
        _sanitize_metadata(type(self), metadata)
        _sanitize_parametric_metadata(type(self), metadata, "name")

        self._binder = binder(destination)
        metadata["name"] = metadata["name"] or self._binder.tag or "ARG"

        for name, object in metadata.items():
            setattr(self, "_" + name, object)

    @property
    def binder(self):
        return self._binder

    @property
    def destination(self):
        return self._binder.destination


class ExtrasSpec(metaclass=SpecType):
    """
    Catch-all declaration receiving positional tokens beyond the declared
    positionals; the destination must be a ``Strings``.
    """

    __introspectable__ = (
        "name",
        "descr",
    )

    def __init__(self, destination, /, *, name=None, descr=None):
        if not isinstance(destination, Strings):
            raise TypeError(f"{type(self).__typename__} destination must be a Strings destination")
        metadata = {
            "name": name,
            "descr": descr,
        }
        _sanitize_metadata(type(self), metadata)
        _sanitize_parametric_metadata(type(self), metadata, "name")
        metadata["name"] = metadata["name"] or "STR"

        self._destination = destination
        for name, object in metadata.items():
            setattr(self, "_" + name, object)

    @property
    def destination(self):
        return self._destination


__all__ = (
    "FlagKind",
    "FlagSpec",
    "PositionalSpec",
    "ExtrasSpec",
)

# Remove the internal metaclass from the module namespace to avoid accidental
# exposure in star-imports.
del SpecType
