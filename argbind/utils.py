"""
Argbind utilities shared by the destination, spec and scanner layers.

Overview
- Unset
  • "not provided" marker for parameters where None is a meaningful value
    (an optional destination's default, for instance). Falsy, prints as "Unset".

- coalesce(value, default=None)
  • Unset -> default; everything else, None included, passes through.

- rename("name")
  • Decorator giving generated methods (metaclass __repr__ and friends) a
    readable __name__/__qualname__ in tracebacks.

- mirror("attr")
  • Read-only property over self._attr; lists are handed out as tuples so
    declaration records cannot be edited through their public fields.

- asciifold(text)
  • Lowercase A-Z only; the case-insensitive matching rule for booleans and
    choice variants. Other characters compare as-is ("ß" never equals "ss").

- ordinal(number)
  • Position labels for fault messages ("first", "third", "12th").
"""
import functools
import string


class UnsetType:
    """
    Type of the Unset marker; a single instance exists per process.
    """
    __slots__ = ()
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self):
        return False

    def __repr__(self):
        return "Unset"

    def __reduce__(self):
        return (UnsetType, ())


Unset = UnsetType()


def coalesce(value, default=None, /):
    """
    Examples
    - coalesce(3, 0)      -> 3
    - coalesce(Unset, 0)  -> 0
    - coalesce(None, 0)   -> None
    """
    return default if value is Unset else value


def rename(name, /):
    if not isinstance(name, str):
        raise TypeError("@rename() argument must be a string")

    def decorator(function):
        function.__name__ = function.__qualname__ = name
        return function

    return decorator


def mirror(name, /):
    """
    Expose ``self._<name>`` as a read-only property.
    """
    if not isinstance(name, str):
        raise TypeError("mirror() argument must be a string")

    @rename(name)
    def getter(self):
        value = getattr(self, "_" + name)
        return tuple(value) if isinstance(value, list) else value

    return property(getter)


_ASCII_LOWER = str.maketrans(string.ascii_uppercase, string.ascii_lowercase)


def asciifold(text, /):
    return text.translate(_ASCII_LOWER)


_ORDINAL_WORDS = (
    "first", "second", "third", "fourth", "fifth",
    "sixth", "seventh", "eighth", "ninth", "tenth",
)


@functools.cache
def ordinal(number, /):
    """
    1..10 as words, then "11th", "21st", "112th" and so on.
    """
    if 1 <= number <= len(_ORDINAL_WORDS):
        return _ORDINAL_WORDS[number - 1]
    if 10 < number % 100 < 20:
        return "%dth" % number
    return "%d%s" % (number, {1: "st", 2: "nd", 3: "rd"}.get(number % 10, "th"))


__all__ = (
    "coalesce",
    "rename",
    "mirror",
    "asciifold",
    "ordinal",
    "UnsetType",
    "Unset",
)
