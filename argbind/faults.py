"""
Argbind faults (declaration and parse errors) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every user-facing issue.
  Codes are grouped by domain (declaration vs parsing) to keep copy consistent
  and make logs/searches predictable.
- ArgbindException: base type that carries message + options and knows how to
  render itself in a friendly, lowercased and actionable way through rich.
- ParseFault: base of the four recoverable parse-time kinds.
- trigger(): central entry point to surface a fault with extra context.
- getdoc(): optional description lookup for a code from the host application.

UX goals
- Position-first messages: parse faults include the ordinal position of the
  offending token (“at third position”).
- Soft but technical language: short titles, one-sentence bodies, a single hint.

Integration
- The scanner builds faults, stores the latest one as the session's last error,
  and calls trigger(fault, **ctx), which raises it. The engine never exits the
  process on its own; ParseSession.parse_or_exit is the opt-in exit policy.
"""
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset


class FaultCode(IntEnum):
    """
    canonical fault codes used across the engine (stable identifiers).

    grouping (by high-level domain)
    - declarations (101xx)
      • INVALID_DECLARATION, DECLARATION_CLOSED
    - parsing (111xx)
      • UNRECOGNIZED_FLAG, MISSING_VALUE, CONVERSION_FAILURE, UNEXPECTED_POSITIONAL

    normalize() allows host remapping to custom labels while keeping code-stability.
    """
    # --- declaration errors (10xxx) ---
    INVALID_DECLARATION   = 10101
    DECLARATION_CLOSED    = 10102

    # --- parse errors (11xxx) ---
    UNRECOGNIZED_FLAG     = 11101
    MISSING_VALUE         = 11102
    CONVERSION_FAILURE    = 11103
    UNEXPECTED_POSITIONAL = 11104

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels. when no mapping
        is present, the numeric value is returned as a string.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


class ArgbindException(Exception):
    """
    base of every fault raised by argbind.

    a fault is a message plus a read-only bag of options (code, title, hint and
    any context the reporter wants to show, such as token/index). options are
    merged with __replace__ so a fault can be enriched before it is triggered.
    """
    __code__ = FaultCode.INVALID_DECLARATION
    __title__ = "invalid declaration"

    def __init__(self, message=Unset, /, **options):
        assert message is Unset or isinstance(message, str)
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType({
            "code": type(self).__code__,
            "title": type(self).__title__,
        } | options)

    @property
    def code(self):
        return self.options["code"]

    def __str__(self):
        return "" if self.message is Unset else self.message

    def __rich__(self):
        main = __import__("__main__")
        colorful = self.options.get("colorful", True)
        fancy = self.options.get("fancy", False)

        styles = defaultdict(str, {
            # header parts
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #00E5FF",  # neon cyan fault code
            "error-title": "bold #FF4DA6",  # friendly pinky title

            # body
            "error-message": "#C8C8D0",  # soft light gray message
            "hint-arrow": "#9CE19C dim",  # gentle green arrow
            "hint": "italic #9CE19C",  # gentle green hint text
        } | getattr(main, "__styles__", {}))

        def styler(style):
            return styles[style] if colorful else ""

        def text(fragment, style=""):
            if not fragment:
                return Text("")
            if not colorful:
                return Text(str(fragment))
            if isinstance(fragment, Text):
                return fragment
            return Text(str(fragment), style)

        prog = text(getattr(main, "__prog__", self.options.get("prog") or "PROGRAM"), styler("prog-name"))

        header = Text.assemble(
            "[ ",
            prog,
            " — ",
            text(self.options["code"].normalize(), styler("code")),
            " | ",
            text(self.options["title"].title(), styler("error-title")),
            " ]"
        )
        message = text(str(self), styler("error-message"))
        renders = [message]
        if hint := self.options.get("hint"):
            renders.append(Text.assemble(text(" → ", styler("hint-arrow")), text(hint, styler("hint"))))

        if fancy:
            return Panel(Group(*renders), title=header, title_align="left")
        return Group(header, *renders)

    def __trigger__(self):
        raise self from None

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class RegistrationError(ArgbindException, ValueError):
    """invalid or duplicate declaration, raised at declaration time."""
    __code__ = FaultCode.INVALID_DECLARATION
    __title__ = "invalid declaration"


class DeclarationClosedError(RegistrationError):
    """declaration attempted after the session started parsing."""
    __code__ = FaultCode.DECLARATION_CLOSED
    __title__ = "declarations are closed"


class ParseFault(ArgbindException):
    """recoverable parse-time failure; the caller decides what happens next."""


class UnrecognizedFlagError(ParseFault):
    __code__ = FaultCode.UNRECOGNIZED_FLAG
    __title__ = "unrecognized option"


class MissingValueError(ParseFault):
    __code__ = FaultCode.MISSING_VALUE
    __title__ = "missing value"


class ConversionError(ParseFault):
    __code__ = FaultCode.CONVERSION_FAILURE
    __title__ = "invalid value"


class UnexpectedPositionalError(ParseFault):
    __code__ = FaultCode.UNEXPECTED_POSITIONAL
    __title__ = "unexpected argument"


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see ArgbindException).
    - options are merged into the fault via __replace__(**options) before triggering.
    - argbind faults always raise; rendering is left to the caller or the usage renderer.
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    fault.__replace__(**options).__trigger__()


def getdoc(code, /):
    """
    optional documentation fetch for a fault code.

    the host application may expose a __docs__ mapping in __main__ where keys
    are FaultCode instances and values are short documentation strings.
    """
    if not isinstance(code, FaultCode):
        raise TypeError("getdoc() argument must be a fault-code")
    try:
        return getattr(__import__("__main__"), "__docs__", {})[code]
    except KeyError:
        return None


__all__ = (
    "ArgbindException",
    "RegistrationError",
    "DeclarationClosedError",
    "ParseFault",
    "UnrecognizedFlagError",
    "MissingValueError",
    "ConversionError",
    "UnexpectedPositionalError",
    "FaultCode",
    "trigger",
    "getdoc",
)
