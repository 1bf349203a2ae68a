"""
Token scanner: the state machine that drives the registries and binders
over one token sequence.

states
- flags mode (initial): tokens are classified as long flags, short clusters,
  terminators or positionals.
- positional-only mode: entered on '--' or a bare '-'; every later token is
  positional, even when it starts with '-'.

per token, in flags mode
- '--'            → switch to positional-only mode.
- '--name[=v]'    → long flag. bool flags bind 'v' or "true"; value flags take
                    'v', else the next token when it does not start with '-'.
- '-'             → positional token, then positional-only mode.
- '-abc'          → short cluster, processed left to right (see _cluster).
- anything else   → positional.

positional routing uses a single cursor counted across both modes: the nth
positional token binds to the nth positional spec, then spills over into the
extras tail, and is a fault when no extras were declared.

faults are raised through trigger() at the failing token; destinations bound
by earlier tokens keep their values.
"""
import enum
import logging
from collections import deque

from .faults import *
from .specs import FlagKind
from .utils import *

logger = logging.getLogger(__name__)


class Mode(enum.Enum):
    FLAGS = "flags"
    POSITIONALS = "positionals"


class Action(enum.Enum):
    """What the cluster loop does after one short flag was handled."""
    ADVANCE_ONE_CHARACTER = enum.auto()
    CONTINUE_TO_NEXT_TOKEN = enum.auto()
    SKIP_NEXT_TOKEN = enum.auto()


class Scanner:
    """
    One-shot scanner over a token sequence.

    parameters
    - flags: FlagRegistry
    - positionals: PositionalRegistry
    - extras: ExtrasSpec | None
    - arena: Arena, receives retained token text.
    - prog: program name, only used to decorate faults.

    state (reset on every scan)
    - _tokens: deque of pending tokens.
    - _index: 1-based ordinal of the last consumed token (for messages).
    - _mode: Mode.
    - _cursor: number of positional tokens seen so far.
    - _extras: tokens spilled past the declared positionals.
    """

    def __init__(self, flags, positionals, extras, arena, *, prog=None):
        self._flags = flags
        self._positionals = positionals
        self._extraspec = extras
        self._arena = arena
        self._prog = prog

        self._tokens = deque()
        self._index = 0
        self._mode = Mode.FLAGS
        self._cursor = 0
        self._extras = []

    @property
    def mode(self):
        return self._mode

    @property
    def cursor(self):
        return self._cursor

    def scan(self, tokens, /):
        """
        bind every token of ``tokens`` and, when extras were declared, hand the
        spilled tail to the extras destination (possibly empty).
        """
        self._tokens = deque(tokens)
        self._index = 0
        self._mode = Mode.FLAGS
        self._cursor = 0
        self._extras = []

        while self._tokens:
            token = self._tokens.popleft()
            self._index += 1

            if not isinstance(token, str):
                raise TypeError("tokens must be strings, got %r at %s position" % (token, ordinal(self._index)))

            if self._mode is Mode.POSITIONALS:
                self._positional(token)
            elif token == "--":
                logger.debug("'--' at %s position, positional-only from here", ordinal(self._index))
                self._mode = Mode.POSITIONALS
            elif token.startswith("--"):
                self._long(token[2:])
            elif token == "-":
                self._positional(token)
                self._mode = Mode.POSITIONALS
            elif token.startswith("-"):
                self._cluster(token[1:])
            else:
                self._positional(token)

        if self._extraspec is not None:
            self._extraspec.destination._store(self._extras)

    def _next(self):
        """consume and return the next token unless it is missing or flag-like."""
        if not self._tokens:
            return Unset
        if not isinstance(token := self._tokens[0], str):
            raise TypeError("tokens must be strings, got %r at %s position" % (token, ordinal(self._index + 1)))
        if token.startswith("-"):
            return Unset
        self._index += 1
        return self._tokens.popleft()

    def _fail(self, fault, /, **options):
        trigger(fault, **{"prog": self._prog, "index": self._index} | options)

    def _bind(self, spec, raw, input, index, /):
        """
        run the spec's binder and retain the text when the value is backed by it.
        """
        if (fault := spec.binder.bind(raw)) is not None:
            kind = "flag" if spec.kind is FlagKind.BOOL else "option"
            self._fail(ConversionError(
                "cannot set %s %r to %r at %s position" % (kind, input, raw, ordinal(index)),
                **fault.options
            ), input=input, index=index)
        if spec.binder.retains:
            self._arena.retain(raw)
        logger.debug("bound %r to %r", raw, input)

    def _long(self, body):
        index = self._index
        name, equal, value = body.partition("=")
        input = "--" + name

        if (spec := self._flags.bylong(name)) is None:
            return self._fail(UnrecognizedFlagError(
                "unrecognized option %r at %s position" % (input, ordinal(index)),
                hint="check the OPTIONS section of the usage for the declared names",
                input=input,
            ), input=input, index=index)

        if spec.kind is FlagKind.BOOL:
            return self._bind(spec, value if equal else "true", input, index)

        if not equal and (value := self._next()) is Unset:
            return self._fail(MissingValueError(
                "missing value for option %r at %s position" % (input, ordinal(index)),
                hint="pass it inline (%s=<value>) or as the next argument" % input,
                input=input,
            ), input=input, index=index)

        self._bind(spec, value, input, index)

    def _cluster(self, body):
        """
        walk a short-flag cluster ('-abc', '-abc=no', '-fgvalue', '-g value').
        """
        while body:
            match self._short(body):
                case Action.ADVANCE_ONE_CHARACTER:
                    body = body[1:]
                case Action.CONTINUE_TO_NEXT_TOKEN | Action.SKIP_NEXT_TOKEN:
                    break

    def _short(self, body):
        index = self._index
        char, rest = body[0], body[1:]
        input = "-" + char

        if (spec := self._flags.byshort(char)) is None:
            return self._fail(UnrecognizedFlagError(
                "unrecognized option %r at %s position" % (input, ordinal(index)),
                hint="check the OPTIONS section of the usage for the declared names",
                input=input,
            ), input=input, index=index)

        if spec.kind is FlagKind.BOOL:
            if rest.startswith("="):
                self._bind(spec, rest[1:], input, index)
                return Action.CONTINUE_TO_NEXT_TOKEN
            self._bind(spec, "true", input, index)
            return Action.ADVANCE_ONE_CHARACTER

        if rest.startswith("="):
            self._bind(spec, rest[1:], input, index)
            return Action.CONTINUE_TO_NEXT_TOKEN
        if rest:
            self._bind(spec, rest, input, index)
            return Action.CONTINUE_TO_NEXT_TOKEN
        if (value := self._next()) is Unset:
            self._fail(MissingValueError(
                "missing value for option %r at %s position" % (input, ordinal(index)),
                hint="pass it inline (%s=<value>, %s<value>) or as the next argument" % (input, input),
                input=input,
            ), input=input, index=index)
        self._bind(spec, value, input, index)
        return Action.SKIP_NEXT_TOKEN

    def _positional(self, token):
        position = self._cursor
        self._cursor += 1

        if (spec := self._positionals.get(position)) is not None:
            if (fault := spec.binder.bind(token)) is not None:
                self._fail(ConversionError(
                    "cannot set argument %s to %r at %s position" % (spec.name, token, ordinal(self._index)),
                    **fault.options
                ), input=spec.name)
            if spec.binder.retains:
                self._arena.retain(token)
            logger.debug("bound %r to argument %s", token, spec.name)
        elif self._extraspec is not None:
            self._extras.append(self._arena.retain(token))
            logger.debug("appended %r to %s", token, self._extraspec.name)
        else:
            self._fail(UnexpectedPositionalError(
                "unexpected argument %r at %s position" % (token, ordinal(self._index)),
                hint="expected at most %d positional argument%s" % (
                    len(self._positionals),
                    "" if len(self._positionals) == 1 else "s"
                ) if self._positionals else "this program takes no positional arguments",
                token=token,
            ), token=token)


__all__ = (
    "Mode",
    "Action",
    "Scanner",
)
