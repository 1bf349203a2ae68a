"""
Argbind parse session: declare, parse, detach.

What this module provides
- ParseSession: owns the flag registry, the positional registry, the optional
  extras spec, the arena of retained strings, and the last error. It is the
  single entry point host programs use.

Lifecycle
- declaration phase: declare_flag / declare_positional / declare_extras.
  Declaring after the first parse raises DeclarationClosedError.
- parse phase: parse(tokens) may be called several times; each call restarts
  the positional cursor. Faults are raised and also kept in last_error.
- release: detach() hands the arena's strings to the caller and resets the
  session to a fresh declaration state; close() (or leaving a ``with`` block)
  drops everything.

Quick start
    from argbind import ParseSession, Bool, Integer, String, Strings

    context = Integer(32, signed=False, default=3)
    ignore = Bool()
    pattern = String(optional=True)
    files = Strings()

    with ParseSession("grep", "search files for a pattern") as session:
        session.declare_flag("context", "C", context, metavar="LINES")
        session.declare_flag("ignore-case", "i", ignore)
        session.declare_positional(pattern, name="PATTERN")
        session.declare_extras(files, name="[FILE]")
        session.parse(["-C", "2", "-i", "needle", "a.txt", "b.txt"])

Threading
- A session has no internal locking; use one session per thread or guard it.
"""
import logging
import os.path
import sys

from rich.console import Console

from . import usage
from .arena import Arena
from .faults import *
from .registry import FlagRegistry, PositionalRegistry
from .scanner import Scanner
from .specs import FlagSpec, ExtrasSpec

logger = logging.getLogger(__name__)


class ParseSession:
    """
    Declarations, arena and error state for one command line.

    Parameters
    - name: str | None, program name shown in usage (see program()).
    - summary: str | None, paragraph shown below the usage line.
    - colorful: bool, style usage and faults (keyword-only).
    - fancy: bool, wrap usage in a rich panel (keyword-only).
    """

    def __init__(self, name=None, summary=None, /, *, colorful=True, fancy=False):
        self._colorful = bool(colorful)
        self._fancy = bool(fancy)
        self._flags = FlagRegistry()
        self._positionals = PositionalRegistry()
        self._arena = Arena()
        self._reset()
        if name is not None:
            self.program(name)
        if summary is not None:
            self.summary(summary)

    def _reset(self):
        self._flags.clear()
        self._positionals.clear()
        self._extras = None
        self._arena.release()
        self._last_error = None
        self._parsed = False
        self._name = None
        self._summary = None

    # --- read-only state -------------------------------------------------

    @property
    def flags(self):
        return self._flags

    @property
    def positionals(self):
        return self._positionals

    @property
    def extras(self):
        return self._extras

    @property
    def arena(self):
        return self._arena

    @property
    def last_error(self):
        """The fault of the most recent failed parse, or None."""
        return self._last_error

    @property
    def parsed(self):
        return self._parsed

    @property
    def program_name(self):
        return self._name

    @property
    def program_summary(self):
        return self._summary

    @property
    def colorful(self):
        return self._colorful

    @property
    def fancy(self):
        return self._fancy

    # --- program metadata ------------------------------------------------

    def program(self, name, /):
        if not isinstance(name, str):
            raise TypeError("program name must be a string")
        self._name = name

    def summary(self, text, /):
        if not isinstance(text, str):
            raise TypeError("program summary must be a string")
        self._summary = text

    # --- declarations ----------------------------------------------------

    def _ensure_declarable(self):
        if self._parsed:
            raise DeclarationClosedError(
                "cannot declare arguments after parsing has begun",
                hint="declare everything first, or detach() to start a fresh session"
            )

    def declare_flag(self, long, short, destination, /, *, metavar=None, descr=None):
        """
        Declare a flag named ``--long`` and/or ``-short`` writing into ``destination``.

        Pass None for the name you do not want. Bool destinations make boolean
        flags (``--verbose``, ``-v``, ``--verbose=no``); any other destination
        makes a value flag (``--context=3``, ``--context 3``, ``-C3``, ``-C 3``).

        Raises
        - RegistrationError: both names missing, bad name shape, or a name
          already declared.
        - DeclarationClosedError: the session already parsed.
        - TypeError: unsupported destination or wrongly typed metadata.
        """
        self._ensure_declarable()
        return self._flags.declare(FlagSpec(long, short, destination, metavar=metavar, descr=descr))

    def declare_positional(self, destination, /, *, name=None, descr=None):
        """
        Declare the next positional argument; positions follow declaration order.
        """
        self._ensure_declarable()
        return self._positionals.declare(destination, name=name, descr=descr)

    def declare_extras(self, destination, /, *, name=None, descr=None):
        """
        Declare the catch-all tail receiving positional tokens beyond the
        declared positionals; ``destination`` must be a Strings.
        """
        self._ensure_declarable()
        if self._extras is not None:
            raise RegistrationError(
                "extras are already declared as %r" % self._extras.name,
                hint="a session accepts a single extras declaration"
            )
        self._extras = ExtrasSpec(destination, name=name, descr=descr)
        logger.debug("declared extras %r", self._extras)
        return self._extras

    # --- parsing ---------------------------------------------------------

    def parse(self, tokens, /):
        """
        Bind ``tokens`` (program name already stripped) to the declarations.

        Raises the ParseFault of the first failing token; the same fault is
        kept in last_error. Destinations bound before the failure keep their
        values.
        """
        if isinstance(tokens, str):
            raise TypeError("parse() expects a sequence of tokens, not a string")
        self._parsed = True
        scanner = Scanner(self._flags, self._positionals, self._extras, self._arena, prog=self._name)
        try:
            scanner.scan(tokens)
        except ParseFault as fault:
            self._last_error = fault
            logger.debug("parse failed: %s", fault)
            raise

    def parse_argv(self, argv=None, /):
        """
        Parse a full argv (``sys.argv`` when omitted). When no program name
        was set, the basename of argv[0] becomes the program name.
        """
        argv = list(sys.argv if argv is None else argv)
        if argv and self._name is None:
            self._name = self._arena.retain(os.path.basename(argv[0]))
        self.parse(argv[1:])

    def parse_or_exit(self, tokens=None, /):
        """
        Parse ``tokens`` (or ``sys.argv`` when omitted); on a parse fault print
        the usage, headed by the error, to stderr and exit with status 1.
        """
        try:
            if tokens is None:
                self.parse_argv()
            else:
                self.parse(tokens)
        except ParseFault:
            self.usage(Console(stderr=True))
            sys.exit(1)

    def usage(self, console=None, /):
        """Print the usage block (and the last error, if any)."""
        (console or Console()).print(usage.render(self))

    # --- ownership -------------------------------------------------------

    def detach(self):
        """
        Hand the retained strings over to the caller and reset the session
        to a fresh, empty declaration state.
        """
        values = self._arena.detach()
        logger.debug("detached %d retained strings", len(values))
        self._reset()
        return values

    def close(self):
        self._reset()

    def __enter__(self):
        return self

    def __exit__(self, *exception):
        self.close()

    def __repr__(self):
        return "ParseSession(name=%r, flags=%d, positionals=%d, extras=%r)" % (
            self._name,
            len(self._flags),
            len(self._positionals),
            None if self._extras is None else self._extras.name,
        )


__all__ = (
    "ParseSession",
)
