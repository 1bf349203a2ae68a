# python
"""
ParseSession lifecycle tests: declaration closing, repeated parses, argv
acquisition, the exit policy, detach/close and the subcommand pattern.
"""
import contextlib
import enum
import io
import sys
import unittest
from unittest import TestCase, mock

from rich.console import Console

from argbind import *


class Direction(enum.Enum):
    Left = "left"
    Right = "right"
    Up = "up"
    Down = "down"


class TestDeclarations(TestCase):

    def testDeclarationClosedAfterParse(self):
        session = ParseSession()
        session.declare_flag("verbose", "v", Bool())
        session.parse([])
        with self.assertRaises(DeclarationClosedError) as context:
            session.declare_flag("quiet", "q", Bool())
        self.assertIsInstance(context.exception, RegistrationError)
        self.assertEqual(context.exception.code, FaultCode.DECLARATION_CLOSED)
        with self.assertRaises(DeclarationClosedError):
            session.declare_positional(String())
        with self.assertRaises(DeclarationClosedError):
            session.declare_extras(Strings())

    def testExtrasDeclaredOnce(self):
        session = ParseSession()
        session.declare_extras(Strings(), name="FILE")
        with self.assertRaises(RegistrationError):
            session.declare_extras(Strings())

    def testDuplicateFlagThroughSession(self):
        session = ParseSession()
        session.declare_flag("verbose", "v", Bool())
        with self.assertRaises(RegistrationError):
            session.declare_flag(None, "v", Bool())

    def testProgramMetadata(self):
        session = ParseSession("grep", "search files")
        self.assertEqual((session.program_name, session.program_summary), ("grep", "search files"))
        with self.assertRaises(TypeError):
            session.program(42)
        with self.assertRaises(TypeError):
            session.summary(None)

    def testRepr(self):
        session = ParseSession("grep")
        session.declare_flag("verbose", "v", Bool())
        self.assertEqual(repr(session), "ParseSession(name='grep', flags=1, positionals=0, extras=None)")


class TestParse(TestCase):

    def testStringIsNotATokenSequence(self):
        with self.assertRaises(TypeError):
            ParseSession().parse("--verbose")

    def testRepeatedParseRestartsCursor(self):
        name = String()
        session = ParseSession()
        session.declare_positional(name)
        session.parse(["first"])
        session.parse(["second"])
        self.assertEqual(name.value, "second")
        self.assertEqual(list(session.arena), ["first", "second"])

    def testSuccessfulParseDoesNotClearLastError(self):
        session = ParseSession()
        session.declare_flag("verbose", "v", Bool())
        with self.assertRaises(UnrecognizedFlagError):
            session.parse(["-x"])
        session.parse(["-v"])
        self.assertIsInstance(session.last_error, UnrecognizedFlagError)

    def testParseArgvUsesBasename(self):
        pattern = String()
        session = ParseSession()
        session.declare_positional(pattern)
        session.parse_argv(["/usr/local/bin/grep", "needle"])
        self.assertEqual(session.program_name, "grep")
        self.assertEqual(list(session.arena), ["grep", "needle"])
        self.assertEqual(pattern.value, "needle")

    def testParseArgvKeepsExplicitName(self):
        session = ParseSession("search")
        session.parse_argv(["/bin/grep"])
        self.assertEqual(session.program_name, "search")
        self.assertEqual(len(session.arena), 0)

    def testParseArgvDefaultsToSysArgv(self):
        verbose = Bool()
        session = ParseSession()
        session.declare_flag("verbose", "v", verbose)
        with mock.patch.object(sys, "argv", ["tool", "-v"]):
            session.parse_argv()
        self.assertIs(verbose.value, True)
        self.assertEqual(session.program_name, "tool")


class TestParseOrExit(TestCase):

    def testExitsWithUsageOnFault(self):
        session = ParseSession("grep")
        session.declare_flag("verbose", "v", Bool())
        stderr = io.StringIO()
        with contextlib.redirect_stderr(stderr), self.assertRaises(SystemExit) as context:
            session.parse_or_exit(["--bogus"])
        self.assertEqual(context.exception.code, 1)
        self.assertIn("unrecognized option '--bogus' at first position", stderr.getvalue())
        self.assertIn("usage:", stderr.getvalue())

    def testReturnsOnSuccess(self):
        verbose = Bool()
        session = ParseSession("grep")
        session.declare_flag("verbose", "v", verbose)
        session.parse_or_exit(["-v"])
        self.assertIs(verbose.value, True)

    def testReadsSysArgvWhenNoTokens(self):
        verbose = Bool()
        session = ParseSession()
        session.declare_flag("verbose", "v", verbose)
        with mock.patch.object(sys, "argv", ["tool", "--verbose=yes"]):
            session.parse_or_exit()
        self.assertIs(verbose.value, True)


class TestOwnership(TestCase):

    def testDetachHandsOverRetainedStrings(self):
        arg0 = String()
        arg1 = String()
        extras = Strings()

        session = ParseSession("tool")
        session.declare_flag("arg0", None, arg0)
        session.declare_positional(arg1)
        session.declare_extras(extras)
        session.parse(["--arg0=one", "two", "three", "four"])

        data = session.detach()

        self.assertEqual(data, ["one", "two", "three", "four"])
        self.assertEqual((arg0.value, arg1.value, extras.value), ("one", "two", ["three", "four"]))
        self.assertEqual(len(session.arena), 0)
        self.assertFalse(session.flags)
        self.assertFalse(session.positionals)
        self.assertIsNone(session.extras)
        self.assertIsNone(session.program_name)
        self.assertFalse(session.parsed)

    def testDetachIsConsuming(self):
        session = ParseSession()
        session.declare_positional(String())
        session.parse(["value"])
        self.assertEqual(session.detach(), ["value"])
        self.assertEqual(session.detach(), [])

    def testDeclareAgainAfterDetach(self):
        session = ParseSession()
        session.declare_flag("verbose", "v", Bool())
        session.parse([])
        session.detach()
        quiet = Bool()
        session.declare_flag("verbose", "v", quiet)
        session.parse(["-v"])
        self.assertIs(quiet.value, True)

    def testDetachClearsLastError(self):
        session = ParseSession()
        with self.assertRaises(UnexpectedPositionalError):
            session.parse(["stray"])
        session.detach()
        self.assertIsNone(session.last_error)

    def testContextManagerCloses(self):
        with ParseSession("tool") as session:
            session.declare_positional(String())
            session.parse(["kept"])
        self.assertEqual(len(session.arena), 0)
        self.assertFalse(session.positionals)

    def testNonRetainingKindsSkipArena(self):
        session = ParseSession()
        session.declare_flag("count", "c", Integer())
        session.declare_flag("verbose", "v", Bool())
        session.parse(["-c", "3", "-v"])
        self.assertEqual(len(session.arena), 0)


class TestSubcommand(TestCase):

    def testExtrasFeedNestedSession(self):
        command = Choice(Direction, optional=True)
        extras = Strings()

        session = ParseSession("move")
        session.declare_positional(command, name="COMMAND")
        session.declare_extras(extras, name="ARGS")
        session.parse(["right", "--", "--verbose"])

        self.assertIs(command.value, Direction.Right)

        verbose = Bool()
        with ParseSession("move right") as nested:
            nested.declare_flag("verbose", "v", verbose)
            nested.parse(extras.value)

        self.assertIs(verbose.value, True)


class TestUsageOutput(TestCase):

    def testUsagePrintsToConsole(self):
        buffer = io.StringIO()
        session = ParseSession("grep")
        session.declare_flag("verbose", "v", Bool(), descr="talk more")
        session.usage(Console(file=buffer, width=80, color_system=None))
        self.assertIn("usage: grep [OPTIONS]", buffer.getvalue())
        self.assertIn("-v, --verbose", buffer.getvalue())


if __name__ == "__main__":
    unittest.main()
