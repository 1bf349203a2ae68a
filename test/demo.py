# python
"""
Runs the grep-like demo script end to end with a patched sys.argv.
"""
import contextlib
import io
import os.path
import runpy
import sys
import unittest
from unittest import TestCase, mock

DEMO = os.path.join(os.path.dirname(os.path.abspath(__file__)), os.pardir, "main.py")


class TestDemo(TestCase):

    def run_demo(self, *arguments):
        with mock.patch.object(sys, "argv", ["grep", *arguments]):
            return runpy.run_path(DEMO, run_name="__main__")

    def testDemoBindsArguments(self):
        with contextlib.redirect_stdout(io.StringIO()):
            namespace = self.run_demo("-i", "-C", "2", "--color=off", "needle", "a.txt", "b.txt")
        self.assertIs(namespace["ignore"].value, True)
        self.assertEqual(namespace["context"].value, 2)
        self.assertIs(namespace["color"].value, namespace["Color"].Off)
        self.assertEqual(namespace["pattern"].value, "needle")
        self.assertEqual(namespace["files"].value, ["a.txt", "b.txt"])

    def testDemoExitsOnBadOption(self):
        stderr = io.StringIO()
        with contextlib.redirect_stderr(stderr), self.assertRaises(SystemExit) as context:
            self.run_demo("--bogus")
        self.assertEqual(context.exception.code, 1)
        self.assertIn("usage: grep [OPTIONS] PATTERN [FILE]...", stderr.getvalue())


if __name__ == "__main__":
    unittest.main()
