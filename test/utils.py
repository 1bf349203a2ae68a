# python
"""
Utility tests: the Unset marker, coalesce, mirror, ASCII folding and ordinals.
"""
import pickle
import unittest
from unittest import TestCase

from argbind.utils import Unset, UnsetType, coalesce, mirror, rename, asciifold, ordinal


class Record:
    names = mirror("names")
    label = mirror("label")

    def __init__(self):
        self._names = ["a", "b"]
        self._label = "record"


class TestUnset(TestCase):

    def testSingleton(self):
        self.assertIs(UnsetType(), Unset)
        self.assertIs(pickle.loads(pickle.dumps(Unset)), Unset)

    def testFalsyAndPrintable(self):
        self.assertFalse(Unset)
        self.assertEqual(repr(Unset), "Unset")

    def testCoalesce(self):
        self.assertEqual(coalesce(Unset, 0), 0)
        self.assertIsNone(coalesce(None, 0))
        self.assertEqual(coalesce("", "fallback"), "")


class TestMirror(TestCase):

    def testListsAreHandedOutAsTuples(self):
        record = Record()
        self.assertEqual(record.names, ("a", "b"))
        self.assertEqual(record.label, "record")

    def testReadOnly(self):
        with self.assertRaises(AttributeError):
            Record().label = "other"

    def testGetterIsNamed(self):
        self.assertEqual(Record.names.fget.__name__, "names")

    def testRename(self):
        @rename("__repr__")
        def function():
            pass
        self.assertEqual((function.__name__, function.__qualname__), ("__repr__", "__repr__"))


class TestAsciiFold(TestCase):

    def testFoldsAsciiOnly(self):
        self.assertEqual(asciifold("YelloW"), "yellow")
        self.assertEqual(asciifold("STRAßE"), "straße")
        self.assertEqual(asciifold("ÉTÉ"), "ÉtÉ")


class TestOrdinal(TestCase):

    def testWords(self):
        self.assertEqual(ordinal(1), "first")
        self.assertEqual(ordinal(10), "tenth")

    def testSuffixes(self):
        self.assertEqual(ordinal(11), "11th")
        self.assertEqual(ordinal(12), "12th")
        self.assertEqual(ordinal(21), "21st")
        self.assertEqual(ordinal(22), "22nd")
        self.assertEqual(ordinal(103), "103rd")
        self.assertEqual(ordinal(113), "113th")


if __name__ == "__main__":
    unittest.main()
