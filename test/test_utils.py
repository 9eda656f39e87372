"""
Tests for the internal helpers.

This module verifies semantic guarantees of optlet.utils:
- Unset singleton identity, falsy semantics, representation and finality.
- coalesce() preserving legitimate falsy values.
- rename() in both function and decorator forms.
- mirror() read-only properties and container freezing.
- Frozen immutability once fields are settled.
"""
import copy
import unittest
from threading import Thread, Lock
from types import MappingProxyType
from unittest import TestCase

from optlet.utils import *


class UnsetTest(TestCase):
    """
    Test suite for the `UnsetType` singleton.
    """

    def testSingleton(self) -> None:
        """
        The constructor returns the exported instance on every call.
        """
        self.assertIs(UnsetType(), Unset)
        self.assertIs(UnsetType(), UnsetType())

    def testFalsely(self) -> None:
        self.assertFalse(bool(Unset))
        self.assertNotEqual(Unset, None)
        self.assertNotEqual(Unset, False)  # noqa: E712

    def testRepr(self) -> None:
        self.assertEqual(repr(Unset), "Unset")

    def testCopyPreservesSingleton(self) -> None:
        """
        copy() and deepcopy() preserve the identity of the singleton.
        """
        self.assertIs(copy.copy(Unset), Unset)
        self.assertIs(copy.deepcopy(Unset), Unset)

    def testThreadSafetySingleton(self) -> None:
        """
        Concurrent constructions return the same instance.
        """
        results: list[UnsetType] = []
        lock: Lock = Lock()

        def worker():
            instance = UnsetType()
            with lock:
                results.append(instance)

        threads: list[Thread] = [Thread(target=worker) for _ in range(16)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        self.assertEqual(len(results), 16)
        for instance in results:
            self.assertIs(instance, Unset)

    def testFinalClass(self) -> None:
        with self.assertRaises(TypeError):
            type("UnsetSubtype", (UnsetType,), {})

    def testUnion(self) -> None:
        self.assertEqual(str | UnsetType, UnsetType | str)


class CoalesceTest(TestCase):
    """
    Test suite for coalesce().
    """

    def testReplacesUnset(self) -> None:
        self.assertEqual(coalesce(Unset, "fallback"), "fallback")
        self.assertIsNone(coalesce(Unset))

    def testPreservesFalsyValues(self) -> None:
        for value in (None, 0, "", [], False):
            with self.subTest(value=value):
                self.assertIs(coalesce(value, "fallback"), value)


class RenameTest(TestCase):
    """
    Test suite for rename().
    """

    def testFunctionForm(self) -> None:
        def work():
            pass

        self.assertIs(rename(work, "do_work"), work)
        self.assertEqual((work.__name__, work.__qualname__), ("do_work", "do_work"))

    def testDecoratorForm(self) -> None:
        @rename("do_work")
        def work():
            pass

        self.assertEqual(work.__name__, "do_work")

    def testRejectsBadArguments(self) -> None:
        with self.assertRaises(TypeError):
            rename()
        with self.assertRaises(TypeError):
            rename(42, "name")
        with self.assertRaises(TypeError):
            rename(lambda: None, 42)
        with self.assertRaises(TypeError):
            rename(len, "size")
        with self.assertRaises(TypeError):
            rename("name")(42)


class MirrorTest(TestCase):
    """
    Test suite for mirror() and Frozen.
    """

    class Holder(Frozen):
        __slots__ = ("_items", "_table", "_tags", "_raw")

        items = mirror("items")
        table = mirror("table")
        tags = mirror("tags")
        raw = mirror("raw", frozen=False)

        def __init__(self):
            self._settle(items=[1, 2], table={"a": 1}, tags={"x"}, raw=[3])

    def testFrozenContainers(self) -> None:
        holder = self.Holder()
        self.assertEqual(holder.items, (1, 2))
        self.assertIsInstance(holder.table, MappingProxyType)
        self.assertEqual(holder.tags, frozenset({"x"}))

    def testUnfrozenValue(self) -> None:
        holder = self.Holder()
        self.assertIs(holder.raw, holder.raw)
        self.assertEqual(holder.raw, [3])

    def testPropertyName(self) -> None:
        self.assertEqual(self.Holder.items.fget.__name__, "items")

    def testImmutable(self) -> None:
        holder = self.Holder()
        with self.assertRaises(AttributeError):
            holder.items = ()
        with self.assertRaises(AttributeError):
            holder._items = []
        with self.assertRaises(AttributeError):
            del holder._items

    def testMirrorRejectsNonString(self) -> None:
        with self.assertRaises(TypeError):
            mirror(1)


if __name__ == '__main__':
    unittest.main()
