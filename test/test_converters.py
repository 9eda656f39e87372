"""
Converter behavioral tests.

Scope
- Validate every builtin converter on accepted and rejected tokens.
- Validate that converters are total (Failure instead of exceptions).
- Validate the explicit registry (lookup/resolve/register) and lifting.

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import codecs
import math
import pathlib
import unittest
from unittest import TestCase

from optlet import converters
from optlet.converters import Success, Failure


class TestNumericConverters(TestCase):
    """Behavioral tests for the boolean and numeric converters."""

    def testBoolean(self):
        self.assertEqual(converters.boolean("true"), Success(True))
        self.assertEqual(converters.boolean("FALSE"), Success(False))
        self.assertEqual(converters.boolean("yes"), Failure("must be a boolean"))

    def testIntegerWidths(self):
        cases = (
            (converters.byte, 127, 128, "must be a byte"),
            (converters.short, 32767, 32768, "must be a short integer"),
            (converters.integer, 2 ** 31 - 1, 2 ** 31, "must be an integer"),
            (converters.long, 2 ** 63 - 1, 2 ** 63, "must be a long integer"),
        )
        for converter, highest, overflow, message in cases:
            with self.subTest(converter=converter.__name__):
                self.assertEqual(converter(str(highest)), Success(highest))
                self.assertEqual(converter(str(-highest - 1)), Success(-highest - 1))
                self.assertEqual(converter(str(overflow)), Failure(message))
                self.assertEqual(converter("1.5"), Failure(message))
                self.assertEqual(converter(""), Failure(message))

    def testIntegerSyntax(self):
        self.assertEqual(converters.integer("+7"), Success(7))
        self.assertEqual(converters.integer("-10"), Success(-10))
        for token in ("1_000", " 1", "0x10", "١٢"):
            with self.subTest(token=token):
                self.assertIsInstance(converters.integer(token), Failure)

    def testDouble(self):
        self.assertEqual(converters.double("1.0"), Success(1.0))
        self.assertEqual(converters.double("-2.5e3"), Success(-2500.0))
        self.assertEqual(converters.double("abc"), Failure("must be a double-precision float"))

    def testFloatsRejectUnderscores(self):
        self.assertEqual(converters.double("1_000"), Failure("must be a double-precision float"))
        self.assertEqual(converters.single("1_000.5"), Failure("must be a single-precision float"))

    def testSingleRoundsToBinary32(self):
        value, = converters.single("0.1")
        self.assertNotEqual(value, 0.1)
        self.assertAlmostEqual(value, 0.1, places=7)
        self.assertEqual(converters.single("1.0"), Success(1.0))
        self.assertEqual(converters.single("abc"), Failure("must be a single-precision float"))

    def testSingleOverflowIsInfinite(self):
        value, = converters.single("1e300")
        self.assertTrue(math.isinf(value) and value > 0)
        value, = converters.single("-1e300")
        self.assertTrue(math.isinf(value) and value < 0)


class TestTextualConverters(TestCase):
    """Behavioral tests for string/charset/path/uri/url converters."""

    def testString(self):
        self.assertEqual(converters.string("-anything"), Success("-anything"))

    def testCharset(self):
        match converters.charset("iso-8859-1"):
            case Success(info):
                self.assertEqual(info.name, codecs.lookup("latin-1").name)
            case other:
                self.fail("unexpected %r" % (other,))
        self.assertEqual(converters.charset("no-such-charset"), Failure("no such charset"))

    def testPath(self):
        self.assertEqual(converters.path("foo/bar.txt"), Success(pathlib.Path("foo/bar.txt")))

    def testUri(self):
        match converters.uri("mailto:someone@example.com"):
            case Success(parts):
                self.assertEqual(parts.scheme, "mailto")
            case other:
                self.fail("unexpected %r" % (other,))
        self.assertIsInstance(converters.uri("relative/path"), Success)

    def testUriRejectsIllegalCharacters(self):
        match converters.uri("http://example.com/a b"):
            case Failure(message):
                self.assertIn("index 20", message)
            case other:
                self.fail("unexpected %r" % (other,))

    def testUriRejectsBadAuthority(self):
        self.assertIsInstance(converters.uri("http://[::1"), Failure)
        self.assertIsInstance(converters.uri("http://example.com:port/"), Failure)

    def testUrl(self):
        match converters.url("https://example.com:8443/path?q=1"):
            case Success(parts):
                self.assertEqual((parts.hostname, parts.port, parts.path), ("example.com", 8443, "/path"))
            case other:
                self.fail("unexpected %r" % (other,))

    def testUrlRequiresKnownProtocol(self):
        self.assertEqual(converters.url("example.com"), Failure("no protocol: example.com"))
        self.assertEqual(converters.url("gopher://example.com"), Failure("unknown protocol: gopher"))

    def testConvertersAreTotal(self):
        for converter in set(converters.CONVERTERS.values()):
            for token in ("", "-", "\\", "\x00", "://", "[", "9" * 400):
                with self.subTest(converter=converter.__name__, token=token):
                    self.assertIsInstance(converter(token), Success | Failure)


class TestRegistry(TestCase):
    """Behavioral tests for the explicit converter registry."""

    def tearDown(self):
        converters.CONVERTERS.pop("upper", None)

    def testLookupByName(self):
        self.assertIs(converters.lookup("int"), converters.integer)
        self.assertIs(converters.lookup("file"), converters.path)

    def testLookupUnknownName(self):
        with self.assertRaises(ValueError):
            converters.lookup("duration")

    def testResolve(self):
        self.assertIs(converters.resolve("str"), converters.string)
        self.assertIs(converters.resolve(converters.double), converters.double)
        with self.assertRaises(TypeError):
            converters.resolve(42)

    def testRegisterFunctionForm(self):
        upper = converters.register("upper", lambda arg: Success(arg.upper()))
        self.assertIs(converters.lookup("upper"), upper)
        with self.assertRaises(ValueError):
            converters.register("upper", upper)
        converters.register("upper", upper, replace=True)

    def testRegisterDecoratorForm(self):
        @converters.register("upper")
        def upper(arg):
            return Success(arg.upper())

        self.assertEqual(converters.lookup("upper")("abc"), Success("ABC"))

    def testOptionalLifting(self):
        lifted = converters.optional("int")
        self.assertEqual(lifted("3"), Success(3))
        self.assertEqual(lifted("x"), Failure("must be an integer"))
        self.assertEqual(lifted.__name__, "optional(integer)")


if __name__ == "__main__":
    unittest.main()
