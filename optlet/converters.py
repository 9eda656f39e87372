"""
Optlet argument converters.

A converter is a pure, total function from one raw token to either
Success(value) or Failure(message). Converters never raise; the message is a
short, fixed, user-readable text such as "must be an integer". Processors
(see optlet.processors) decide what a failure means for the parse.

Builtins
- boolean: "true"/"false" (any case)              → bool
- byte, short, integer, long: signed decimal       → int, range-checked to 8/16/32/64 bits
- single: float rounded to IEEE-754 binary32       → float
- double: float                                    → float
- string: the token itself                         → str
- charset: a codec name known to the codecs module → codecs.CodecInfo
- path: a filesystem path                          → pathlib.Path
- uri: a syntactically valid URI reference         → urllib.parse.SplitResult
- url: an absolute URI with a known protocol       → urllib.parse.SplitResult

single and double follow float() syntax, without digit-grouping underscores.

Registry
- Converters are looked up explicitly, either as values or by name through
  lookup("int"); register() adds host-specific converters.

Lifting
- optional(converter) widens a converter to T | None. Success passes through
  untouched and failure propagates unchanged; the lifted converter is what
  optional-argument processors pair with a None default.
"""
import codecs
import collections
import math
import pathlib
import re
import struct
import urllib.parse

from .utils import *

Success = collections.namedtuple("Success", ("value",))
Success.__doc__ = "Successful conversion carrying the converted value."

Failure = collections.namedtuple("Failure", ("message",))
Failure.__doc__ = "Failed conversion carrying a fixed, user-readable message."

_DECIMAL = re.compile(r"[+-]?[0-9]+")

# Characters a URI may never contain literally.
_ILLEGAL = frozenset(' "<>\\^`{|}\t\r\n')

_PROTOCOLS = frozenset({"http", "https", "ftp", "file", "jar", "mailto"})


def _bounded(bits, message, /):
    low, high = -(1 << (bits - 1)), 1 << (bits - 1)

    def converter(arg):
        if not _DECIMAL.fullmatch(arg):
            return Failure(message)
        value = int(arg)
        if not low <= value < high:
            return Failure(message)
        return Success(value)
    return converter


def boolean(arg):
    match arg.lower():
        case "true":
            return Success(True)
        case "false":
            return Success(False)
        case _:
            return Failure("must be a boolean")


byte = rename(_bounded(8, "must be a byte"), "byte")
short = rename(_bounded(16, "must be a short integer"), "short")
integer = rename(_bounded(32, "must be an integer"), "integer")
long = rename(_bounded(64, "must be a long integer"), "long")


def single(arg):
    if "_" in arg:
        return Failure("must be a single-precision float")
    try:
        value = float(arg)
    except ValueError:
        return Failure("must be a single-precision float")
    try:
        value, = struct.unpack("f", struct.pack("f", value))
    except OverflowError:
        # Out of binary32 range rounds to infinity.
        value = math.copysign(math.inf, value)
    return Success(value)


def double(arg):
    if "_" in arg:
        return Failure("must be a double-precision float")
    try:
        return Success(float(arg))
    except ValueError:
        return Failure("must be a double-precision float")


def string(arg):
    return Success(arg)


def charset(arg):
    try:
        return Success(codecs.lookup(arg))
    except (LookupError, ValueError):
        # ValueError: embedded null character
        return Failure("no such charset")


def path(arg):
    return Success(pathlib.Path(arg))


def uri(arg):
    for index, char in enumerate(arg):
        if char in _ILLEGAL:
            return Failure("illegal character at index %d: %s" % (index, arg))
    try:
        parts = urllib.parse.urlsplit(arg)
        # Accessing the port validates it.
        parts.port
    except ValueError as error:
        return Failure("%s: %s" % (str(error).lower(), arg))
    return Success(parts)


def url(arg):
    match uri(arg):
        case Failure() as failure:
            return failure
        case Success(parts) if not parts.scheme:
            return Failure("no protocol: %s" % arg)
        case Success(parts) if parts.scheme not in _PROTOCOLS:
            return Failure("unknown protocol: %s" % parts.scheme)
        case success:
            return success


CONVERTERS = {
    "bool": boolean,
    "boolean": boolean,
    "byte": byte,
    "short": short,
    "int": integer,
    "integer": integer,
    "long": long,
    "float": single,
    "single": single,
    "double": double,
    "str": string,
    "string": string,
    "charset": charset,
    "path": path,
    "file": path,
    "uri": uri,
    "url": url,
}


def lookup(name, /):
    """
    Return the converter registered under name.

    Raises
    - TypeError: when name is not a string.
    - ValueError: when nothing is registered under name.
    """
    if not isinstance(name, str):
        raise TypeError("lookup() argument must be a string")
    try:
        return CONVERTERS[name]
    except KeyError:
        raise ValueError("no such converter: %r" % name) from None


def resolve(converter, /):
    """
    Accept either a converter or a registry name and return the converter.
    """
    if isinstance(converter, str):
        return lookup(converter)
    if not callable(converter):
        raise TypeError("converter must be callable or a registered name")
    return converter


def register(*parameters, replace=False):
    """
    Register a converter under a name, or return a decorator that will.

    Forms
    - register("duration", parse_duration)
    - @register("duration")
      def parse_duration(arg): ...

    An existing name is only overwritten with replace=True.
    """
    match len(parameters):
        case 2:
            name, converter = parameters
            if not isinstance(name, str) or not name:
                raise TypeError("register() first argument must be a non-empty string")
            if not callable(converter):
                raise TypeError("register() second argument must be callable")
            if name in CONVERTERS and not replace:
                raise ValueError("converter %r is already registered" % name)
            CONVERTERS[name] = converter
            return converter
        case 1:
            name, = parameters

            @rename("register")
            def wrapper(converter):
                return register(name, converter, replace=replace)
            return wrapper
        case _:
            raise TypeError("register takes 1 to 2 arguments but %d were given" % len(parameters))


def optional(converter, /):
    """
    Lift a converter to T | None (success passes through, failure propagates).
    """
    converter = resolve(converter)

    def lifted(arg):
        return converter(arg)
    return rename(lifted, "optional(%s)" % getattr(converter, "__name__", "converter"))


__all__ = (
    # Result variants
    "Success",
    "Failure",

    # Builtin converters
    "boolean",
    "byte",
    "short",
    "integer",
    "long",
    "single",
    "double",
    "string",
    "charset",
    "path",
    "uri",
    "url",

    # Registry
    "CONVERTERS",
    "lookup",
    "resolve",
    "register",

    # Lifting
    "optional",
)
