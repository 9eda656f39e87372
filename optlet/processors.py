r"""
Optlet option processors.

A processor is any callable taking the arguments that follow a recognized
option and returning a pair (remaining, value): the arguments it did not
consume, and the value to assign to the option. Processors never mutate their
input; they hand back a slice.

Given "--verbose -F foo.out --timeout 10" and "-F" recognized, the processor
bound to -F receives ("foo.out", "--timeout", "10") and, consuming one value,
returns (("--timeout", "10"), "foo.out").

Builders
- constant(value) / just(value): consume nothing, always yield value.
- enable / disable: constant(True) / constant(False), for switches.
- required(converter, transform): consume exactly one value.
- optional(converter, transform): consume one value if there is one, else
  yield None without consuming anything.

Value eligibility
- A value must not look like an option (a leading "-"). To pass such a value
  literally, escape it: "\-10" is read as "-10". Exactly one leading escape
  character is stripped, and only here, when a value is consumed.

Failures
- MissingArgumentError: required() found no eligible value.
- ConversionError: the converter returned Failure; the message reads
  "<token>: <reason>" and the parser later prefixes the option token.
- yell(message) raises a ParseError from hand-written processors.
"""
from .converters import Success, Failure, resolve
from .faults import ParseError, MissingArgumentError, ConversionError
from .utils import *

ESCAPE = "\\"


def _dashed(arg):
    # "-x" and "--name" alike
    return arg.startswith("-")


def _unescape(arg):
    return arg[len(ESCAPE):] if arg.startswith(ESCAPE) else arg


def _identity(value):
    return value


def _describe(callable, /):
    return getattr(callable, "__name__", type(callable).__name__)


def _consume(args, converter, transform, /):
    """
    Convert the head of args, transform it, and return (tail, value).
    """
    arg = _unescape(args[0])
    match converter(arg):
        case Success(value):
            return args[1:], transform(value)
        case Failure(message):
            raise ConversionError("%s: %s" % (arg, message), token=arg, reason=message)
        case other:
            raise TypeError("converter must return Success or Failure, not %s" % type(other).__name__)


def constant(value, /):
    """
    Build a processor that consumes nothing and always yields value.
    """
    def processor(args):
        return args, value
    return rename(processor, "constant(%r)" % (value,))


just = constant

enable = rename(constant(True), "enable")
disable = rename(constant(False), "disable")


def required(converter, /, transform=Unset):
    """
    Build a processor that consumes exactly one value.

    Parameters
    - converter: a converter, or the name of a registered one ("int", "path", ...).
    - transform: optional callable applied to the converted value; its result
      becomes the option value (it may validate, clamp, or change the type).

    Behavior
    - no argument left, or the next one looks like an option → MissingArgumentError
    - leading escape stripped once, then converted
    - Failure → ConversionError("<token>: <reason>")
    """
    converter = resolve(converter)
    transform = coalesce(transform, _identity)

    def processor(args):
        if not args or _dashed(args[0]):
            raise MissingArgumentError("missing argument")
        return _consume(args, converter, transform)
    return rename(processor, "required(%s)" % _describe(converter))


def optional(converter, /, transform=Unset):
    """
    Build a processor that consumes one value when present.

    Same as required(), except that an exhausted input or an option-like next
    argument yields (args, None): nothing consumed, no error.
    """
    converter = resolve(converter)
    transform = coalesce(transform, _identity)

    def processor(args):
        if not args or _dashed(args[0]):
            return args, None
        return _consume(args, converter, transform)
    return rename(processor, "optional(%s)" % _describe(converter))


def yell(message, /, cause=None):
    """
    Raise a ParseError from within a hand-written processor.

    The parser prefixes the option token to the message, so processors only
    describe the problem ("must be positive", "unknown level").
    """
    raise ParseError(message) from cause


__all__ = (
    "ESCAPE",
    "constant",
    "just",
    "enable",
    "disable",
    "required",
    "optional",
    "yell",
)
