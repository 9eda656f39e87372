"""
Optlet faults (errors and warnings) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for all user-facing issues
  (errors and warnings), grouped by domain.
- OptionException / OptionWarning: base types that carry a message plus a
  read-only mapping of options (code, title, hint and any context such as the
  offending token) and know how to render themselves with rich.
- report(): print any fault on a rich console (stderr by default).

Taxonomy
- definition time
  • InvalidNameError: an option name fails validation.
- parse time (all are ParseError, the single error kind surfaced by parsing)
  • MissingArgumentError: a value-bearing processor found no eligible token.
  • ConversionError: a converter rejected a token.
  • UnrecognizedOptionError: an option-looking token is bound to no definition.
- access time
  • NoSuchKeyError: the result holds no value under the requested name.
  • TypeMismatchError: the value does not conform to the expected type.
- warnings
  • DuplicateOptionWarning: two definitions of one parser share a name.

Integration
- Errors raised by processors are re-raised by the parser with the option
  token prefixed to their message, using copy.replace() so that the concrete
  class survives (catch ParseError, or the precise kind).
- Faults are rich renderables; CLI glue can print them and exit as it sees fit.
"""
import os.path
import sys
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    canonical fault codes used across the library (stable identifiers).

    grouping (by high-level domain)
    - definitions (2110x)
      • INVALID_NAME
    - parsing (2111x)
      • PARSE_ERROR, MISSING_ARGUMENT, CONVERSION_ERROR, UNRECOGNIZED_OPTION
    - results (2112x)
      • NO_SUCH_KEY, TYPE_MISMATCH
    - warnings (22xxx)
      • OPTION_WARNING, DUPLICATE_OPTION

    normalize() allows host remapping to custom labels while keeping code-stability.
    """
    # --- definition errors (21xxx) ---
    INVALID_NAME                = 21101

    # --- parse errors (21xxx) ---
    PARSE_ERROR                 = 21111
    MISSING_ARGUMENT            = 21112
    CONVERSION_ERROR            = 21113
    UNRECOGNIZED_OPTION         = 21114

    # --- result errors (21xxx) ---
    NO_SUCH_KEY                 = 21121
    TYPE_MISMATCH               = 21122

    # --- warnings (22xxx) ---
    OPTION_WARNING              = 22100
    DUPLICATE_OPTION            = 22101

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels. when no mapping
        is present, the numeric value is returned as a string.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


def _render(fault, palette, /):
    """
    build the rich renderable shared by errors and warnings.

    layout
    - header: "[ <prog> — <code> | <title> ]"
    - body: the message, then " → <hint>" when a hint is known.
    - options["fancy"] wraps the body in a Panel titled by the header.
    - options["colorful"] (default True) toggles styling.
    """
    main = __import__("__main__")

    styles = defaultdict(str, palette | getattr(main, "__styles__", {}))
    colorful = fault.options.get("colorful", True)

    def text(fragment, style=""):
        if not fragment:
            return Text("")
        if isinstance(fragment, Text):
            return fragment
        return Text(str(fragment), styles[style] if colorful else "")

    prog = getattr(main, "__prog__", os.path.basename(sys.argv[0]) if sys.argv and sys.argv[0] else "optlet")

    header = Text.assemble(
        "[ ",
        text(prog, "prog-name"),
        " — ",
        text(fault.options["code"].normalize(), "code"),
        " | ",
        text(fault.options["title"].title(), "title"),
        " ]"
    )
    parts = [text(fault.message, "message")]
    if hint := fault.options.get("hint"):
        parts.append(Text.assemble(text(" → ", "hint-arrow"), text(hint, "hint")))

    if fault.options.get("fancy", False):
        return Panel(Group(*parts), title=header, title_align="left")
    return Group(header, *parts)


class OptionException(Exception):
    """
    base class of every error raised by optlet.

    attributes
    - message: str, the human-readable message (also str(error)).
    - options: read-only mapping with at least 'code', 'title' and 'hint';
      subclasses add context keys (token, reason, name, expected, ...).

    class-level defaults for code/title/hint are merged under explicit options.
    """
    code = FaultCode.PARSE_ERROR
    title = "parse error"
    hint = None

    def __init__(self, message, /, **options):
        if not isinstance(message, str):
            raise TypeError("%s() message must be a string" % type(self).__name__)
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType({
            "code": type(self).code,
            "title": type(self).title,
            "hint": type(self).hint,
        } | options)

    def __str__(self):
        return self.message

    def __rich__(self):
        return _render(self, {
            # header parts
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #00E5FF",  # neon cyan fault code
            "title": "bold #FF4DA6",  # friendly pinky title

            # body
            "message": "#C8C8D0",  # soft light gray message
            "hint-arrow": "#9CE19C dim",  # gentle green arrow
            "hint": "italic #9CE19C",  # gentle green hint text
        })

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        message = overrides.pop("message", self.message)
        return type(self)(message, **{**self.options, **overrides})


class InvalidNameError(OptionException, ValueError):
    code = FaultCode.INVALID_NAME
    title = "invalid option name"
    hint = "long names look like 'verbose' or 'dry-run', short names are one of [a-zA-Z0-9?]"


class ParseError(OptionException):
    """
    the unified error kind of the parse entry point.

    raised directly for generic processor failures (see yell()), and the base
    class of MissingArgumentError, ConversionError and UnrecognizedOptionError.
    options["option"] names the option token when the failure happened while
    processing that option.
    """
    code = FaultCode.PARSE_ERROR
    title = "parse error"


class MissingArgumentError(ParseError):
    code = FaultCode.MISSING_ARGUMENT
    title = "missing argument"
    hint = "pass a value after the option; escape values starting with '-' as '\\-value'"


class ConversionError(ParseError):
    code = FaultCode.CONVERSION_ERROR
    title = "invalid argument"
    hint = "check the value given to the option"

    @property
    def token(self):
        """the (unescaped) token rejected by the converter."""
        return self.options.get("token")

    @property
    def reason(self):
        """the converter's own message, e.g. 'must be an integer'."""
        return self.options.get("reason")


class UnrecognizedOptionError(ParseError):
    code = FaultCode.UNRECOGNIZED_OPTION
    title = "unrecognized option"
    hint = "use '--' to pass option-like arguments literally"

    @property
    def token(self):
        return self.options.get("token")


class NoSuchKeyError(OptionException, KeyError):
    code = FaultCode.NO_SUCH_KEY
    title = "no such option value"


class TypeMismatchError(OptionException, TypeError):
    code = FaultCode.TYPE_MISMATCH
    title = "type mismatch"


class OptionWarning(Warning):
    """
    base class of every warning emitted by optlet (same shape as OptionException).
    """
    code = FaultCode.OPTION_WARNING
    title = "warning"
    hint = None

    def __init__(self, message, /, **options):
        if not isinstance(message, str):
            raise TypeError("%s() message must be a string" % type(self).__name__)
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType({
            "code": type(self).code,
            "title": type(self).title,
            "hint": type(self).hint,
        } | options)

    def __str__(self):
        return self.message

    def __rich__(self):
        return _render(self, {
            # header parts
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #FFB400",  # amber fault code for warnings
            "title": "bold #FFC2E0",  # softer pinky title for warnings

            # body
            "message": "#D6D6DE",  # slightly lighter gray body
            "hint-arrow": "#B8EFAF dim",  # softer green arrow
            "hint": "italic #B8EFAF",  # softer green hint text
        })

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        message = overrides.pop("message", self.message)
        return type(self)(message, **{**self.options, **overrides})


class DuplicateOptionWarning(OptionWarning):
    code = FaultCode.DUPLICATE_OPTION
    title = "duplicate option name"
    hint = "the first definition wins; rename or remove the later one"


def report(fault, /, *, file=None, **options):
    """
    print a fault (error or warning) as a rich renderable.

    parameters
    - fault: OptionException | OptionWarning
    - file: optional text stream; stderr (through the module console) by default.
    - options: rendering overrides merged into the fault (e.g. fancy=True,
      colorful=False) via copy.replace().

    exiting, usage printing and exit codes stay with the caller.
    """
    if not isinstance(fault, OptionException | OptionWarning):
        raise TypeError("report() argument must be an optlet fault")
    if options:
        fault = fault.__replace__(**options)
    target = console if file is None else Console(file=file, color_system=None, force_terminal=False)
    target.print(fault)


__all__ = (
    "FaultCode",
    "OptionException",
    "InvalidNameError",
    "ParseError",
    "MissingArgumentError",
    "ConversionError",
    "UnrecognizedOptionError",
    "NoSuchKeyError",
    "TypeMismatchError",
    "OptionWarning",
    "DuplicateOptionWarning",
    "report",
)
