"""
Optlet parser: match an argument sequence against option definitions.

Algorithm
A single left-to-right pass over the arguments, with a working mapping that
starts as {"@": []}:

- "--"            → every following argument becomes trailing, verbatim; stop.
- "--name"        → the option whose long form is "name"; unknown → UnrecognizedOptionError.
- "-c"            → the option whose short form is "c" (exactly one character
                    after the dash); unknown → UnrecognizedOptionError, never trailing.
- anything else   → this argument and all following ones become trailing; stop.
                    This covers plain words, "-" and "-abc" (no option clustering).

A matched option runs its processor on the arguments after it; the processor
returns what it did not consume, and the value is merged under the option's
keys (see optlet.options). Once the pass ends, defaults are injected for the
options that never occurred.

Errors
- A ParseError raised by a processor is re-raised with the option token
  prefixed ("--timeout: abc: must be an integer"), keeping its class and its
  cause.
- Any other exception raised while processing or merging becomes
  ParseError("<token>: error parsing option") chained to the original.
- Parsing is all-or-nothing: on error, no partial result escapes.

Duplicates
- Options sharing a long or short form are tolerated: the first definition
  wins and a DuplicateOptionWarning is emitted when the parser is built.

Logging
- Every dispatch decision is logged at DEBUG level on the "optlet.parser"
  logger; the library installs no handler of its own.

Quick example:
    >>> from optlet import Parser, name, enable, required
    >>> parser = Parser([
    ...     name("verbose", "v").replacing(enable).with_default(False),
    ...     name("timeout", "t").replacing(required("int")).with_default(0),
    ... ])
    >>> result = parser.parse(["-v", "--timeout", "30", "this", "and", "that"])
    >>> result["verbose"], result["t"], result.args
    (True, 30, ['this', 'and', 'that'])
"""
import copy
import logging
import warnings
from types import MappingProxyType

from .faults import ParseError, UnrecognizedOptionError, DuplicateOptionWarning
from .options import Option
from .results import TRAILING, Result
from .utils import *

logger = logging.getLogger(__name__)

TERMINATOR = "--"
LONG_PREFIX = "--"
SHORT_PREFIX = "-"


class Parser(Frozen):
    """
    Immutable, ordered collection of option definitions.

    Building
    - Parser([option, ...]) or Parser(option, option, ...)
    - parser.add(option) / parser + option return a new, longer parser.

    Parsers hold no per-parse state and can be shared freely.
    """

    __slots__ = ("_options", "_longs", "_shorts")

    options = mirror("options")

    def __init__(self, *options):
        if len(options) == 1 and not isinstance(options[0], Option):
            options, = options
        options = tuple(options)
        for option in options:
            if not isinstance(option, Option):
                raise TypeError("parser options must be Option instances, not %s" % type(option).__name__)

        longs, shorts = {}, {}
        for option in options:
            for table, form, prefix in ((longs, option.long, LONG_PREFIX), (shorts, option.short, SHORT_PREFIX)):
                if form is None:
                    continue
                if form in table:
                    warnings.warn(DuplicateOptionWarning(
                        "%s%s: defined more than once; the first definition wins" % (prefix, form),
                        name=form,
                    ), stacklevel=2)
                    continue
                table[form] = option

        self._settle(options=options, longs=MappingProxyType(longs), shorts=MappingProxyType(shorts))

    def add(self, option, /):
        """
        Return a new parser with option appended.
        """
        return type(self)((*self._options, option))

    def __add__(self, other):
        if isinstance(other, Option):
            return self.add(other)
        if isinstance(other, Parser):
            return type(self)((*self._options, *other._options))
        return NotImplemented

    def __iter__(self):
        return iter(self._options)

    def __len__(self):
        return len(self._options)

    def __repr__(self):
        return "parser(%s)" % ", ".join(map(repr, self._options))

    def __rich_repr__(self):
        yield from self._options

    def _match(self, arg, /):
        """
        Return the option named by arg, None when arg is not option-shaped.
        """
        if arg.startswith(LONG_PREFIX):
            table, form = self._longs, arg[len(LONG_PREFIX):]
        elif arg.startswith(SHORT_PREFIX) and len(arg) == len(SHORT_PREFIX) + 1:
            table, form = self._shorts, arg[len(SHORT_PREFIX):]
        else:
            return None
        try:
            return table[form]
        except KeyError:
            raise UnrecognizedOptionError("%s: no such option" % arg, token=arg) from None

    def _apply(self, option, arg, rest, results, /):
        try:
            remaining, value = option.process(rest)
            option.merge(results, value)
        except ParseError as error:
            raise copy.replace(error, message="%s: %s" % (arg, error.message), option=arg) from error.__cause__
        except Exception as error:
            raise ParseError("%s: error parsing option" % arg, option=arg) from error
        logger.debug("%s matched option %r (%d argument(s) consumed)", arg, option.name, len(rest) - len(remaining))
        return tuple(remaining)

    def parse(self, args, /):
        """
        Parse args and return a Result.

        Parameters
        - args: sequence of strings, typically sys.argv[1:].

        Raises
        - ParseError (or one of its subclasses) on any parse failure.
        - TypeError when args is not a sequence of strings.
        """
        if isinstance(args, str):
            raise TypeError("parse() argument must be a sequence of strings, not a string")
        args = tuple(args)
        for arg in args:
            if not isinstance(arg, str):
                raise TypeError("parse() arguments must be strings, not %s" % type(arg).__name__)

        results = {TRAILING: []}
        while args:
            arg, rest = args[0], args[1:]
            if arg == TERMINATOR:
                logger.debug("terminator reached, %d trailing argument(s)", len(rest))
                results[TRAILING] = list(rest)
                break
            if (option := self._match(arg)) is None:
                logger.debug("%r is not an option, %d trailing argument(s)", arg, len(args))
                results[TRAILING] = list(args)
                break
            args = self._apply(option, arg, rest, results)

        for option in self._options:
            if option.settle(results):
                logger.debug("default applied to option %r", option.name)
        return Result(results)


def parse(options, args, /):
    """
    One-shot helper: Parser(options).parse(args).
    """
    return Parser(options).parse(args)


__all__ = (
    "TERMINATOR",
    "Parser",
    "parse",
)
