"""
Optlet parse results.

Result is a read-only, typed view over the mapping produced by a parse:
option names (long forms, short forms) to values, plus the sentinel key "@"
holding the trailing non-option arguments.

Access
- result.get(name, expected)           → value; NoSuchKeyError when absent
- result.get_optional(name, expected)  → value, or None when absent
- result[name]                         → result.get(name)
- result.args / result.trailing_args() → trailing arguments (a fresh list)
- result.options                       → read-only view over the raw mapping

Typed access
- `expected` is optional. When given, the value must conform to it or a
  TypeMismatchError is raised (even by get_optional, when the key exists).
- Accepted forms: classes (int, str, pathlib.Path, ...), unions (int | None),
  Literal[...], typing.Any, and parametrised collections (list[int],
  tuple[str, ...], dict[str, int], collections.abc.Sequence[float]).
  Collection elements are checked one level deep.
- bool values do not conform to int, although bool subclasses int.

Quick example:
    >>> from optlet import Parser, name, required
    >>> result = Parser([name("level", "l").replacing(required("int"))]).parse(["-l", "3", "run"])
    >>> result.get("level", int), result.args
    (3, ['run'])
"""
import types
import typing
from collections.abc import Iterable, Mapping
from types import MappingProxyType

from .faults import NoSuchKeyError, TypeMismatchError
from .utils import *

TRAILING = "@"


def _describe(expected, /):
    if isinstance(expected, type) and typing.get_origin(expected) is None:
        return expected.__name__
    return repr(expected)


def _conforms(value, expected, /):
    """
    Return True when value conforms to expected (see module docstring).
    """
    if expected is typing.Any or expected is object:
        return True
    if expected is None or expected is types.NoneType:
        return value is None

    origin, parameters = typing.get_origin(expected), typing.get_args(expected)

    if origin is None:
        if not isinstance(expected, type):
            raise TypeError("expected type must be a class or a typing form, not %r" % (expected,))
        if expected is int and isinstance(value, bool):
            return False
        return isinstance(value, expected)

    if origin is typing.Union or origin is types.UnionType:
        return any(_conforms(value, parameter) for parameter in parameters)

    if origin is typing.Literal:
        return any(type(value) is type(parameter) and value == parameter for parameter in parameters)

    if not isinstance(value, origin):
        return False
    if not parameters:
        return True

    if issubclass(origin, tuple):
        if len(parameters) == 2 and parameters[1] is Ellipsis:
            return all(_conforms(item, parameters[0]) for item in value)
        return len(value) == len(parameters) and all(map(_conforms, value, parameters))
    if issubclass(origin, Mapping):
        keys, values = parameters
        return all(_conforms(key, keys) and _conforms(item, values) for key, item in value.items())
    if issubclass(origin, Iterable) and len(parameters) == 1:
        return all(_conforms(item, parameters[0]) for item in value)
    return True


class Result(Frozen):
    """
    Read-only accessor over a finished parse.

    The mapping always holds the "@" key; a mapping given without it is
    completed with an empty trailing list.
    """

    __slots__ = ("_options",)

    def __init__(self, options, /):
        if not isinstance(options, Mapping):
            raise TypeError("Result() argument must be a mapping")
        options = dict(options)
        options.setdefault(TRAILING, [])
        self._settle(options=options)

    @property
    def options(self):
        """
        Read-only view over the raw name → value mapping (including "@").
        """
        return MappingProxyType(self._options)

    @property
    def args(self):
        """
        The trailing non-option arguments, as a fresh list.
        """
        return list(self._options[TRAILING])

    def trailing_args(self):
        return self.args

    def get(self, name, /, expected=Unset):
        """
        Return the value stored under name.

        Raises
        - NoSuchKeyError: nothing is stored under name.
        - TypeMismatchError: expected is given and the value does not conform.
        """
        if not isinstance(name, str):
            raise TypeError("option name must be a string")
        try:
            value = self._options[name]
        except KeyError:
            raise NoSuchKeyError("%s: no such option value" % name, name=name) from None
        return self._check(name, value, expected)

    def get_optional(self, name, /, expected=Unset):
        """
        Return the value stored under name, or None when there is none.

        A present value of the wrong type still raises TypeMismatchError.
        """
        if not isinstance(name, str):
            raise TypeError("option name must be a string")
        if name not in self._options:
            return None
        return self._check(name, self._options[name], expected)

    def _check(self, name, value, expected, /):
        if expected is Unset or _conforms(value, expected):
            return value
        raise TypeMismatchError(
            "%s: expected %s but found %s" % (name, _describe(expected), type(value).__name__),
            name=name,
            expected=expected,
            actual=type(value),
        )

    def __getitem__(self, name):
        return self.get(name)

    def __contains__(self, name):
        return name in self._options

    def __iter__(self):
        return iter(self._options)

    def __len__(self):
        return len(self._options)

    def __eq__(self, other):
        if not isinstance(other, Result):
            return NotImplemented
        return self._options == other._options

    __hash__ = None

    def __repr__(self):
        return "result(%s)" % ", ".join("%s=%r" % pair for pair in self.__rich_repr__())

    def __rich_repr__(self):
        yield "options", {key: value for key, value in self._options.items() if key != TRAILING}
        yield "args", self._options[TRAILING]


__all__ = (
    "TRAILING",
    "Result",
)
