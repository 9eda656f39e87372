"""
Optlet option definitions.

An Option binds an OptionName to a processor, an optional default value, and
a merge mode deciding what happens when the option occurs more than once.

Merge modes
- REPLACE: the last occurrence wins. The value is written under both the long
  and the short key.
- APPEND: occurrences accumulate, in encounter order, into a list read from
  the canonical key; the new list is written under both keys (each key gets
  its own list). A non-list value found under the canonical key (left
  by a replacing definition sharing the name) is discarded.

Defaults
- with_default(value) returns a new Option; the original is untouched.
- Defaults are injected by the parser after the whole scan, only when the
  canonical key is still absent, as-is: the processor is not invoked and, in
  APPEND mode, the default is not wrapped into a list.

Quick example:
    >>> from optlet import name, required
    >>> servers = name("server", "s").appending(required("str")).with_default(["localhost"])
    >>> servers.mode
    <MergeMode.APPEND: 'append'>
"""
from enum import Enum

from .names import name as _name
from .utils import *


class MergeMode(Enum):
    REPLACE = "replace"
    APPEND = "append"


class Option(Frozen):
    """
    Immutable option definition.

    Parameters
    - names: OptionName, or anything optlet.name() accepts ("foo", ("foo", "f")).
    - processor: callable(args) -> (remaining, value).
    - default: any value; Unset (the default) means "no default".
    - mode: MergeMode or its value ("replace", "append").

    Properties
    - names, processor, default, mode mirror the construction arguments.
    - name is the canonical name (long form, else short form); long/short and
      keys are forwarded from names.
    """

    __slots__ = ("_names", "_processor", "_default", "_mode")

    names = mirror("names")
    processor = mirror("processor")
    default = mirror("default", frozen=False)
    mode = mirror("mode")

    def __init__(self, names, processor, /, default=Unset, *, mode=MergeMode.REPLACE):
        if not callable(processor):
            raise TypeError("option processor must be callable")
        self._settle(
            names=_name(names),
            processor=processor,
            default=default,
            mode=MergeMode(mode),
        )

    @property
    def name(self):
        return self._names.canonical

    @property
    def long(self):
        return self._names.long

    @property
    def short(self):
        return self._names.short

    @property
    def keys(self):
        return self._names.keys

    @property
    def has_default(self):
        return self._default is not Unset

    def with_default(self, default, /):
        """
        Return a copy of this option with default attached.
        """
        return type(self)(self._names, self._processor, default, mode=self._mode)

    def process(self, args, /):
        """
        Run the processor on args and validate the shape of its answer.
        """
        match self._processor(args):
            case (remaining, value):
                return remaining, value
            case other:
                raise TypeError("option processor must return a (remaining, value) pair, not %r" % (other,))

    def merge(self, results, value, /):
        """
        Record value in the working results mapping according to the merge mode.

        The mapping is updated in place; it is private to one parse.
        """
        match self._mode:
            case MergeMode.REPLACE:
                for key in self.keys:
                    results[key] = value
            case MergeMode.APPEND:
                match results.get(self.name):
                    case list() as stored:
                        values = [*stored, value]
                    case _:
                        # nothing yet, or a value left by a replacing duplicate
                        values = [value]
                for key in self.keys:
                    results[key] = list(values)

    def settle(self, results, /):
        """
        Inject the default under every key when the canonical key is absent.

        Returns True when the default was applied.
        """
        if self._default is Unset or self.name in results:
            return False
        for key in self.keys:
            results[key] = self._default
        return True

    def __repr__(self):
        return "option(%s)" % ", ".join("%s=%r" % pair for pair in self.__rich_repr__())

    def __rich_repr__(self):
        yield "names", self._names
        yield "processor", getattr(self._processor, "__name__", self._processor)
        yield "default", self._default
        yield "mode", self._mode.value


__all__ = (
    "MergeMode",
    "Option",
)
