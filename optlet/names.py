r"""
Optlet option names.

Overview
- OptionName: immutable pair of an optional long form ("verbose", "dry-run")
  and an optional short form ("v", "?"). At least one form is required.
- name(*forms): builder entry point that sorts forms by length, so that
  name("verbose", "v"), name("v") and name(("verbose", "v")) all work.

Validation
- long:  r"[a-zA-Z0-9][a-zA-Z0-9-]+" (two characters or more, no leading dash)
- short: r"[a-zA-Z0-9?]" (exactly one character)
- Violations raise InvalidNameError, a ValueError.

Binding
- OptionName.replacing(processor) and OptionName.appending(processor) bind a
  processor and return an Option definition (see optlet.options).

Quick example:
    >>> from optlet import name, required
    >>> timeout = name("timeout", "t").replacing(required("int")).with_default(0)
    >>> timeout.name
    'timeout'
"""
import re

from .faults import InvalidNameError
from .utils import *

LONG_PATTERN = re.compile(r"[a-zA-Z0-9][a-zA-Z0-9-]+")
SHORT_PATTERN = re.compile(r"[a-zA-Z0-9?]")


def _verify(form, pattern, kind, /):
    if not isinstance(form, str):
        raise InvalidNameError(
            "%r: %s name must be a string" % (form, kind),
            name=form,
        )
    if not pattern.fullmatch(form):
        raise InvalidNameError(
            "%s: %s name invalid; must conform to pattern %s" % (form, kind, pattern.pattern),
            name=form,
        )
    return form


class OptionName(Frozen):
    """
    Identifies an option by long form, short form, or both.

    Instances are immutable and hashable; equality compares both forms.
    """

    __slots__ = ("_long", "_short")

    long = mirror("long")
    short = mirror("short")

    def __init__(self, long=None, short=None):
        if long is None and short is None:
            raise InvalidNameError("option name must have a long form, a short form, or both")
        self._settle(
            long=None if long is None else _verify(long, LONG_PATTERN, "long"),
            short=None if short is None else _verify(short, SHORT_PATTERN, "short"),
        )

    @property
    def canonical(self):
        """
        The long form if present, otherwise the short form.
        """
        return self._long if self._long is not None else self._short

    @property
    def keys(self):
        """
        Result-map keys for this name: long form first, then short form.
        """
        return tuple(form for form in (self._long, self._short) if form is not None)

    def replacing(self, processor, /):
        """
        Bind a processor in replace mode: the last occurrence wins.
        """
        from .options import MergeMode, Option
        return Option(self, processor, mode=MergeMode.REPLACE)

    def appending(self, processor, /):
        """
        Bind a processor in append mode: occurrences accumulate in a list.
        """
        from .options import MergeMode, Option
        return Option(self, processor, mode=MergeMode.APPEND)

    def __eq__(self, other):
        if not isinstance(other, OptionName):
            return NotImplemented
        return (self._long, self._short) == (other._long, other._short)

    def __hash__(self):
        return hash((type(self), self._long, self._short))

    def __repr__(self):
        return "option-name(%s)" % ", ".join("%s=%r" % pair for pair in self.__rich_repr__())

    def __rich_repr__(self):
        yield "long", self._long
        yield "short", self._short

    def __str__(self):
        return " | ".join(
            prefix + form for prefix, form in (("--", self._long), ("-", self._short)) if form is not None
        )


def name(*forms):
    """
    Build an OptionName from one or two forms.

    Accepted shapes
    - name("verbose")         → long only
    - name("v")               → short only (one-character strings are short forms)
    - name("verbose", "v")    → both (order does not matter)
    - name(("verbose", "v"))  → both, from a tuple
    - name(OptionName(...))   → returned as-is

    Raises
    - InvalidNameError: on bad forms, more than two forms, or two forms of the same kind.
    """
    if len(forms) == 1:
        match forms[0]:
            case OptionName() as existing:
                return existing
            case tuple() as pair:
                forms = pair
    if not 1 <= len(forms) <= 2:
        raise InvalidNameError("name() takes 1 to 2 forms but %d were given" % len(forms))

    long = short = None
    for form in forms:
        if isinstance(form, str) and len(form) == 1:
            if short is not None:
                raise InvalidNameError("%s: option name cannot have two short forms" % form, name=form)
            short = form
        else:
            if long is not None:
                raise InvalidNameError("%s: option name cannot have two long forms" % form, name=form)
            long = form
    return OptionName(long, short)


__all__ = (
    "OptionName",
    "name",
)
