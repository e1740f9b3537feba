"""Placeholder substitution strategies for resolved templates.

Three independent strategies are available:

- format_positional: printf-style specifiers (``%s``, ``%d``, ``%.2f``)
- replace_anonymous: ``{}`` markers filled left to right
- replace_named: ``{keyword}`` markers filled from (keyword, value) pairs

Each returns the template unchanged when no arguments are given. Deciding
whether a template resolved at all is the caller's job.
"""

import re
from typing import Any, Iterable, Sequence

from ti18n.exceptions import PlaceholderError
from ti18n.models import NamedValue

ANONYMOUS_PLACEHOLDER = "{}"

_CONVERSION = re.compile(
    r"%(?:\([^)]*\))?[#0 +-]*(?P<width>\*|\d+)?(?:\.(?P<precision>\*|\d*))?[hlL]?(?P<type>[diouxXeEfFgGcrsa%])"
)


def count_conversions(text: str) -> int:
    """Number of positional arguments a printf-style template consumes.

    ``%%`` consumes nothing; each ``*`` width or precision consumes one more.

    Example:
        >>> count_conversions("%s has %*d%% off")
        3
    """
    count = 0
    for match in _CONVERSION.finditer(text):
        if match.group("type") == "%":
            continue
        count += 1
        count += (match.group("width") == "*") + (match.group("precision") == "*")
    return count


def format_positional(text: str, args: Sequence[Any]) -> str:
    """Apply printf-style formatting, consuming args in order.

    Arguments beyond those the template uses are ignored, so a translation
    may drop a value its source text shows.

    Example:
        >>> format_positional("Rate: %.2f", [0.123])
        'Rate: 0.12'
        >>> format_positional("Hello", ["world"])
        'Hello'

    Raises:
        PlaceholderError: If there are too few arguments or their types do
            not match the specifiers.
    """
    if not args:
        return text
    try:
        return text % tuple(args[: count_conversions(text)])
    except (TypeError, ValueError, KeyError) as e:
        raise PlaceholderError(text, e) from e


def replace_anonymous(text: str, args: Sequence[Any]) -> str:
    """Fill ``{}`` markers left to right with the string form of args.

    The search resumes right after each inserted value, so values containing
    ``{}`` are never filled themselves. Extra arguments are ignored and extra
    markers are left as they are.

    Example:
        >>> replace_anonymous("{} items in {}", ["5", "cart"])
        '5 items in cart'
    """
    result = text
    cursor = 0
    for arg in args:
        index = result.find(ANONYMOUS_PLACEHOLDER, cursor)
        if index == -1:
            break
        replacement = str(arg)
        result = result[:index] + replacement + result[index + len(ANONYMOUS_PLACEHOLDER) :]
        cursor = index + len(replacement)
    return result


def replace_named(text: str, pairs: Iterable[NamedValue]) -> str:
    """Replace every ``{keyword}`` marker, one pair at a time, in order.

    Later pairs see the output of earlier ones: a value that contains
    ``{other}`` is substituted again when the ``other`` pair comes up. Each
    pair gets a single pass rather than repeating until no marker remains,
    so a value containing its own marker cannot loop forever.

    Example:
        >>> replace_named("{b1} items in {b2}", [NamedValue("b1", 5), NamedValue("b2", "cart")])
        '5 items in cart'
    """
    result = text
    for pair in pairs:
        placeholder = "{" + pair.keyword + "}"
        result = result.replace(placeholder, str(pair.value))
    return result
