"""Flatten nested translation trees into dot-joined lookup tables."""

from typing import Any, Dict, Mapping, Optional


def to_text(value: Any) -> str:
    """Convert a scalar translation value to its string form.

    Booleans render in lowercase so YAML ``true``/``false`` values read the
    way they were written.
    """
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def flatten(
    tree: Optional[Mapping[Any, Any]],
    prefix: str = "",
    output: Optional[Dict[str, str]] = None,
) -> Dict[str, str]:
    """Flatten a nested mapping into a single-level table.

    Nested mapping keys are joined with ".". ``None`` values are dropped.
    Any other non-mapping value, lists included, is stored via to_text().
    Later writes to the same key overwrite earlier ones.

    Args:
        tree: Nested mapping to flatten. ``None`` flattens to nothing.
        prefix: Key prefix for every entry of tree.
        output: Table to write into. A new dict is created when omitted.

    Returns:
        The output table.

    Example:
        >>> flatten({"a": {"b": "v"}, "c": 1})
        {'a.b': 'v', 'c': '1'}
    """
    if output is None:
        output = {}
    if tree is None:
        return output

    for entry_key, value in tree.items():
        entry_key = to_text(entry_key)
        key = entry_key if not prefix else f"{prefix}.{entry_key}"

        if isinstance(value, Mapping):
            flatten(value, key, output)
        elif value is not None:
            output[key] = to_text(value)

    return output
