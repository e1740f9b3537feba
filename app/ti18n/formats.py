"""Resource formats and their parsers.

Each supported format is described by a FormatSpec record (extensions,
display name, parse function) held in the static FORMATS table. Every parser
turns raw resource bytes into a flat ``key -> string`` table.
"""

import json
import re
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, Optional
from xml.etree import ElementTree

import yaml

from ti18n.configuration import settings
from ti18n.exceptions import InputNullError, ParseError
from ti18n.flattener import flatten
from ti18n.logging import get_module_logger
from ti18n.models import FlatTable

logger = get_module_logger()

XML_WRAPPER_TAGS = frozenset({"messages", "resources", "strings", "message"})

_PROPERTIES_WHITESPACE = " \t\f"
_PROPERTIES_SEPARATORS = "=:"
_PROPERTIES_ESCAPES = {"t": "\t", "n": "\n", "r": "\r", "f": "\f"}
_NEWLINE = re.compile(r"\r\n|\r|\n")


class Format(str, Enum):
    """Supported resource formats."""

    YAML = "yaml"
    JSON = "json"
    PROPERTIES = "properties"
    XML = "xml"

    @property
    def spec(self) -> "FormatSpec":
        return FORMATS[self]

    @classmethod
    def from_name(cls, name: str) -> "Format":
        """Convert a format name (case-insensitive) to a Format.

        Raises:
            ValueError: If the name is not a supported format.
        """
        try:
            return cls(name.strip().lower())
        except ValueError as e:
            raise ValueError(f"Unsupported format: {name}") from e

    @classmethod
    def from_extension(cls, extension: str) -> "Format":
        """Find the format whose primary or alternative extension matches.

        Args:
            extension: File suffix, with or without the leading dot.

        Raises:
            ValueError: If no format uses the extension.
        """
        ext = extension.lower()
        if not ext.startswith("."):
            ext = f".{ext}"
        for fmt, spec in FORMATS.items():
            if ext in (spec.file_extension, spec.alternative_extension):
                return fmt
        raise ValueError(f"No format registered for extension: {extension}")


@dataclass(frozen=True)
class FormatSpec:
    """How one format is located and parsed.

    Attributes:
        file_extension: Primary extension, including the dot.
        alternative_extension: Extension tried when the primary is missing.
        format_name: Human-readable name used in error messages.
        parse: Function turning resource bytes into a flat table.
    """

    file_extension: str
    format_name: str
    parse: Callable[[bytes], FlatTable]
    alternative_extension: Optional[str] = None

    @property
    def extensions(self) -> tuple:
        """Candidate extensions in lookup order."""
        if self.alternative_extension:
            return (self.file_extension, self.alternative_extension)
        return (self.file_extension,)


def _decode(data: bytes, format_name: str) -> str:
    try:
        return data.decode(settings.ENCODING)
    except UnicodeDecodeError as e:
        raise ParseError(format_name, f"content is not valid {settings.ENCODING}", e) from e


def parse_yaml(data: bytes) -> FlatTable:
    """Parse a YAML document and flatten its nested mappings.

    Raises:
        ParseError: If the document is empty, malformed, or not a mapping.
    """
    text = _decode(data, "YAML")
    try:
        tree = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ParseError("YAML", str(e), e) from e

    if tree is None:
        raise ParseError("YAML", "document is empty")
    if not isinstance(tree, dict):
        raise ParseError("YAML", f"expected a mapping at the root, got {type(tree).__name__}")
    return flatten(tree)


def parse_json(data: bytes) -> FlatTable:
    """Parse a JSON object into a flat table.

    Nested objects are flattened like YAML mappings, so documents that already
    use dotted keys load unchanged. A ``null`` document yields an empty table.

    Raises:
        ParseError: If the document is malformed or its root is not an object.
    """
    text = _decode(data, "JSON")
    try:
        tree = json.loads(text)
    except json.JSONDecodeError as e:
        raise ParseError("JSON", str(e), e) from e

    if tree is None:
        return {}
    if not isinstance(tree, dict):
        raise ParseError("JSON", f"expected an object at the root, got {type(tree).__name__}")
    return flatten(tree)


def _properties_lines(text: str):
    """Yield logical lines: comments and blanks dropped, continuations joined."""
    pending = None
    for line in _NEWLINE.split(text):
        stripped = line.lstrip(_PROPERTIES_WHITESPACE)
        if pending is None:
            if not stripped or stripped[0] in "#!":
                continue
            current = stripped
        else:
            current = pending + stripped

        trailing = len(current) - len(current.rstrip("\\"))
        if trailing % 2 == 1:
            pending = current[:-1]
            continue
        pending = None
        yield current

    if pending is not None:
        yield pending


def _split_property(line: str):
    """Split a logical line into its raw key and raw value."""
    n = len(line)
    key_end = n
    i = 0
    while i < n:
        c = line[i]
        if c == "\\":
            i += 2
            continue
        if c in _PROPERTIES_SEPARATORS or c in _PROPERTIES_WHITESPACE:
            key_end = i
            break
        i += 1

    j = key_end
    while j < n and line[j] in _PROPERTIES_WHITESPACE:
        j += 1
    if j < n and line[j] in _PROPERTIES_SEPARATORS:
        j += 1
    while j < n and line[j] in _PROPERTIES_WHITESPACE:
        j += 1

    return line[:key_end], line[j:]


def _unescape_property(raw: str) -> str:
    out = []
    i = 0
    n = len(raw)
    while i < n:
        c = raw[i]
        if c != "\\":
            out.append(c)
            i += 1
            continue
        i += 1
        if i >= n:
            break
        c = raw[i]
        if c == "u":
            digits = raw[i + 1 : i + 5]
            if len(digits) != 4 or any(d not in "0123456789abcdefABCDEF" for d in digits):
                raise ValueError(f"Malformed \\uxxxx encoding: \\u{digits}")
            out.append(chr(int(digits, 16)))
            i += 5
            continue
        out.append(_PROPERTIES_ESCAPES.get(c, c))
        i += 1

    # \uXXXX pairs may encode UTF-16 surrogates
    return "".join(out).encode("utf-16", "surrogatepass").decode("utf-16")


def parse_properties(data: bytes) -> FlatTable:
    """Parse Java-style ``.properties`` content.

    Supports ``#``/``!`` comments, ``=``, ``:`` and whitespace separators,
    backslash line continuations and ``\\t \\n \\r \\f \\uXXXX`` escapes.
    Empty content yields an empty table.

    Raises:
        ParseError: On malformed unicode escapes or undecodable bytes.
    """
    text = _decode(data, "Properties")
    result: FlatTable = {}
    for line in _properties_lines(text):
        raw_key, raw_value = _split_property(line)
        try:
            result[_unescape_property(raw_key)] = _unescape_property(raw_value)
        except (ValueError, UnicodeError) as e:
            raise ParseError("Properties", str(e), e) from e
    return result


def _local_name(tag: str) -> str:
    """Strip the ``{namespace-uri}`` part ElementTree puts in tag names."""
    return tag.rsplit("}", 1)[-1]


def _text_content(element: ElementTree.Element) -> str:
    return "".join(element.itertext()).strip()


def _element_children(element: ElementTree.Element):
    return [child for child in element if isinstance(child.tag, str)]


def _extract_element(element: ElementTree.Element, prefix: str, result: FlatTable) -> None:
    text = _text_content(element)
    if "id" in element.attrib and text:
        result[element.attrib["id"]] = text
        return

    tag = _local_name(element.tag)
    if tag in XML_WRAPPER_TAGS:
        new_prefix = prefix
    else:
        new_prefix = f"{prefix}.{tag}" if prefix else tag

    children = _element_children(element)
    if not children and text and tag not in XML_WRAPPER_TAGS:
        result[new_prefix] = text

    for child in children:
        _extract_element(child, new_prefix, result)


def parse_xml(data: bytes) -> FlatTable:
    """Parse an XML message document.

    Elements with an ``id`` attribute and text register ``id -> text``
    wherever they appear. Other elements build dotted keys from their tag
    path, skipping the wrapper tags ``messages``, ``resources``, ``strings``
    and ``message``; leaf elements register ``path -> text``.

    Example:
        <messages>
            <message id="greeting">Hello</message>
            <menu><open>Open</open></menu>
        </messages>

        yields {"greeting": "Hello", "menu.open": "Open"}

    Raises:
        ParseError: If the document is empty or malformed.
    """
    if not data.strip():
        raise ParseError("XML", "document is empty")
    try:
        root = ElementTree.fromstring(data)
    except ElementTree.ParseError as e:
        raise ParseError("XML", str(e), e) from e

    result: FlatTable = {}
    for child in _element_children(root):
        _extract_element(child, "", result)
    return result


FORMATS: Dict[Format, FormatSpec] = {
    Format.YAML: FormatSpec(
        file_extension=".yml",
        alternative_extension=".yaml",
        format_name="YAML",
        parse=parse_yaml,
    ),
    Format.JSON: FormatSpec(
        file_extension=".json",
        format_name="JSON",
        parse=parse_json,
    ),
    Format.PROPERTIES: FormatSpec(
        file_extension=".properties",
        format_name="Properties",
        parse=parse_properties,
    ),
    Format.XML: FormatSpec(
        file_extension=".xml",
        format_name="XML",
        parse=parse_xml,
    ),
}


def parse_resource(fmt: Format, data: bytes) -> FlatTable:
    """Parse resource bytes with the given format.

    Args:
        fmt: Format of the content.
        data: Raw resource bytes.

    Returns:
        Flat ``key -> string`` table.

    Raises:
        InputNullError: If data is None.
        ParseError: If the content is malformed for the format.
    """
    spec = FORMATS[fmt]
    if data is None:
        raise InputNullError(f"Failed to load {spec.format_name} content: input is None")

    try:
        table = spec.parse(data)
    except ParseError as e:
        logger.error("resource_parse_error", format=spec.format_name, error=str(e))
        raise

    logger.debug("resource_parsed", format=spec.format_name, key_count=len(table))
    return table
