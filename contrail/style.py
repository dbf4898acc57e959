"""
Color and text-attribute parsing, and ANSI escape generation.

Configuration values arrive loosely typed (strings, integers, short arrays).
This module is the single place where they are turned into typed values:

  - A Color is one of NamedColor (the 16 palette entries), IndexedColor (an
    8-bit terminal palette position) or RGBColor (a 24-bit triple).
  - TextAttribute is a flag set of bold, dimmed, italic, and so on.
  - Style combines an optional foreground, an optional background and a set
    of attributes, and knows how to emit the SGR escape codes for them.

Named colors are emitted as 256-color palette references (38;5;N), so "green"
and 2 produce the same escape sequence.

Parsing a color string tries, in order: a palette name, a single integer, and
a comma separated triple. Something that looks like a color but is out of
range or has the wrong arity raises InvalidFormError; anything else raises
NoSuchMatchError.
"""

import enum
import re
from dataclasses import dataclass
from typing import Any

from .config import value_kind
from .errors import ConfigTypeError, InvalidFormError, NoSuchMatchError

ESC = "\x1b["
RESET = "\x1b[0m"

# Palette positions follow the xterm 256-color chart.
NAMED_COLORS = {
    "black": 0,
    "red": 1,
    "green": 2,
    "yellow": 3,
    "blue": 4,
    "purple": 5,
    "cyan": 6,
    "white": 7,
    "bright_black": 8,
    "bright_red": 9,
    "bright_green": 10,
    "bright_yellow": 11,
    "bright_blue": 12,
    "bright_purple": 13,
    "bright_cyan": 14,
    "bright_white": 15,
}

_INTEGER = re.compile(r"^[+-]?\d+$")
_COMPONENT = re.compile(r"^\d+$")


@dataclass(frozen=True)
class NamedColor:
    name: str

    @property
    def index(self) -> int:
        return NAMED_COLORS[self.name]

    def foreground_code(self) -> str:
        return f"38;5;{self.index}"

    def background_code(self) -> str:
        return f"48;5;{self.index}"


@dataclass(frozen=True)
class IndexedColor:
    index: int

    def __post_init__(self):
        if not 0 <= self.index <= 255:
            raise InvalidFormError(self.index, detail="palette index must be 0-255")

    def foreground_code(self) -> str:
        return f"38;5;{self.index}"

    def background_code(self) -> str:
        return f"48;5;{self.index}"


@dataclass(frozen=True)
class RGBColor:
    r: int
    g: int
    b: int

    def __post_init__(self):
        if not all(0 <= c <= 255 for c in (self.r, self.g, self.b)):
            raise InvalidFormError(
                (self.r, self.g, self.b), detail="RGB components must be 0-255"
            )

    def foreground_code(self) -> str:
        return f"38;2;{self.r};{self.g};{self.b}"

    def background_code(self) -> str:
        return f"48;2;{self.r};{self.g};{self.b}"


Color = NamedColor | IndexedColor | RGBColor


class TextAttribute(enum.Flag):
    """Independent text attributes. Combine with ``|``."""

    BOLD = enum.auto()
    DIMMED = enum.auto()
    ITALIC = enum.auto()
    UNDERLINE = enum.auto()
    BLINK = enum.auto()
    REVERSE = enum.auto()
    HIDDEN = enum.auto()
    STRIKETHROUGH = enum.auto()


NO_ATTRIBUTES = TextAttribute(0)

# SGR parameter for each attribute, in emission order.
_ATTRIBUTE_CODES = [
    (TextAttribute.BOLD, "1"),
    (TextAttribute.DIMMED, "2"),
    (TextAttribute.ITALIC, "3"),
    (TextAttribute.UNDERLINE, "4"),
    (TextAttribute.BLINK, "5"),
    (TextAttribute.REVERSE, "7"),
    (TextAttribute.HIDDEN, "8"),
    (TextAttribute.STRIKETHROUGH, "9"),
]

# Tokens that explicitly ask for no attributes.
_PLAIN_TOKENS = {"default", "normal"}


@dataclass(frozen=True)
class Style:
    """A fully resolved style, ready to be painted onto text."""

    foreground: Color | None = None
    background: Color | None = None
    attributes: TextAttribute = NO_ATTRIBUTES

    @property
    def is_plain(self) -> bool:
        return self.foreground is None and self.background is None and not self.attributes

    def codes(self) -> list[str]:
        codes = [code for attr, code in _ATTRIBUTE_CODES if attr in self.attributes]
        if self.background is not None:
            codes.append(self.background.background_code())
        if self.foreground is not None:
            codes.append(self.foreground.foreground_code())
        return codes

    def prefix(self) -> str:
        """Escape sequence that switches this style on, or "" for a plain style."""
        if self.is_plain:
            return ""
        return f"{ESC}{';'.join(self.codes())}m"

    def suffix(self) -> str:
        return "" if self.is_plain else RESET

    def paint(self, text: str) -> str:
        return f"{self.prefix()}{text}{self.suffix()}"


def parse_color(value: Any, key: str | None = None) -> Color:
    """Parse a configuration value into a Color.

    Accepts a palette name, an integer 0-255, a string holding either of
    those or an RGB triple such as "(14, 76, 1)", or an array of three
    integers.

    Raises:
        ConfigTypeError: the value is not a string, integer or array.
        NoSuchMatchError: the string is not recognizable as a color.
        InvalidFormError: the value looks like a color but is out of range
            or has the wrong number of components.
    """
    if isinstance(value, bool) or not isinstance(value, (str, int, list)):
        raise ConfigTypeError(key or "color", "color", value_kind(value))

    if isinstance(value, int):
        return _indexed(value, key)

    if isinstance(value, list):
        if len(value) != 3 or not all(
            isinstance(c, int) and not isinstance(c, bool) for c in value
        ):
            raise InvalidFormError(value, key=key, detail="expected three integers")
        return _rgb(value, value, key)

    text = value.strip().lower()
    if text in NAMED_COLORS:
        return NamedColor(text)
    if _INTEGER.match(text):
        return _indexed(int(text), key, original=value)
    if "," in text:
        return parse_rgb(value, key)
    raise NoSuchMatchError(value, key=key)


def parse_rgb(value: str, key: str | None = None) -> RGBColor:
    """Parse "r, g, b" or "(r, g, b)" into an RGBColor.

    Stray parentheses and spaces are ignored, so "(0, 0, 0))" is accepted,
    but "(0, 0, 0,)" has four components and is rejected.
    """
    components = [
        part.replace("(", "").replace(")", "").replace(" ", "") for part in value.split(",")
    ]
    if len(components) != 3:
        raise InvalidFormError(
            value, key=key, detail=f"expected 3 components, found {len(components)}"
        )
    if not all(_COMPONENT.match(c) for c in components):
        raise InvalidFormError(value, key=key, detail="components must be integers 0-255")
    return _rgb([int(c) for c in components], value, key)


def parse_text_attributes(value: Any, key: str | None = None) -> TextAttribute:
    """Parse a single attribute name or an array of them.

    Matching is case-insensitive and duplicates are harmless. An absent value
    or an empty string means no attributes.
    """
    if value is None:
        return NO_ATTRIBUTES
    if isinstance(value, str):
        tokens = [value]
    elif isinstance(value, list):
        tokens = value
    else:
        raise ConfigTypeError(key or "text_attributes", "string or array", value_kind(value))

    attributes = NO_ATTRIBUTES
    for token in tokens:
        if not isinstance(token, str):
            raise ConfigTypeError(key or "text_attributes", "string", value_kind(token))
        name = token.strip().lower()
        if not name or name in _PLAIN_TOKENS:
            continue
        try:
            attributes |= TextAttribute[name.upper()]
        except KeyError:
            raise NoSuchMatchError(token, key=key) from None
    return attributes


def _indexed(index: int, key: str | None, original: Any = None) -> IndexedColor:
    if not 0 <= index <= 255:
        raise InvalidFormError(
            index if original is None else original,
            key=key,
            detail="palette index must be 0-255",
        )
    return IndexedColor(index)


def _rgb(components: list[int], original: Any, key: str | None) -> RGBColor:
    if not all(0 <= c <= 255 for c in components):
        raise InvalidFormError(original, key=key, detail="RGB components must be 0-255")
    return RGBColor(*components)
