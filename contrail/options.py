"""
Per-segment option resolution.

Every segment reads the same handful of options from the configuration:
padding on either side, a separator, an optional literal ``output`` and a
style. ``resolve_options`` collects them into an immutable SegmentOptions,
parsing every color and attribute up front so a bad value aborts the render
before anything is printed.

Lookups fall through three levels, each a plain optional field:

    segments.<name>.<field>  ->  global.<field>  ->  built-in default

``output`` is the exception and is only ever read from the segment itself.

Style fields are kept separate from the global defaults until render time,
because some segments (exit code, prompt) replace the segment style with a
success or error variant, and that replacement must still fall back to the
global colors for any field it leaves unset.
"""

from dataclasses import dataclass

from .config import Config
from .style import NO_ATTRIBUTES, Color, Style, TextAttribute, parse_color, parse_text_attributes

DEFAULT_PADDING = " "
DEFAULT_SEPARATOR = ""


@dataclass(frozen=True)
class SegmentStyle:
    """Style as configured for one segment. ``None`` means "use the global default"."""

    foreground: Color | None = None
    background: Color | None = None
    attributes: TextAttribute | None = None


@dataclass(frozen=True)
class GlobalDefaults:
    """The ``global.*`` style settings every segment falls back to."""

    foreground: Color | None = None
    background: Color | None = None
    attributes: TextAttribute | None = None


@dataclass(frozen=True)
class SegmentOptions:
    name: str
    output_override: str | None
    padding_left: str
    padding_right: str
    separator: str
    style: SegmentStyle
    defaults: GlobalDefaults


def _first(*values):
    for value in values:
        if value is not None:
            return value
    return None


def _color(config: Config, key: str) -> Color | None:
    value = config.get(key)
    if value is None:
        return None
    return parse_color(value, key)


def _attributes(config: Config, key: str) -> TextAttribute | None:
    value = config.get(key)
    if value is None:
        return None
    return parse_text_attributes(value, key)


def read_style(prefix: str, config: Config) -> SegmentStyle:
    """Read ``<prefix>.{foreground,background,text_attributes}`` into a SegmentStyle."""
    # Raises if <prefix> is present but is not a table.
    config.get_table_setting(prefix)
    return SegmentStyle(
        foreground=_color(config, f"{prefix}.foreground"),
        background=_color(config, f"{prefix}.background"),
        attributes=_attributes(config, f"{prefix}.text_attributes"),
    )


def read_global_defaults(config: Config) -> GlobalDefaults:
    return GlobalDefaults(
        foreground=_color(config, "global.foreground"),
        background=_color(config, "global.background"),
        attributes=_attributes(config, "global.style"),
    )


def _string_option(name: str, field: str, config: Config, default: str) -> str:
    return _first(
        config.get_setting(f"segments.{name}.{field}"),
        config.get_setting(f"global.{field}"),
        default,
    )


def resolve_options(name: str, config: Config) -> SegmentOptions:
    """Resolve every option for segment ``name``.

    Raises ConfigTypeError, NoSuchMatchError or InvalidFormError on any
    malformed value; nothing is silently coerced.
    """
    config.get_table_setting(f"segments.{name}")
    return SegmentOptions(
        name=name,
        output_override=config.get_setting(f"segments.{name}.output"),
        padding_left=_string_option(name, "padding_left", config, DEFAULT_PADDING),
        padding_right=_string_option(name, "padding_right", config, DEFAULT_PADDING),
        separator=_string_option(name, "separator", config, DEFAULT_SEPARATOR),
        style=read_style(f"segments.{name}.style", config),
        defaults=read_global_defaults(config),
    )


def effective_style(options: SegmentOptions, override: SegmentStyle | None = None) -> Style:
    """Combine a segment's style with the global defaults.

    ``override``, when given, replaces the segment's own style as a whole;
    fields it leaves unset still fall back to the global defaults.
    """
    local = override if override is not None else options.style
    defaults = options.defaults
    return Style(
        foreground=_first(local.foreground, defaults.foreground),
        background=_first(local.background, defaults.background),
        attributes=_first(local.attributes, defaults.attributes, NO_ATTRIBUTES),
    )
