"""Contrail - fast and configurable powerline-style shell prompts"""

from .config import (
    CONFIG_FILE,
    CONTRAIL_DIR,
    DEFAULT_CONFIG,
    Config,
    build_config,
    generate_config_file,
    load_config,
    merge_config,
    save_config,
)
from .console import console
from .errors import (
    CommandError,
    ConfigTypeError,
    ContrailError,
    InvalidFormError,
    NoSuchMatchError,
    ParseError,
    UnsupportedShellError,
)
from .options import SegmentOptions, SegmentStyle, effective_style, resolve_options
from .render import Shell, render_chain, render_prompt, render_segment
from .segments import SEGMENTS, PromptContext, RenderResult
from .style import (
    IndexedColor,
    NamedColor,
    RGBColor,
    Style,
    TextAttribute,
    parse_color,
    parse_text_attributes,
)
from .utils import get_version

__all__ = [
    # Config
    "CONFIG_FILE",
    "CONTRAIL_DIR",
    "DEFAULT_CONFIG",
    "Config",
    "build_config",
    "generate_config_file",
    "load_config",
    "merge_config",
    "save_config",
    # Console
    "console",
    # Errors
    "CommandError",
    "ConfigTypeError",
    "ContrailError",
    "InvalidFormError",
    "NoSuchMatchError",
    "ParseError",
    "UnsupportedShellError",
    # Options
    "SegmentOptions",
    "SegmentStyle",
    "effective_style",
    "resolve_options",
    # Rendering
    "PromptContext",
    "RenderResult",
    "SEGMENTS",
    "Shell",
    "render_chain",
    "render_prompt",
    "render_segment",
    # Style
    "IndexedColor",
    "NamedColor",
    "RGBColor",
    "Style",
    "TextAttribute",
    "parse_color",
    "parse_text_attributes",
    # Utils
    "get_version",
]
