"""
Chain renderer: stitches segments into the final, escape-coded prompt.

Background chaining
  Each segment ends with a separator painted in the segment's own background
  color as foreground, on top of the *next visible* segment's background.
  That is what makes the bar look continuous. Because a segment needs to know
  what comes after it, segments are computed in reverse display order while
  carrying ``next_background`` along:

      display order:   exit_code   directory   git (hidden)   prompt
      walk order:      prompt -> git -> directory -> exit_code

  A hidden segment leaves ``next_background`` untouched, so ``directory``
  chains straight into ``prompt``. The last visible segment has no
  ``next_background`` and its separator is drawn on the terminal default.

Length hiding
  Shells count every byte of the prompt towards the line length unless escape
  sequences are bracketed in shell-specific zero-width markers (``\\[ \\]``
  for bash, ``%{ %}`` for zsh). Fragments that emit no escape codes are left
  unwrapped.
"""

import enum
import os

from .commands import run_commands
from .config import Config, value_kind
from .directory import current_directory
from .errors import ConfigTypeError, UnsupportedShellError
from .segments import PromptContext, RenderResult, collect_commands, get_provider
from .style import Color, Style


class Shell(enum.Enum):
    BASH = "bash"
    ZSH = "zsh"

    @classmethod
    def from_name(cls, name: str, key: str | None = None) -> "Shell":
        try:
            return cls(name.strip().lower())
        except ValueError:
            raise UnsupportedShellError(name, key=key) from None

    @property
    def markers(self) -> tuple[str, str]:
        return _MARKERS[self]


_MARKERS = {
    Shell.BASH: ("\\[", "\\]"),
    Shell.ZSH: ("%{", "%}"),
}


def hide_length(code: str, shell: Shell) -> str:
    """Wrap raw escape codes so the shell does not count them; "" stays ""."""
    if not code:
        return ""
    start, end = shell.markers
    return f"{start}{code}{end}"


def paint(text: str, style: Style, shell: Shell) -> str:
    return f"{hide_length(style.prefix(), shell)}{text}{hide_length(style.suffix(), shell)}"


def render_segment(result: RenderResult, next_background: Color | None, shell: Shell) -> str:
    """Render one visible segment followed by its separator."""
    options = result.options
    style = result.style
    body = paint(f"{options.padding_left}{result.content}{options.padding_right}", style, shell)
    if not options.separator:
        return body

    # The separator swaps colors: our background becomes its foreground, and
    # it sits on the next visible segment's background (terminal default if none).
    separator_style = Style(foreground=style.background, background=next_background)
    return body + paint(options.separator, separator_style, shell)


def render_chain(names: list[str], config: Config, context: PromptContext, shell: Shell) -> str:
    """Render ``names`` (in display order) into a single prompt string."""
    rendered: list[str] = []
    next_background: Color | None = None

    for name in reversed(names):
        result = get_provider(name)(name, config, context)
        if not result.visible:
            continue
        rendered.append(render_segment(result, next_background, shell))
        next_background = result.next_background

    # Built back to front; restore display order once.
    rendered.reverse()
    return "".join(rendered)


def segment_names(config: Config) -> list[str]:
    """The configured segment names, in display order."""
    key = "global.segments"
    names = config.get_list_setting(key, [])
    for i, name in enumerate(names):
        if not isinstance(name, str):
            raise ConfigTypeError(f"{key}[{i}]", "string", value_kind(name))
    return names


def render_prompt(
    config: Config,
    exit_code: int = 0,
    environ=None,
) -> str:
    """Render the configured prompt for the current process environment."""
    environ = os.environ if environ is None else environ
    shell = Shell.from_name(config.get_setting("global.shell", "bash"), key="global.shell")
    names = segment_names(config)

    cwd = current_directory(environ)
    commands = collect_commands(names, config)
    outputs = run_commands(list(commands.values()), cwd=cwd)

    context = PromptContext(
        exit_code=exit_code,
        cwd=cwd,
        home=environ.get("HOME"),
        command_output=dict(zip(commands.keys(), outputs)),
    )
    return render_chain(names, config, context, shell)
