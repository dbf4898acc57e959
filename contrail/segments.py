"""
Content providers for every segment kind, and the registry that maps segment
names to them.

A provider takes the segment name, the configuration and the PromptContext
for this invocation, and returns a RenderResult: the text to show (or None to
hide the segment entirely) together with the resolved options and style the
renderer needs to paint it.

Failure discipline:
  - Configuration errors (ConfigTypeError, ParseError) propagate and abort
    the whole render. Providers therefore read all of their options before
    touching the environment.
  - Environmental failures degrade. No repository, an unborn HEAD or a git
    command that fails simply hides the segment, or the affected part of it.

The registry:
  SEGMENTS lists the built-in segment kinds. Any name not in it is a
  user-defined segment and goes to ``format_generic``, whose content comes
  from the segment's ``output`` setting or, failing that, from the output of
  its ``command``.
"""

from dataclasses import dataclass, field
from typing import Callable, TypedDict

from .config import Config
from .console import debug
from .directory import shorten_path
from .errors import GitError, InvalidFormError
from .options import (
    SegmentOptions,
    SegmentStyle,
    effective_style,
    read_style,
    resolve_options,
)
from .style import Color, Style
from .vcs import GitRepository

PROMPT_SYMBOL = "$"
DEFAULT_MAX_DEPTH = 4


@dataclass(frozen=True)
class PromptContext:
    """Everything a provider may need to know about the invoking shell."""

    exit_code: int = 0
    cwd: str = ""
    home: str | None = None
    command_output: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class RenderResult:
    """What one provider produced.

    ``content`` of None means the segment is skipped entirely: no padding, no
    separator, and it does not take part in background chaining.
    """

    content: str | None = None
    options: SegmentOptions | None = None
    style: Style | None = None

    @property
    def visible(self) -> bool:
        return self.content is not None

    @property
    def next_background(self) -> Color | None:
        """Background the segment before this one should chain into."""
        if not self.visible or self.style is None:
            return None
        return self.style.background


ABSENT = RenderResult()


def make_result(
    text: str | None,
    options: SegmentOptions,
    override: SegmentStyle | None = None,
) -> RenderResult:
    """Build a RenderResult, applying the segment's ``output`` setting if present."""
    if text is None:
        return ABSENT
    if options.output_override is not None:
        text = options.output_override
    return RenderResult(text, options, effective_style(options, override))


def _status_style(name: str, config: Config, exit_code: int) -> SegmentStyle:
    success = read_style(f"segments.{name}.style_success", config)
    error = read_style(f"segments.{name}.style_error", config)
    # Only an exit status of exactly 0 counts as success.
    return success if exit_code == 0 else error


def format_directory(name: str, config: Config, context: PromptContext) -> RenderResult:
    options = resolve_options(name, config)

    max_key = f"segments.{name}.max_depth"
    max_depth = config.get_int_setting(max_key, DEFAULT_MAX_DEPTH)
    if max_depth < 0:
        raise InvalidFormError(max_depth, key=max_key, detail="must not be negative")

    truncate_middle = config.get_bool_setting(f"segments.{name}.truncate_middle", False)

    leading_key = f"segments.{name}.keep_leading"
    keep_leading = config.get_int_setting(leading_key)
    if keep_leading is not None and not 0 <= keep_leading <= max_depth:
        raise InvalidFormError(keep_leading, key=leading_key, detail=f"must be 0-{max_depth}")

    path = shorten_path(context.cwd, context.home, max_depth, truncate_middle, keep_leading)
    return make_result(path, options)


def format_exit_code(name: str, config: Config, context: PromptContext) -> RenderResult:
    options = resolve_options(name, config)
    override = _status_style(name, config, context.exit_code)
    return make_result(str(context.exit_code), options, override)


def format_prompt(name: str, config: Config, context: PromptContext) -> RenderResult:
    options = resolve_options(name, config)
    override = _status_style(name, config, context.exit_code)
    return make_result(PROMPT_SYMBOL, options, override)


def format_generic(name: str, config: Config, context: PromptContext) -> RenderResult:
    options = resolve_options(name, config)
    # A user-defined segment with nothing to show is skipped, not an error.
    text = context.command_output.get(name)
    if options.output_override is None and text is None:
        return ABSENT
    return make_result(text if text is not None else "", options)


def format_git(name: str, config: Config, context: PromptContext, discover=None) -> RenderResult:
    """Show the branch, local changes and ahead/behind counts of the enclosing repository.

    Only the branch is required. The change indicator and the ahead/behind
    counts are each dropped on their own if git fails while computing them.
    """
    options = resolve_options(name, config)
    prefix = f"segments.{name}"
    show_changes = config.get_bool_setting(f"{prefix}.show_changes", True)
    show_diff_stats = config.get_bool_setting(f"{prefix}.show_diff_stats", False)
    symbol_changed = config.get_setting(f"{prefix}.symbol_changed", "+")
    symbol_insertion = config.get_setting(f"{prefix}.symbol_insertion", "+")
    symbol_deletion = config.get_setting(f"{prefix}.symbol_deletion", "-")
    show_ahead_behind = config.get_bool_setting(f"{prefix}.show_ahead_behind", True)
    symbol_ahead = config.get_setting(f"{prefix}.symbol_ahead", "⇡")
    symbol_behind = config.get_setting(f"{prefix}.symbol_behind", "⇣")

    discover = discover or GitRepository.discover
    repo = discover(context.cwd)
    if repo is None:
        return ABSENT

    local = repo.head_commit()
    if local is None:
        # Unborn HEAD: a fresh repository with no commits yet.
        return ABSENT

    try:
        output = repo.head_shorthand()
    except GitError as e:
        debug(f"git segment skipped: {e}")
        return ABSENT
    if not output:
        return ABSENT

    if show_changes:
        try:
            stats = repo.diff_stats()
            if stats.files_changed > 0:
                if show_diff_stats:
                    output += (
                        f" ({symbol_deletion}{stats.deletions}, "
                        f"{symbol_insertion}{stats.insertions})"
                    )
                else:
                    output += f" {symbol_changed}"
        except GitError as e:
            debug(f"git change status unavailable: {e}")

    if show_ahead_behind:
        upstream = repo.upstream()
        if upstream is not None:
            try:
                ahead, behind = repo.ahead_behind("HEAD", upstream)
                if ahead > 0:
                    output += f" {symbol_ahead}{ahead}"
                if behind > 0:
                    output += f" {symbol_behind}{behind}"
            except GitError as e:
                debug(f"git ahead/behind unavailable: {e}")

    return make_result(output, options)


Provider = Callable[[str, Config, PromptContext], RenderResult]


class SegmentInfo(TypedDict):
    provider: Provider
    description: str


SEGMENTS: dict[str, SegmentInfo] = {
    "directory": {
        "provider": format_directory,
        "description": "Current directory, with ~ for home and long paths shortened",
    },
    "exit_code": {
        "provider": format_exit_code,
        "description": "Exit status of the last command, colored by success or failure",
    },
    "git": {
        "provider": format_git,
        "description": "Branch, local changes and ahead/behind counts of the current repository",
    },
    "prompt": {
        "provider": format_prompt,
        "description": "The prompt symbol, colored by success or failure",
    },
}


def get_provider(name: str) -> Provider:
    """Provider for ``name``; unknown names are user-defined segments."""
    info = SEGMENTS.get(name)
    return info["provider"] if info else format_generic


def collect_commands(names: list[str], config: Config) -> dict[str, str]:
    """Commands to run for user-defined segments that have no literal ``output``."""
    commands = {}
    for name in names:
        if name in SEGMENTS or name in commands:
            continue
        if config.get_setting(f"segments.{name}.output") is not None:
            continue
        command = config.get_setting(f"segments.{name}.command")
        if command:
            commands[name] = command
    return commands
