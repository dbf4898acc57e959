import argparse
import sys
from pathlib import Path

from rich import box
from rich.markup import escape
from rich.prompt import Confirm
from rich.table import Table

from .config import CONFIG_FILE, build_config, generate_config_file
from .console import console
from .errors import ContrailError
from .render import Shell, render_prompt
from .segments import SEGMENTS
from .utils import get_version

# Exit status assumed when the shell does not pass one.
DEFAULT_EXIT_CODE = 255


def exit_code_type(value: str) -> int:
    """argparse type for an exit status in 0-255"""
    try:
        code = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid exit code: {value!r}") from None
    if not 0 <= code <= 255:
        raise argparse.ArgumentTypeError(f"exit code must be 0-255, got {code}")
    return code


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="contrail",
        description="Fast and configurable shell prompter",
    )
    parser.add_argument(
        "-V", "--version",
        action="version",
        version=f"contrail {get_version()}",
    )
    parser.add_argument(
        "-e", "--exit-code",
        type=exit_code_type,
        default=DEFAULT_EXIT_CODE,
        metavar="CODE",
        help="The exit code of the last-executed command",
    )
    parser.add_argument(
        "-c", "--config",
        metavar="FILE",
        help=f"The configuration file (default: {CONFIG_FILE})",
    )
    parser.add_argument(
        "-s", "--shell",
        choices=[shell.value for shell in Shell],
        help="Shell to format the prompt for",
    )
    parser.add_argument(
        "-z", "--zsh",
        action="store_true",
        help="Shorthand for --shell zsh",
    )
    parser.add_argument(
        "-g", "--generate-config",
        action="store_true",
        help="Write a default configuration file to the config path and exit",
    )
    parser.add_argument(
        "--list-segments",
        action="store_true",
        help="List the built-in segments and exit",
    )
    return parser


def print_segments():
    """Print the built-in segment registry"""
    table = Table(box=box.SIMPLE, show_header=True, header_style="bold")
    table.add_column("Segment", style="green")
    table.add_column("Description")
    for name, info in SEGMENTS.items():
        table.add_row(name, info["description"])
    console.print(table)
    console.print("[dim]Any other name is a user-defined segment (output or command).[/dim]")


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    if args.list_segments:
        print_segments()
        return 0

    config_file = Path(args.config).expanduser() if args.config else CONFIG_FILE

    if args.generate_config:
        if Confirm.ask(
            f"Is {escape(str(config_file))} the correct path for the contrail configuration file?",
            console=console,
        ):
            generate_config_file(config_file)
        return 0

    shell = "zsh" if args.zsh else args.shell

    try:
        config = build_config(config_file, shell=shell)
        prompt = render_prompt(config, exit_code=args.exit_code)
    except ContrailError as e:
        console.print(f"[red]contrail: {escape(str(e))}[/red]")
        return 1

    # No trailing newline: the shell uses this string as-is.
    sys.stdout.write(prompt)
    sys.stdout.flush()
    return 0


if __name__ == "__main__":
    sys.exit(main())
