import copy
import json
import os
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

from .console import console
from .errors import ConfigTypeError

# Load environment variables from .env file
load_dotenv()

# Configuration Defaults
DEFAULT_CONFIG: dict[str, Any] = {
    "global": {
        "segments": ["exit_code", "directory", "git", "prompt"],
        "foreground": "bright_white",
        "background": "blue",
        "style": "",
        "padding_left": " ",
        "padding_right": " ",
        "separator": "",
        "shell": "bash",
    },
    "segments": {
        "directory": {
            "max_depth": 4,
            "truncate_middle": False,
        },
        "exit_code": {
            "style_success": {"background": "green"},
            "style_error": {"background": "red"},
        },
        "git": {
            "show_changes": True,
            "show_diff_stats": False,
            "symbol_changed": "+",
            "symbol_insertion": "+",
            "symbol_deletion": "-",
            "show_ahead_behind": True,
            "symbol_ahead": "⇡",
            "symbol_behind": "⇣",
        },
        "prompt": {
            "style_success": {"background": "green"},
            "style_error": {"background": "red"},
        },
    },
}

# File Paths
CONTRAIL_DIR = Path(os.getenv("CONTRAIL_DIR", str(Path.home() / ".contrail")))
CONFIG_FILE = Path(os.getenv("CONTRAIL_CONFIG_FILE", str(CONTRAIL_DIR / "config.json")))


def ensure_contrail_dir(directory: Path = CONTRAIL_DIR):
    """Ensure the contrail configuration directory exists"""
    if not directory.exists():
        try:
            directory.mkdir(parents=True, exist_ok=True)
        except Exception as e:
            console.print(f"[yellow]Warning: Could not create directory {directory}: {e}[/yellow]")


def load_config(filepath: Path = CONFIG_FILE) -> dict[str, Any]:
    """Load configuration from file"""
    if filepath.exists():
        try:
            with open(filepath) as f:
                config = json.load(f)
            if not isinstance(config, dict):
                raise ValueError("top level must be a JSON object")
            return config
        except Exception as e:
            console.print(f"[yellow]Warning: Could not load config file {filepath}: {e}[/yellow]")
    return {}


def save_config(config: dict[str, Any], filepath: Path = CONFIG_FILE) -> bool:
    """Save configuration to file"""
    try:
        ensure_contrail_dir(filepath.parent)
        with open(filepath, "w") as f:
            json.dump(config, f, indent=2, ensure_ascii=False)
            f.write("\n")
        return True
    except Exception as e:
        console.print(f"[red]Error saving config file: {e}[/red]")
        return False


def merge_config(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Deep-merge ``override`` into a copy of ``base``.

    Tables merge key by key; any other value in ``override`` (including
    arrays) replaces the one in ``base``.
    """
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = merge_config(merged[key], value)
        else:
            merged[key] = copy.deepcopy(value)
    return merged


def value_kind(value: Any) -> str:
    """Name the kind of a configuration value, for error messages."""
    if value is None:
        return "nothing"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, int):
        return "integer"
    if isinstance(value, float):
        return "float"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    if isinstance(value, dict):
        return "table"
    return type(value).__name__


class Config:
    """Read-only view of a merged configuration document.

    Keys are dotted paths such as ``global.background`` or
    ``segments.git.symbol_ahead``. The typed getters return ``default`` when
    the key is absent and raise ConfigTypeError when it holds a value of the
    wrong kind; nothing is coerced.
    """

    def __init__(self, data: dict[str, Any] | None = None):
        self._data = copy.deepcopy(data) if data is not None else {}

    def get(self, key: str) -> Any:
        node: Any = self._data
        for part in key.split("."):
            if not isinstance(node, dict) or part not in node:
                return None
            node = node[part]
        return node

    def get_setting(self, key: str, default: str | None = None) -> str | None:
        value = self.get(key)
        if value is None:
            return default
        if not isinstance(value, str):
            raise ConfigTypeError(key, "string", value_kind(value))
        return value

    def get_int_setting(self, key: str, default: int | None = None) -> int | None:
        value = self.get(key)
        if value is None:
            return default
        if isinstance(value, bool) or not isinstance(value, int):
            raise ConfigTypeError(key, "integer", value_kind(value))
        return value

    def get_bool_setting(self, key: str, default: bool | None = None) -> bool | None:
        value = self.get(key)
        if value is None:
            return default
        if not isinstance(value, bool):
            raise ConfigTypeError(key, "boolean", value_kind(value))
        return value

    def get_list_setting(self, key: str, default: list | None = None) -> list | None:
        value = self.get(key)
        if value is None:
            return default
        if not isinstance(value, list):
            raise ConfigTypeError(key, "array", value_kind(value))
        return value

    def get_table_setting(self, key: str) -> dict[str, Any] | None:
        value = self.get(key)
        if value is None:
            return None
        if not isinstance(value, dict):
            raise ConfigTypeError(key, "table", value_kind(value))
        return value


def build_config(
    config_file: Path | None = None,
    shell: str | None = None,
) -> Config:
    """Assemble the effective configuration.

    Priority, lowest first: DEFAULT_CONFIG, the config file, the
    CONTRAIL_SHELL environment variable, then explicit arguments.
    """
    data = merge_config(DEFAULT_CONFIG, load_config(config_file or CONFIG_FILE))

    overrides: dict[str, Any] = {}
    env_shell = os.getenv("CONTRAIL_SHELL")
    if env_shell:
        overrides["shell"] = env_shell
    if shell:
        overrides["shell"] = shell
    if overrides:
        data = merge_config(data, {"global": overrides})

    return Config(data)


def generate_config_file(filepath: Path = CONFIG_FILE) -> bool:
    """Write the default configuration to ``filepath`` unless it already exists."""
    if filepath.exists():
        console.print(f"[yellow]Config file already exists: {filepath}[/yellow]")
        return False
    if save_config(DEFAULT_CONFIG, filepath):
        console.print(f"[green]✓ Wrote default configuration to {filepath}[/green]")
        return True
    return False
