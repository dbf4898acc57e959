"""
Current directory lookup and path shortening for the directory segment.
"""

import os
from collections.abc import Mapping

ELLIPSIS = "..."


def current_directory(environ: Mapping[str, str] | None = None) -> str:
    """Return the directory the shell believes it is in.

    $PWD is preferred because it keeps symlinks the way the user typed them;
    os.getcwd() resolves them. A directory that no longer exists yields "".
    """
    environ = os.environ if environ is None else environ
    pwd = environ.get("PWD")
    if pwd:
        return pwd
    try:
        return os.getcwd()
    except OSError:
        return ""


def contract_home(path: str, home: str | None) -> str:
    """Replace a leading home directory with "~"."""
    if not path or not home:
        return path
    home = home.rstrip("/") or "/"
    if home == "/":
        return path
    if path == home:
        return "~"
    if path.startswith(home + "/"):
        return "~" + path[len(home):]
    return path


def split_path(path: str) -> list[str]:
    """Split a path into components. A leading "/" is its own component."""
    if not path:
        return []
    components = [part for part in path.split("/") if part]
    if path.startswith("/"):
        components.insert(0, "/")
    return components


def join_path(components: list[str]) -> str:
    if not components:
        return ""
    if components[0] == "/":
        return "/" + "/".join(components[1:])
    return "/".join(components)


def truncate_components(
    components: list[str],
    max_depth: int,
    truncate_middle: bool = False,
    keep_leading: int | None = None,
) -> list[str]:
    """Collapse components beyond ``max_depth`` into a single ellipsis.

    By default the leading components are dropped and only the last
    ``max_depth`` survive. With ``truncate_middle`` the first
    ``keep_leading`` (default ``max_depth // 2``) and the remaining trailing
    components are kept and the ellipsis goes in between. Either way the
    result holds exactly ``max_depth`` real components.
    """
    depth = len(components)
    if depth <= max_depth:
        return list(components)

    if not truncate_middle:
        return [ELLIPSIS] + components[depth - max_depth:]

    leading = max_depth // 2 if keep_leading is None else keep_leading
    trailing = max_depth - leading
    return components[:leading] + [ELLIPSIS] + components[depth - trailing:]


def shorten_path(
    path: str,
    home: str | None,
    max_depth: int,
    truncate_middle: bool = False,
    keep_leading: int | None = None,
) -> str:
    components = split_path(contract_home(path, home))
    return join_path(truncate_components(components, max_depth, truncate_middle, keep_leading))
