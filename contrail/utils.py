"""
Utility functions for Contrail.
"""

from importlib.metadata import PackageNotFoundError, version


def get_version() -> str:
    """Get the installed package version from Python package metadata.

    Returns "dev" when running from source without installing.
    """
    try:
        return version("contrail")
    except PackageNotFoundError:
        return "dev"
