"""
Entry point for running Contrail as a Python module: `python -m contrail`

The console script defined in pyproject.toml calls `contrail.main:main`
directly; both paths end up in the same function.
"""

import sys

from .main import main

if __name__ == "__main__":
    sys.exit(main())
