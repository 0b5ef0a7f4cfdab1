"""
Unified test infrastructure for stache.

Modules:
- file_utils: Utilities for creating files and directories
- cli_utils: Running the CLI in a subprocess and parsing its JSON output
"""

from .file_utils import write, write_tree
from .cli_utils import run_cli, jload

__all__ = [
    "write",
    "write_tree",
    "run_cli",
    "jload",
]
