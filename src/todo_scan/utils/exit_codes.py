"""Process exit codes returned by ``todoscan``.

A scan exits 0 whatever it finds; unreadable files and directories are
logged, not signalled through the exit code.
"""

from __future__ import annotations

from enum import IntEnum


class ExitCode(IntEnum):
    SUCCESS = 0
    INVALID_CONFIG = 1    # ``validate``: file parsed but failed the schema
    ERROR = 2             # usage error, missing directory, bad pattern or encoding
