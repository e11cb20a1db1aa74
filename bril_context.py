"""
Options shared by the stages of a check run.
"""

#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2026 gwz

from dataclasses import dataclass
from enum import IntEnum


class LogLevel(IntEnum):
    """Hierarchical logging levels for brilck."""
    SILENT = 0
    ERROR = 3       # diagnostics
    INFO = 10       # stage progress (-v)
    DEBUG = 30      # per-stage counts (-vvv)


@dataclass
class CheckContext:
    """
    Attributes:
        log_rich_format:    Prefix log lines with a timestamp and their level.
        log_level:          Messages above this level are dropped.
        exit_zero:          The CLI exits with status 0 once a check completes,
                            whatever it reported.
    """
    log_rich_format: bool = False
    log_level: LogLevel = LogLevel.ERROR
    exit_zero: bool = False

    @staticmethod
    def default() -> 'CheckContext':
        return CheckContext()
