"""
Logging for brilck: plain lines on standard error, filtered by the
CheckContext log level.
"""

#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2026 gwz

import sys
import time
from typing import Optional

from bril_context import CheckContext, LogLevel


def log(context: CheckContext, log_level: LogLevel, message: str) -> None:
    if context.log_level < log_level:
        return
    if context.log_rich_format:
        timestamp = time.strftime("%Y-%m-%d %H:%M:%S", time.localtime())
        message = f"{timestamp} [{log_level.name}] {message}"
    print(message, file=sys.stderr)


def log_error(context: CheckContext, message: str) -> None:
    log(context, LogLevel.ERROR, message)


def log_info(context: CheckContext, message: str) -> None:
    log(context, LogLevel.INFO, message)


def log_debug(context: CheckContext, message: str) -> None:
    log(context, LogLevel.DEBUG, message)


def log_stage(context: CheckContext, stage: str, function: Optional[str] = None) -> None:
    """
    Log the start of a checking stage, optionally for one function.
    """
    if function:
        log_info(context, f"{stage} function '@{function}'")
    else:
        log_info(context, f"{stage}...")
