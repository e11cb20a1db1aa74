#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2026 gwz

from dataclasses import dataclass, field
from typing import Any, List, Optional, Union

from bril_types import Type


# ==========================
# Program definitions
# ==========================


# --- instructions ---

@dataclass
class Label:
    label: str


@dataclass
class Constant:
    dest: Optional[str]
    type: Optional[Type]
    value: Any  # decoded JSON literal, kept as-is for checking
    op: str = "const"


@dataclass
class Operation:
    op: str
    args: List[str] = field(default_factory=list)
    dest: Optional[str] = None
    type: Optional[Type] = None
    labels: List[str] = field(default_factory=list)
    funcs: List[str] = field(default_factory=list)


Instr = Union[Label, Constant, Operation]


def defines_dest(instr: Instr) -> bool:
    return isinstance(instr, (Constant, Operation)) and instr.dest is not None


# --- functions and programs ---

@dataclass
class Param:
    name: str
    type: Type


@dataclass
class Function:
    name: Optional[str]
    params: List[Param] = field(default_factory=list)
    return_type: Optional[Type] = None
    instrs: List[Instr] = field(default_factory=list)

    @property
    def display_name(self) -> str:
        return f"@{self.name}" if self.name is not None else "@<anonymous>"


@dataclass
class Program:
    functions: List[Function] = field(default_factory=list)
