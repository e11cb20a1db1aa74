#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2026 gwz

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from bril_diagnostics import Diagnostic, diag_in_function
from bril_ir import Program
from bril_types import Type


@dataclass(frozen=True)
class FuncSig:
    args: Tuple[Type, ...]
    ret: Optional[Type]


FuncEnv = Dict[str, FuncSig]


class SignatureResolver:
    """
    Resolves the signatures of all functions of a program:

      - parameter types, in declaration order
      - return type (None for functions that return nothing)

    Every declaration is visible to every function, so this runs once, before
    any function body is checked. Unnamed functions cannot be called and are
    skipped; a name declared twice keeps its first signature.
    """

    def __init__(self, program: Program, filename: Optional[str] = None):
        self.program = program
        self.filename = filename

        self.diagnostics: List[Diagnostic] = []
        self.func_env: FuncEnv = {}

    def resolve(self) -> FuncEnv:
        for func in self.program.functions:
            if func.name is None:
                continue
            if func.name in self.func_env:
                self.diagnostics.append(
                    diag_in_function(
                        "error",
                        f"[ENV-0030] multiply defined function @{func.name}",
                        func=func,
                        filename=self.filename,
                    )
                )
                continue
            self.func_env[func.name] = FuncSig(
                args=tuple(p.type for p in func.params),
                ret=func.return_type,
            )
        return self.func_env
