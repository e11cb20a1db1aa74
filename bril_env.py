#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2026 gwz

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Set

from bril_diagnostics import Diagnostic, diag_in_function
from bril_ir import Function, Label, defines_dest
from bril_types import Type, types_equal, format_type


@dataclass
class FunctionEnv:
    """
    Environment for a single function: variable types and label names.

    Built once before any use in the function is checked, read-only after.
    """
    func: Function
    vars: Dict[str, Type] = field(default_factory=dict)
    labels: Set[str] = field(default_factory=set)


class EnvironmentBuilder:
    """
    Collects the types of all variables and the names of all labels of a
    function in one pass over its body.

    Design choices:

    - Parameters are recorded first, with the same conflict rule as any
      other definition.
    - The first recorded type of a variable wins. A later definition with a
      different type is reported and ignored.
    - A label defined twice is reported; the label set keeps one entry.
    - A destination without a declared type is not recorded.
    """

    def __init__(self, func: Function, filename: Optional[str] = None) -> None:
        self.func = func
        self.filename = filename
        self.diagnostics: List[Diagnostic] = []

    def build(self) -> FunctionEnv:
        env = FunctionEnv(func=self.func)

        for param in self.func.params:
            self._add_type(env, param.name, param.type)

        for instr in self.func.instrs:
            if defines_dest(instr):
                if instr.type is not None:
                    self._add_type(env, instr.dest, instr.type)
            elif isinstance(instr, Label):
                if instr.label in env.labels:
                    self._error(f"[ENV-0020] multiply defined label .{instr.label}")
                else:
                    env.labels.add(instr.label)

        return env

    # --- internal helpers ---

    def _add_type(self, env: FunctionEnv, name: str, typ: Type) -> None:
        old = env.vars.get(name)
        if old is None:
            env.vars[name] = typ
        elif not types_equal(old, typ):
            self._error(
                f"[ENV-0010] new type {format_type(typ)} for {name} "
                f"conflicts with old type {format_type(old)}"
            )

    def _error(self, message: str) -> None:
        self.diagnostics.append(
            diag_in_function("error", message, func=self.func, filename=self.filename)
        )


def build_function_env(func: Function, filename: Optional[str] = None) -> tuple[FunctionEnv, List[Diagnostic]]:
    builder = EnvironmentBuilder(func, filename)
    env = builder.build()
    return env, builder.diagnostics
