#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2026 gwz

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from bril_context import CheckContext
from bril_diagnostics import Diagnostic
from bril_env import FunctionEnv
from bril_ir import Program
from bril_signatures import FuncEnv


@dataclass
class CheckResult:
    """
    Full result of checking one Bril program.

    Contains:
      - the loaded program (None if loading failed)
      - check context (cross-cutting options)
      - function signatures of the program
      - per-function environments, keyed by function name
      - diagnostics accumulated from all passes, in program order
    """
    program: Optional[Program] = None
    context: CheckContext = field(default_factory=CheckContext.default)

    func_env: FuncEnv = field(default_factory=dict)
    function_envs: Dict[str, FunctionEnv] = field(default_factory=dict)

    diagnostics: List[Diagnostic] = field(default_factory=list)

    def has_errors(self) -> bool:
        return any(d.kind == "error" for d in self.diagnostics)

    def error_count(self) -> int:
        return len([d for d in self.diagnostics if d.kind == "error"])
