#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2026 gwz

import sys
from pathlib import Path
from typing import List, Optional, TextIO

from bril_analysis import CheckResult
from bril_checker import FunctionChecker
from bril_context import CheckContext
from bril_diagnostics import Diagnostic
from bril_env import build_function_env
from bril_ir import Function, Program
from bril_loader import Loader, LoadError
from bril_logger import log_info, log_debug, log_stage
from bril_signatures import FuncEnv, SignatureResolver


class BrilDriver:
    """
    Check driver:
      - load a Bril JSON document
      - resolve all function signatures
      - check every function against them

    Entry points:
      - check_program(program): check an already loaded program.
      - check_text(text): load from JSON text, then check.
      - check_file(path) / check_stream(stream): read, load, check.
    """

    def __init__(self, context: CheckContext | None = None):
        self.context = context or CheckContext.default()

    # --- Public API ---

    def check_file(self, path: str | Path) -> CheckResult:
        path = Path(path)
        try:
            text = path.read_text(encoding="utf-8")
        except OSError as e:
            return self._read_failure(f"cannot read {path}: {e.strerror}")
        except UnicodeDecodeError as e:
            return self._read_failure(f"cannot read {path}: {e.reason}")
        return self.check_text(text, filename=str(path))

    def check_stream(self, stream: Optional[TextIO] = None) -> CheckResult:
        try:
            text = (stream or sys.stdin).read()
        except OSError as e:
            return self._read_failure(f"cannot read standard input: {e.strerror}")
        except UnicodeDecodeError as e:
            return self._read_failure(f"cannot read standard input: {e.reason}")
        return self.check_text(text)

    def check_text(self, text: str, filename: Optional[str] = None) -> CheckResult:
        log_stage(self.context, "Loading program")
        try:
            program = Loader.load_text(text, filename=filename)
        except LoadError as e:
            result = CheckResult(program=None, context=self.context)
            result.diagnostics.append(
                Diagnostic(kind="error", message=e.message, filename=e.filename)
            )
            return result
        log_debug(self.context, f"Loaded {len(program.functions)} function(s)")
        return self.check_program(program, filename=filename)

    def check_program(self, program: Program, filename: Optional[str] = None) -> CheckResult:
        """
        High-level checking pipeline:

          1. Resolve the signatures of all functions (FuncEnv).
          2. For each function, build its variable and label environment.
          3. For each function, check every instruction.

        Functions are independent once the FuncEnv exists; their diagnostics
        are concatenated in program order. The pass never stops early.
        """
        result = CheckResult(program=program, context=self.context)

        log_stage(self.context, "Resolving function signatures")
        sr = SignatureResolver(program, filename)
        result.func_env = sr.resolve()
        result.diagnostics.extend(sr.diagnostics)
        log_debug(self.context, f"Signature resolution found {len(result.func_env)} function(s)")

        for func in program.functions:
            result.diagnostics.extend(self._check_function(result, func, result.func_env, filename))

        log_info(
            self.context,
            f"Check complete: {len(result.diagnostics)} total diagnostic(s), {result.error_count()} error(s)",
        )
        return result

    # --- Internal helpers ---

    def _read_failure(self, message: str) -> CheckResult:
        result = CheckResult(program=None, context=self.context)
        result.diagnostics.append(Diagnostic(kind="error", message=f"[LOD-0040] {message}"))
        return result

    def _check_function(
        self,
        result: CheckResult,
        func: Function,
        funcs: FuncEnv,
        filename: Optional[str],
    ) -> List[Diagnostic]:
        log_stage(self.context, "Checking", func.name)

        env, diagnostics = build_function_env(func, filename)
        if func.name is not None and func.name not in result.function_envs:
            result.function_envs[func.name] = env
        log_debug(self.context, f"{func.display_name}: {len(env.vars)} variable(s), {len(env.labels)} label(s)")

        checker = FunctionChecker(env=env, funcs=funcs, filename=filename)
        diagnostics.extend(checker.check())
        return diagnostics
