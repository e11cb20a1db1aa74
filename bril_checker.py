#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2026 gwz

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from bril_diagnostics import Diagnostic, diag_in_function
from bril_env import FunctionEnv
from bril_ir import Constant, Operation
from bril_opsigs import (
    AnySignature,
    CONST_TYPES,
    OpHandler,
    PolySignature,
    Signature,
    literal_kind,
    resolve_op,
)
from bril_signatures import FuncEnv
from bril_types import (
    BuiltinType,
    PointerType,
    PolyType,
    Type,
    TypeVar,
    format_type,
    is_primitive,
)


# Bindings of the type variable of one polymorphic signature; None = unresolved.
TypeEnv = Dict[TypeVar, Optional[Type]]


# --- unification ---

def type_lookup(t: PolyType, tenv: Optional[TypeEnv]) -> PolyType:
    """
    Substitute bound type variables in `t`, leaving unbound ones in place.
    """
    if not tenv:
        return t
    if isinstance(t, TypeVar):
        bound = tenv.get(t)
        return bound if bound is not None else t
    if isinstance(t, PointerType):
        return PointerType(type_lookup(t.inner, tenv))
    return t


def unify(a: Type, b: PolyType, tenv: Optional[TypeEnv] = None) -> bool:
    """
    Check that concrete type `a` matches expected type `b`.

    If a type environment is supplied, an unresolved type variable in `b` is
    bound to the corresponding part of `a`; a resolved one must match it.
    """
    if isinstance(b, TypeVar):
        if tenv is None or b not in tenv:
            return False
        bound = tenv[b]
        if bound is None:
            tenv[b] = a
            return True
        return unify(a, bound)

    if isinstance(a, BuiltinType) and isinstance(b, BuiltinType):
        return a.name == b.name
    if isinstance(a, PointerType) and isinstance(b, PointerType):
        return unify(a.inner, b.inner, tenv)
    return False


# --- the checker ---

@dataclass
class FunctionChecker:
    """Instruction-level checker for one Bril function.

    Checks, for every instruction of the function:
      - constants: declared type present and primitive, literal of the right kind
      - print: no result type
      - call: one known callee, then arguments and result against its signature
      - ret: returned value against the function's return type
      - every other opcode against its table signature, with unification of
        the type variable of polymorphic signatures
      - unknown opcodes

    Every problem is appended to `diagnostics`; checking always continues
    with the next check.
    """
    env: FunctionEnv
    funcs: FuncEnv
    filename: Optional[str] = None
    diagnostics: List[Diagnostic] = field(default_factory=list)

    def check(self) -> List[Diagnostic]:
        for instr in self.env.func.instrs:
            if isinstance(instr, Constant):
                self.check_const(instr)
            elif isinstance(instr, Operation):
                self.check_op(instr)
        return self.diagnostics

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def check_op(self, instr: Operation) -> None:
        target = resolve_op(instr.op)

        if target is OpHandler.PRINT:
            self._check_print(instr)
        elif target is OpHandler.CALL:
            self._check_call(instr)
        elif target is OpHandler.RET:
            self._check_ret(instr)
        elif target is None:
            self._error(f"[OPS-0010] unknown opcode {instr.op}")
        else:
            self.check_sig(instr, target)

    def _check_print(self, instr: Operation) -> None:
        if instr.type is not None:
            self._error("[PRN-0010] print should have no result type")

    def _check_call(self, instr: Operation) -> None:
        if len(instr.funcs) != 1:
            self._error(f"[CAL-0010] call should have one function, not {len(instr.funcs)}")
            return

        callee = instr.funcs[0]
        func_sig = self.funcs.get(callee)
        if func_sig is None:
            self._error(f"[CAL-0020] function @{callee} undefined")
            return

        self.check_sig(instr, Signature(args=func_sig.args, dest=func_sig.ret), f"@{callee}")

    def _check_ret(self, instr: Operation) -> None:
        ret_type = self.env.func.return_type
        if len(instr.args) > 1:
            self._error("[RET-0011] cannot return multiple values")
        elif ret_type is not None:
            if not instr.args:
                self._error("[RET-0010] missing return value in function with return type")
            else:
                self.check_sig(instr, Signature(args=(ret_type,)))
        elif instr.args:
            self._error("[RET-0012] returning value in function without a return type")

    # ------------------------------------------------------------------
    # Signatures
    # ------------------------------------------------------------------

    def check_sig(self, instr: Operation, psig: AnySignature, name: Optional[str] = None) -> None:
        """
        Check an operation's result, arguments and labels against a signature.

        `psig` may be concrete or polymorphic; for the latter, the quantified
        type is unified across the result and all arguments. `name` is used
        in messages in place of the opcode (e.g. the callee of a call).
        """
        name = name or instr.op

        tenv: TypeEnv = {}
        if isinstance(psig, PolySignature):
            sig = psig.sig
            tenv[psig.tvar] = None
        else:
            sig = psig

        # Result type
        if instr.type is not None:
            if sig.dest is not None:
                if not unify(instr.type, sig.dest, tenv):
                    self._error(
                        f"[TYP-0010] result type of {name} should be "
                        f"{format_type(type_lookup(sig.dest, tenv))}, "
                        f"but found {format_type(instr.type)}"
                    )
            else:
                self._error(f"[TYP-0011] {name} should have no result type")
        elif sig.dest is not None:
            self._error(
                f"[TYP-0012] missing result type {format_type(type_lookup(sig.dest, tenv))} for {name}"
            )

        # Arguments
        if len(instr.args) != len(sig.args):
            self._error(f"[TYP-0020] {name} expects {len(sig.args)} args, not {len(instr.args)}")
        else:
            for i, (arg, expected) in enumerate(zip(instr.args, sig.args)):
                arg_type = self.env.vars.get(arg)
                if arg_type is None:
                    self._error(f"[TYP-0021] {arg} (arg {i}) undefined")
                    continue
                if not unify(arg_type, expected, tenv):
                    self._error(
                        f"[TYP-0022] {arg} has type {format_type(arg_type)}, but arg {i} for {name} "
                        f"should have type {format_type(type_lookup(expected, tenv))}"
                    )

        # Labels
        if len(instr.labels) != sig.labels:
            self._error(f"[TYP-0030] {instr.op} needs {sig.labels} labels; found {len(instr.labels)}")
        else:
            for label in instr.labels:
                if label not in self.env.labels:
                    self._error(f"[TYP-0031] label .{label} undefined")

    # ------------------------------------------------------------------
    # Constants
    # ------------------------------------------------------------------

    def check_const(self, instr: Constant) -> None:
        if instr.dest is None:
            self._error("[CST-0005] const missing destination")
            return
        if instr.type is None:
            self._error("[CST-0010] const missing type")
            return
        if not is_primitive(instr.type):
            self._error(f"[CST-0020] const of non-primitive type {format_type(instr.type)}")
            return

        expected = CONST_TYPES.get(instr.type.name)
        if expected is None:
            self._error(f"[CST-0030] unknown const type {format_type(instr.type)}")
            return

        if literal_kind(instr.value) is not expected:
            self._error(
                f"[CST-0040] const value {json.dumps(instr.value)} "
                f"does not match type {format_type(instr.type)}"
            )

    # ------------------------------------------------------------------
    # Diagnostics
    # ------------------------------------------------------------------

    def _error(self, message: str) -> None:
        self.diagnostics.append(
            diag_in_function("error", message, func=self.env.func, filename=self.filename)
        )
