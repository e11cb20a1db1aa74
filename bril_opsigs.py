#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2026 gwz

from dataclasses import dataclass
from enum import Enum, auto
from typing import Dict, Optional, Tuple, Union

from bril_types import PolyType, TypeVar, get_builtin_type, ptr


# ==========================
# Opcode signatures
# ==========================


@dataclass(frozen=True)
class Signature:
    """
    Expected shape of an operation: argument types, result type, label count.
    """
    args: Tuple[PolyType, ...] = ()
    dest: Optional[PolyType] = None
    labels: int = 0


@dataclass(frozen=True)
class PolySignature:
    """
    A signature quantified over a single type variable.
    """
    tvar: TypeVar
    sig: Signature


AnySignature = Union[Signature, PolySignature]


class OpHandler(Enum):
    """Operations whose rules cannot be written as a static signature."""
    PRINT = auto()
    CALL = auto()
    RET = auto()


SPECIAL_OPS: Dict[str, OpHandler] = {
    "print": OpHandler.PRINT,
    "call": OpHandler.CALL,
    "ret": OpHandler.RET,
}


class LiteralKind(Enum):
    NUMBER = "number"
    BOOLEAN = "boolean"
    STRING = "string"


# Expected literal kind of a `const` for each primitive type.
CONST_TYPES: Dict[str, LiteralKind] = {
    "int": LiteralKind.NUMBER,
    "float": LiteralKind.NUMBER,
    "bool": LiteralKind.BOOLEAN,
    "char": LiteralKind.STRING,
}


def literal_kind(value: object) -> Optional[LiteralKind]:
    # bool is an int subclass; test it first
    if isinstance(value, bool):
        return LiteralKind.BOOLEAN
    if isinstance(value, (int, float)):
        return LiteralKind.NUMBER
    if isinstance(value, str):
        return LiteralKind.STRING
    return None


_INT = get_builtin_type("int")
_BOOL = get_builtin_type("bool")
_FLOAT = get_builtin_type("float")
_CHAR = get_builtin_type("char")
_T = TypeVar("T")


def _poly(sig: Signature) -> PolySignature:
    return PolySignature(tvar=_T, sig=sig)


OP_SIGS: Dict[str, AnySignature] = {
    # core
    "add": Signature(args=(_INT, _INT), dest=_INT),
    "mul": Signature(args=(_INT, _INT), dest=_INT),
    "sub": Signature(args=(_INT, _INT), dest=_INT),
    "div": Signature(args=(_INT, _INT), dest=_INT),
    "eq": Signature(args=(_INT, _INT), dest=_BOOL),
    "lt": Signature(args=(_INT, _INT), dest=_BOOL),
    "gt": Signature(args=(_INT, _INT), dest=_BOOL),
    "le": Signature(args=(_INT, _INT), dest=_BOOL),
    "ge": Signature(args=(_INT, _INT), dest=_BOOL),
    "not": Signature(args=(_BOOL,), dest=_BOOL),
    "and": Signature(args=(_BOOL, _BOOL), dest=_BOOL),
    "or": Signature(args=(_BOOL, _BOOL), dest=_BOOL),
    "jmp": Signature(labels=1),
    "br": Signature(args=(_BOOL,), labels=2),
    "nop": Signature(),
    "id": _poly(Signature(args=(_T,), dest=_T)),

    # floating point
    "fadd": Signature(args=(_FLOAT, _FLOAT), dest=_FLOAT),
    "fmul": Signature(args=(_FLOAT, _FLOAT), dest=_FLOAT),
    "fsub": Signature(args=(_FLOAT, _FLOAT), dest=_FLOAT),
    "fdiv": Signature(args=(_FLOAT, _FLOAT), dest=_FLOAT),
    "feq": Signature(args=(_FLOAT, _FLOAT), dest=_BOOL),
    "flt": Signature(args=(_FLOAT, _FLOAT), dest=_BOOL),
    "fle": Signature(args=(_FLOAT, _FLOAT), dest=_BOOL),
    "fgt": Signature(args=(_FLOAT, _FLOAT), dest=_BOOL),
    "fge": Signature(args=(_FLOAT, _FLOAT), dest=_BOOL),

    # memory
    "alloc": _poly(Signature(args=(_INT,), dest=ptr(_T))),
    "free": _poly(Signature(args=(ptr(_T),))),
    "store": _poly(Signature(args=(ptr(_T), _T))),
    "load": _poly(Signature(args=(ptr(_T),), dest=_T)),
    "ptradd": _poly(Signature(args=(ptr(_T), _INT), dest=ptr(_T))),

    # speculation
    "speculate": Signature(),
    "guard": Signature(args=(_BOOL,), labels=1),
    "commit": Signature(),

    # characters
    "ceq": Signature(args=(_CHAR, _CHAR), dest=_BOOL),
    "clt": Signature(args=(_CHAR, _CHAR), dest=_BOOL),
    "cle": Signature(args=(_CHAR, _CHAR), dest=_BOOL),
    "cgt": Signature(args=(_CHAR, _CHAR), dest=_BOOL),
    "cge": Signature(args=(_CHAR, _CHAR), dest=_BOOL),
    "char2int": Signature(args=(_CHAR,), dest=_INT),
    "int2char": Signature(args=(_INT,), dest=_CHAR),

    # bit casts
    "float2bits": Signature(args=(_FLOAT,), dest=_INT),
    "bits2float": Signature(args=(_INT,), dest=_FLOAT),

    # SSA
    "set": _poly(Signature(args=(_T, _T))),
    "get": _poly(Signature(dest=_T)),
    "undef": _poly(Signature(dest=_T)),
}


def resolve_op(op: str) -> Union[OpHandler, AnySignature, None]:
    """
    Map an opcode to its hand-written handler, its table signature, or None
    when the opcode is unknown.
    """
    handler = SPECIAL_OPS.get(op)
    if handler is not None:
        return handler
    return OP_SIGS.get(op)
