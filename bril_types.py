#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2026 gwz

from dataclasses import dataclass
from typing import Dict, Optional, Union

# ========================================
# The semantic type system for Bril.
# ========================================


class Type:
    """
    Base class for all semantic types.
    Used only as a common marker; concrete types are dataclasses below.
    """
    pass


@dataclass(frozen=True)
class BuiltinType(Type):
    name: str  # "int", "bool", ...


@dataclass(frozen=True)
class PointerType(Type):
    inner: "PolyType"


@dataclass(frozen=True)
class TypeVar:
    """
    Quantified type variable of a polymorphic signature.

    Never appears in a program; only in opcode signatures.
    """
    name: str


# A type that may mention a type variable (signature side only).
PolyType = Union[Type, TypeVar]


# --- helpers for builtins ---

_BUILTIN_CACHE: Dict[str, BuiltinType] = {}


def get_builtin_type(name: str) -> BuiltinType:
    """
    Get (or create) a canonical BuiltinType for a given name.
    """
    if name not in _BUILTIN_CACHE:
        _BUILTIN_CACHE[name] = BuiltinType(name)
    return _BUILTIN_CACHE[name]


def ptr(inner: PolyType) -> PointerType:
    return PointerType(inner)


def is_primitive(t: Optional[PolyType]) -> bool:
    return isinstance(t, BuiltinType)


# --- structural equality ---

def types_equal(a: PolyType, b: PolyType) -> bool:
    """
    Structural equality: same primitive tag, or pointers to equal types.
    """
    if isinstance(a, BuiltinType) and isinstance(b, BuiltinType):
        return a.name == b.name
    if isinstance(a, PointerType) and isinstance(b, PointerType):
        return types_equal(a.inner, b.inner)
    if isinstance(a, TypeVar) and isinstance(b, TypeVar):
        return a == b
    return False


# --- type stringification ---

def format_type(t: Optional[PolyType]) -> str:
    if t is None:
        return "<none>"
    elif isinstance(t, BuiltinType):
        return t.name
    elif isinstance(t, PointerType):
        return f"ptr<{format_type(t.inner)}>"
    elif isinstance(t, TypeVar):
        return t.name
    else:
        # Fallback (should not happen)
        return repr(t)
