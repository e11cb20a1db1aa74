#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2026 gwz

import json
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from bril_ir import Program, Function, Param, Instr, Label, Constant, Operation
from bril_types import Type, PointerType, get_builtin_type


# ==========================
# JSON loader
# ==========================

@dataclass
class LoadError(Exception):
    message: str
    filename: Optional[str] = None


class Loader:
    """
    Turns a decoded Bril JSON document into a Program.

    Only the shape of the document is validated here; every typing question
    is left to the checker. Shape problems raise LoadError.
    """

    def __init__(self, filename: Optional[str] = None) -> None:
        self.filename = filename

    @classmethod
    def load_text(cls, text: str, filename: Optional[str] = None) -> Program:
        loader = cls(filename)
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise LoadError(
                f"[LOD-0010] input is not valid JSON: {e.msg} (line {e.lineno}, column {e.colno})",
                filename,
            ) from e
        return loader.load_program(data)

    # --- public API ---

    def load_program(self, data: Any) -> Program:
        obj = self._expect_object(data, "program")
        functions = self._expect_list(obj.get("functions"), "program 'functions'")
        return Program(functions=[self._load_function(f) for f in functions])

    def load_type(self, data: Any) -> Type:
        if isinstance(data, str):
            return get_builtin_type(data)
        if isinstance(data, dict) and set(data.keys()) == {"ptr"}:
            return PointerType(self.load_type(data["ptr"]))
        raise LoadError(f"[LOD-0030] malformed type {json.dumps(data)}", self.filename)

    # --- internal helpers ---

    def _load_function(self, data: Any) -> Function:
        obj = self._expect_object(data, "function")
        name = obj.get("name")
        if name is not None:
            name = self._expect_str(name, "function 'name'")
        where = f"function @{name}" if name is not None else "function"

        params: List[Param] = []
        for arg in self._expect_list(obj.get("args"), f"{where} 'args'"):
            arg_obj = self._expect_object(arg, f"{where} argument")
            if "name" not in arg_obj or "type" not in arg_obj:
                raise LoadError(
                    f"[LOD-0020] {where} argument needs both 'name' and 'type'",
                    self.filename,
                )
            params.append(
                Param(
                    name=self._expect_str(arg_obj["name"], f"{where} argument 'name'"),
                    type=self.load_type(arg_obj["type"]),
                )
            )

        return_type = self.load_type(obj["type"]) if "type" in obj else None

        instrs = [
            self._load_instr(i, where)
            for i in self._expect_list(obj.get("instrs"), f"{where} 'instrs'")
        ]
        return Function(name=name, params=params, return_type=return_type, instrs=instrs)

    def _load_instr(self, data: Any, where: str) -> Instr:
        obj = self._expect_object(data, f"instruction in {where}")

        if "label" in obj:
            return Label(label=self._expect_str(obj["label"], f"label in {where}"))

        if "op" not in obj:
            raise LoadError(
                f"[LOD-0020] instruction in {where} has neither 'op' nor 'label'",
                self.filename,
            )
        op = self._expect_str(obj["op"], f"opcode in {where}")
        instr_type = self.load_type(obj["type"]) if "type" in obj else None

        dest = obj.get("dest")
        if dest is not None:
            dest = self._expect_str(dest, f"'{op}' dest in {where}")

        if op == "const":
            return Constant(
                dest=dest,
                type=instr_type,
                value=obj.get("value"),
            )

        return Operation(
            op=op,
            args=self._expect_str_list(obj.get("args"), f"'{op}' args in {where}"),
            dest=dest,
            type=instr_type,
            labels=self._expect_str_list(obj.get("labels"), f"'{op}' labels in {where}"),
            funcs=self._expect_str_list(obj.get("funcs"), f"'{op}' funcs in {where}"),
        )

    def _expect_object(self, data: Any, what: str) -> Dict[str, Any]:
        if not isinstance(data, dict):
            raise LoadError(f"[LOD-0020] expected an object for {what}", self.filename)
        return data

    def _expect_list(self, data: Any, what: str) -> List[Any]:
        # absent and null lists are both empty
        if data is None:
            return []
        if not isinstance(data, list):
            raise LoadError(f"[LOD-0020] expected a list for {what}", self.filename)
        return data

    def _expect_str(self, data: Any, what: str) -> str:
        if not isinstance(data, str):
            raise LoadError(f"[LOD-0020] expected a string for {what}", self.filename)
        return data

    def _expect_str_list(self, data: Any, what: str) -> List[str]:
        return [self._expect_str(item, what) for item in self._expect_list(data, what)]
