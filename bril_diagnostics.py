#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2026 gwz

import os
from dataclasses import dataclass
from typing import Optional

from bril_ir import Function


DIAGNOSTIC_CODE_FAMILIES = {
    "LOD": [
        "LOD-0010",
        "LOD-0020",
        "LOD-0030",
        "LOD-0040",
    ],
    "ENV": [
        "ENV-0010",
        "ENV-0020",
        "ENV-0030",
    ],
    "OPS": [
        "OPS-0010",
    ],
    "TYP": [
        "TYP-0010", "TYP-0011", "TYP-0012",
        "TYP-0020", "TYP-0021", "TYP-0022",
        "TYP-0030", "TYP-0031",
    ],
    "CAL": [
        "CAL-0010",
        "CAL-0020",
    ],
    "RET": [
        "RET-0010",
        "RET-0011",
        "RET-0012",
    ],
    "PRN": [
        "PRN-0010",
    ],
    "CST": [
        "CST-0005",
        "CST-0010",
        "CST-0020",
        "CST-0030",
        "CST-0040",
    ],
}


@dataclass
class Diagnostic:
    kind: str  # "error" or "warning"
    message: str
    function_name: Optional[str] = None  # enclosing function, without the '@'
    filename: Optional[str] = None  # input path, if read from a file

    # Return the one-line form written to the error channel
    def format(self) -> str:
        loc = ""
        if self.filename is not None:
            loc += f"{os.path.abspath(str(self.filename))}"
        if self.function_name is not None:
            if loc:
                loc += ":"
            loc += f"@{self.function_name}"
        if loc:
            loc += ": "
        return f"{loc}{self.kind}: {self.message}"

    @property
    def code(self) -> Optional[str]:
        if self.message.startswith("[") and "]" in self.message:
            return self.message[1:self.message.index("]")]
        return None


def diag_in_function(
        kind: str,
        message: str,
        *,
        func: Optional[Function],
        filename: Optional[str] = None,
) -> Diagnostic:
    return Diagnostic(
        kind=kind,
        message=message,
        function_name=func.name if func is not None else None,
        filename=filename,
    )
