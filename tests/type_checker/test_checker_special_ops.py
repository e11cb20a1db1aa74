"""
Tests for print, call and ret.
"""

#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2026 gwz

from conftest import func, prog, has_error_code, messages


def const(dest, type, value):
    return {"dest": dest, "op": "const", "type": type, "value": value}


# --- print ---

def test_print_accepts_any_arguments(check_prog):
    result = check_prog(
        prog(
            func(
                "main",
                [
                    const("a", "int", 1),
                    const("b", "bool", True),
                    {"op": "print", "args": ["a", "b", "not_even_defined"]},
                    {"op": "print"},
                ],
            )
        )
    )
    assert result.diagnostics == []


def test_print_with_result_type(check_prog):
    result = check_prog(prog(func("main", [{"dest": "x", "op": "print", "type": "int", "args": []}])))
    assert messages(result.diagnostics) == ["print should have no result type"]
    assert has_error_code(result.diagnostics, "PRN-0010")


# --- call ---

def test_call_forward_and_mutual_recursion(check_prog):
    result = check_prog(
        prog(
            func(
                "even",
                [
                    {"dest": "r", "op": "call", "type": "bool", "args": ["n"], "funcs": ["odd"]},
                    {"op": "ret", "args": ["r"]},
                ],
                args=[("n", "int")],
                type="bool",
            ),
            func(
                "odd",
                [
                    {"dest": "r", "op": "call", "type": "bool", "args": ["n"], "funcs": ["even"]},
                    {"op": "ret", "args": ["r"]},
                ],
                args=[("n", "int")],
                type="bool",
            ),
        )
    )
    assert result.diagnostics == []


def test_call_without_function(check_prog):
    result = check_prog(prog(func("main", [{"op": "call", "args": ["x"]}])))
    assert messages(result.diagnostics) == ["call should have one function, not 0"]
    assert has_error_code(result.diagnostics, "CAL-0010")


def test_call_with_two_functions(check_prog):
    result = check_prog(prog(func("main", [{"op": "call", "funcs": ["main", "main"]}])))
    assert messages(result.diagnostics) == ["call should have one function, not 2"]


def test_call_undefined_function(check_prog):
    result = check_prog(
        prog(func("main", [{"dest": "x", "op": "call", "type": "int", "args": ["y"], "funcs": ["nope"]}]))
    )
    assert messages(result.diagnostics) == ["function @nope undefined"]
    assert has_error_code(result.diagnostics, "CAL-0020")


def test_call_argument_mismatches_name_the_callee(check_prog):
    result = check_prog(
        prog(
            func("helper", [], args=[("a", "int"), ("b", "bool")]),
            func(
                "main",
                [
                    const("x", "bool", False),
                    const("y", "int", 0),
                    {"op": "call", "args": ["x", "y"], "funcs": ["helper"]},
                ],
            ),
        )
    )
    assert messages(result.diagnostics) == [
        "x has type bool, but arg 0 for @helper should have type int",
        "y has type int, but arg 1 for @helper should have type bool",
    ]


def test_call_result_types(check_prog):
    result = check_prog(
        prog(
            func("get", [const("r", "int", 1), {"op": "ret", "args": ["r"]}], type="int"),
            func("proc", []),
            func(
                "main",
                [
                    {"op": "call", "funcs": ["get"]},
                    {"dest": "a", "op": "call", "type": "bool", "funcs": ["get"]},
                    {"dest": "b", "op": "call", "type": "int", "funcs": ["proc"]},
                ],
            ),
        )
    )
    assert messages(result.diagnostics) == [
        "missing result type int for @get",
        "result type of @get should be int, but found bool",
        "@proc should have no result type",
    ]


# --- ret ---

def test_ret_in_void_function(check_prog):
    result = check_prog(prog(func("main", [{"op": "ret"}])))
    assert result.diagnostics == []


def test_ret_missing_value(check_prog):
    result = check_prog(prog(func("f", [{"op": "ret"}], type="int")))
    assert messages(result.diagnostics) == ["missing return value in function with return type"]
    assert has_error_code(result.diagnostics, "RET-0010")


def test_ret_multiple_values(check_prog):
    result = check_prog(
        prog(
            func("f", [const("a", "int", 1), {"op": "ret", "args": ["a", "a"]}], type="int"),
            func("g", [const("a", "int", 1), {"op": "ret", "args": ["a", "a"]}]),
        )
    )
    assert messages(result.diagnostics) == [
        "cannot return multiple values",
        "cannot return multiple values",
    ]


def test_ret_value_in_void_function(check_prog):
    result = check_prog(prog(func("main", [const("a", "int", 1), {"op": "ret", "args": ["a"]}])))
    assert messages(result.diagnostics) == ["returning value in function without a return type"]
    assert has_error_code(result.diagnostics, "RET-0012")


def test_ret_type_mismatch(check_prog):
    result = check_prog(
        prog(func("f", [const("a", "bool", True), {"op": "ret", "args": ["a"]}], type={"ptr": "int"}))
    )
    assert messages(result.diagnostics) == ["a has type bool, but arg 0 for ret should have type ptr<int>"]


def test_ret_undefined_value(check_prog):
    result = check_prog(prog(func("f", [{"op": "ret", "args": ["a"]}], type="int")))
    assert messages(result.diagnostics) == ["a (arg 0) undefined"]
