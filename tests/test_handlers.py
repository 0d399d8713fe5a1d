import io

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from monty.core.errors import (
    DivisionByZero,
    InvalidPushArgument,
    OutOfRange,
    TooShort,
    Underflow,
    UnknownOpcode,
)
from monty.core.context import ExecutionContext
from monty.core.handlers import truncating_div, truncating_mod
from monty.core.instruction import Instruction
from monty.core.opcodes import OPCODE_NAMES, OPCODES, lookup


def run_op(ctx, opcode, argument=None, line_number=1):
    instruction = Instruction(line_number=line_number, opcode=opcode, argument=argument)
    lookup(instruction)(ctx, instruction)


def load(ctx, *values_bottom_first):
    for value in values_bottom_first:
        ctx.stack.push(value)


def output(ctx):
    return ctx.stdout.getvalue()


# --- push ---


def test_push(ctx):
    run_op(ctx, "push", "5")
    run_op(ctx, "push", "-2")
    assert ctx.stack.to_list() == [-2, 5]


@pytest.mark.parametrize("argument", [None, "abc", "1.0", "", "+"])
def test_push_rejects_bad_argument(ctx, argument):
    with pytest.raises(InvalidPushArgument) as excinfo:
        run_op(ctx, "push", argument, line_number=4)
    assert str(excinfo.value) == "L4: usage: push integer"
    assert len(ctx.stack) == 0


# --- printing ---


def test_pall_prints_most_recent_first(ctx):
    load(ctx, 1, 2, 3)
    run_op(ctx, "pall")
    assert output(ctx) == "3\n2\n1\n"


def test_pall_empty_prints_nothing(ctx):
    run_op(ctx, "pall")
    assert output(ctx) == ""


def test_pint(ctx):
    load(ctx, 1, 2)
    run_op(ctx, "pint")
    assert output(ctx) == "2\n"
    assert ctx.stack.to_list() == [2, 1]


def test_pint_empty(ctx):
    with pytest.raises(Underflow) as excinfo:
        run_op(ctx, "pint", line_number=9)
    assert str(excinfo.value) == "L9: can't pint, stack empty"


@pytest.mark.parametrize("value", [0, 72, 127])
def test_pchar_in_range(ctx, value):
    load(ctx, value)
    run_op(ctx, "pchar")
    assert output(ctx) == chr(value) + "\n"


@pytest.mark.parametrize("value", [-1, 128, 1000])
def test_pchar_out_of_range(ctx, value):
    load(ctx, value)
    with pytest.raises(OutOfRange) as excinfo:
        run_op(ctx, "pchar", line_number=2)
    assert str(excinfo.value) == "L2: can't pchar, value out of range"


def test_pchar_empty(ctx):
    with pytest.raises(Underflow) as excinfo:
        run_op(ctx, "pchar", line_number=3)
    assert str(excinfo.value) == "L3: can't pchar, stack empty"


def test_pstr_stops_at_zero(ctx):
    # Bottom first: 0 terminates, then "olleH" reads as "Hello" from the head
    load(ctx, 1, 0, ord("o"), ord("l"), ord("l"), ord("e"), ord("H"))
    run_op(ctx, "pstr")
    assert output(ctx) == "Hello\n"
    assert len(ctx.stack) == 7


@pytest.mark.parametrize("stopper", [0, -5, 128])
def test_pstr_stops_at_non_ascii(ctx, stopper):
    load(ctx, ord("z"), stopper, ord("b"), ord("a"))
    run_op(ctx, "pstr")
    assert output(ctx) == "ab\n"


def test_pstr_runs_to_stack_end(ctx):
    load(ctx, ord("c"), ord("b"), ord("a"))
    run_op(ctx, "pstr")
    assert output(ctx) == "abc\n"


def test_pstr_empty_prints_newline(ctx):
    run_op(ctx, "pstr")
    assert output(ctx) == "\n"


# --- stack manipulation ---


def test_pop(ctx):
    load(ctx, 1, 2)
    run_op(ctx, "pop")
    assert ctx.stack.to_list() == [1]


def test_pop_empty(ctx):
    with pytest.raises(Underflow) as excinfo:
        run_op(ctx, "pop", line_number=5)
    assert str(excinfo.value) == "L5: can't pop an empty stack"


def test_swap(ctx):
    load(ctx, 1, 2, 3)
    run_op(ctx, "swap")
    assert ctx.stack.to_list() == [2, 3, 1]


@pytest.mark.parametrize("values", [(), (1,)])
def test_swap_too_short(ctx, values):
    load(ctx, *values)
    with pytest.raises(TooShort) as excinfo:
        run_op(ctx, "swap", line_number=6)
    assert str(excinfo.value) == "L6: can't swap, stack too short"


def test_rotl_and_rotr(ctx):
    load(ctx, 1, 2, 3)
    run_op(ctx, "rotl")
    assert ctx.stack.to_list() == [2, 1, 3]
    run_op(ctx, "rotr")
    assert ctx.stack.to_list() == [3, 2, 1]
    run_op(ctx, "rotr")
    assert ctx.stack.to_list() == [1, 3, 2]


@pytest.mark.parametrize("opcode", ["rotl", "rotr", "nop"])
def test_never_failing_ops_on_empty_stack(ctx, opcode):
    run_op(ctx, opcode)
    assert len(ctx.stack) == 0
    assert output(ctx) == ""


def test_nop_leaves_stack_untouched(ctx):
    load(ctx, 4, 5)
    run_op(ctx, "nop", "ignored")
    assert ctx.stack.to_list() == [5, 4]


# --- arithmetic ---


@pytest.mark.parametrize(
    "opcode, expected",
    [("add", 8), ("sub", 2), ("mul", 15), ("div", 1), ("mod", 2)],
)
def test_arithmetic_on_second_and_top(ctx, opcode, expected):
    load(ctx, 5, 3)  # second=5, top=3
    run_op(ctx, opcode)
    assert ctx.stack.to_list() == [expected]


def test_arithmetic_keeps_deeper_values(ctx):
    load(ctx, 100, 10, 4)
    run_op(ctx, "sub")
    assert ctx.stack.to_list() == [6, 100]
    ctx.stack.check_invariants()


@pytest.mark.parametrize("opcode", ["add", "sub", "mul", "div", "mod"])
@pytest.mark.parametrize("values", [(), (1,)])
def test_arithmetic_too_short(ctx, opcode, values):
    load(ctx, *values)
    with pytest.raises(TooShort) as excinfo:
        run_op(ctx, opcode, line_number=8)
    assert str(excinfo.value) == f"L8: can't {opcode}, stack too short"
    assert ctx.stack.to_list() == list(values)


@pytest.mark.parametrize("opcode", ["div", "mod"])
@settings(max_examples=50, deadline=None)
@given(left=st.integers())
def test_division_by_zero_regardless_of_left(opcode, left):
    ctx = ExecutionContext(stdout=io.StringIO())
    load(ctx, left, 0)
    with pytest.raises(DivisionByZero) as excinfo:
        run_op(ctx, opcode, line_number=11)
    assert str(excinfo.value) == "L11: division by zero"
    assert ctx.stack.to_list() == [0, left]


def test_division_by_zero_needs_two_values_first(ctx):
    load(ctx, 0)
    with pytest.raises(TooShort):
        run_op(ctx, "div")


@pytest.mark.parametrize(
    "left, right, quotient, remainder",
    [
        (7, 2, 3, 1),
        (-7, 2, -3, -1),
        (7, -2, -3, 1),
        (-7, -2, 3, -1),
        (0, 5, 0, 0),
    ],
)
def test_division_truncates_toward_zero(left, right, quotient, remainder):
    assert truncating_div(left, right) == quotient
    assert truncating_mod(left, right) == remainder


@given(
    left=st.integers(min_value=-(10**12), max_value=10**12),
    right=st.integers(min_value=-(10**6), max_value=10**6).filter(lambda v: v != 0),
)
def test_truncating_division_identity(left, right):
    quotient = truncating_div(left, right)
    remainder = truncating_mod(left, right)
    assert quotient * right + remainder == left
    assert abs(remainder) < abs(right)
    assert remainder == 0 or (remainder < 0) == (left < 0)


# --- registry ---


def test_registry_contents():
    assert set(OPCODE_NAMES) == {
        "push", "pall", "pint", "pop", "swap", "add", "sub", "div",
        "mul", "mod", "pchar", "pstr", "rotl", "rotr", "nop",
    }
    assert len(OPCODE_NAMES) == len(OPCODES)


def test_registry_is_read_only():
    with pytest.raises(TypeError):
        OPCODES["halt"] = lambda ctx, instruction: None


@pytest.mark.parametrize("opcode", ["PUSH", "Pall", "halt", "push1"])
def test_lookup_is_exact_and_case_sensitive(ctx, opcode):
    with pytest.raises(UnknownOpcode) as excinfo:
        run_op(ctx, opcode, line_number=12)
    assert str(excinfo.value) == f"L12: unknown instruction {opcode}"
