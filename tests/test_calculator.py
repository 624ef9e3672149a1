"""Tests for the calculator tool."""

import pytest
from mcp_learning.capabilities.calculator import calculate, register
from mcp_learning.dispatcher import Request
from mcp_learning.handler import LearningHandler
from mcp_learning.registry import CapabilityKind
from mcp_learning.response import ErrorKind, HandlerError


class TestCalculate:
    """Test calculate function."""

    @pytest.mark.parametrize("operation, expected", [
        ("add", "Result: 6 add 3 = 9"),
        ("subtract", "Result: 6 subtract 3 = 3"),
        ("multiply", "Result: 6 multiply 3 = 18"),
        ("divide", "Result: 6 divide 3 = 2"),
    ])
    def test_operations(self, operation, expected):
        """Test each operation."""
        assert calculate(operation, 6, 3) == expected

    def test_precision(self):
        """Test rounding to a number of decimal places."""
        assert calculate("divide", 10, 3, precision=2) == "Result: 10 divide 3 = 3.33"

    def test_float_operands(self):
        """Test that float operands are kept."""
        assert calculate("add", 1.5, 2) == "Result: 1.5 add 2 = 3.5"

    def test_divide_by_zero(self):
        """Test that division by zero raises a handler error."""
        with pytest.raises(HandlerError, match="Division by zero is not allowed"):
            calculate("divide", 10, 0)

    def test_overflow(self):
        """Test that non-finite results are reported, not returned."""
        with pytest.raises(HandlerError, match="out of range"):
            calculate("multiply", 1e308, 10)

    @pytest.mark.parametrize("operation", ["add", "divide"])
    def test_integer_beyond_float_range(self, operation):
        """Test that huge integer operands are out of range, not a crash."""
        with pytest.raises(HandlerError, match=f"Result of {operation} is out of range"):
            calculate(operation, 10**400, 3)


class TestCalculateDispatch:
    """Test calculate through the dispatcher."""

    @pytest.mark.parametrize("operation", ["add", "divide"])
    def test_huge_integer_is_handler_failure(self, operation):
        """Test that overflow is reported as a handler failure."""
        handler = LearningHandler("test")
        register(handler)
        response = handler.dispatcher().dispatch(Request(
            CapabilityKind.TOOL, "calculate", {"operation": operation, "a": 10**400, "b": 3}
        ))
        assert response.error.kind is ErrorKind.HANDLER_FAILED
        assert response.error.message == f"Result of {operation} is out of range"
