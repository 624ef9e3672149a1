"""Tests for the random generator tool."""

import random
import re

import pytest
from mcp_learning.capabilities.random_generator import SYMBOLS, make_random_generator
from mcp_learning.response import HandlerError


@pytest.fixture
def generate():
    return make_random_generator(random.Random(1234))


class TestRandomGenerator:
    """Test the random generator handler."""

    def test_single_number(self, generate):
        """Test one number in range."""
        result = generate("number", min=5, max=5)
        assert result == "Random Number:\n\n5\nRange: 5 to 5"

    def test_many_numbers(self, generate):
        """Test a numbered list of values."""
        result = generate("number", count=3, min=1, max=10)
        lines = result.split("\n")
        assert lines[0] == "Random Numbers:"
        values = [int(line.split(". ")[1]) for line in lines[2:5]]
        assert all(1 <= v <= 10 for v in values)
        assert [line.split(".")[0] for line in lines[2:5]] == ["1", "2", "3"]
        assert lines[-1] == "Range: 1 to 10"

    def test_min_greater_than_max(self, generate):
        """Test an empty range."""
        with pytest.raises(HandlerError, match=r"min \(10\) must not be greater than max \(1\)"):
            generate("number", min=10, max=1)

    def test_string(self, generate):
        """Test random letters."""
        result = generate("string", length=12)
        value = result.split("\n")[2]
        assert re.fullmatch(r"[A-Za-z]{12}", value)
        assert result.endswith("Length: 12 characters")

    def test_password_with_symbols(self, generate):
        """Test the password footer."""
        result = generate("password", length=40, include_symbols=True)
        value = result.split("\n")[2]
        assert len(value) == 40
        assert all(c.isalnum() or c in SYMBOLS for c in value)
        assert result.endswith("Length: 40 characters (with symbols)")

    def test_color(self, generate):
        """Test hex color format."""
        value = generate("color").split("\n")[2]
        match = re.fullmatch(r"#([0-9a-f]{6}) \(RGB: (\d+), (\d+), (\d+)\)", value)
        assert match
        assert int(match.group(1)[:2], 16) == int(match.group(2))

    def test_uuid(self, generate):
        """Test version 4 UUID format."""
        value = generate("uuid").split("\n")[2]
        assert re.fullmatch(
            r"[0-9a-f]{8}-[0-9a-f]{4}-4[0-9a-f]{3}-[89ab][0-9a-f]{3}-[0-9a-f]{12}", value
        )

    def test_seeded_is_reproducible(self):
        """Test that equal seeds give equal output."""
        first = make_random_generator(random.Random(7))("password", count=2)
        second = make_random_generator(random.Random(7))("password", count=2)
        assert first == second
