"""Tests for input validation module."""

import pytest

from tidy_tree import Link, Node
from tidy_tree.validation import (
    InvalidEdgeOrderError,
    InvalidLinkError,
    InvalidPositionError,
    InvalidSpacingError,
    ValidationError,
    validate_edge_order,
    validate_link_indices,
    validate_root_position,
    validate_spacing,
)


class TestSpacingValidation:
    """Tests for spacing validation."""

    def test_valid_spacing(self):
        """Numbers are returned as floats."""
        assert validate_spacing(10) == 10.0
        assert isinstance(validate_spacing(10), float)

    def test_zero_allowed(self):
        """Zero spacing is accepted."""
        assert validate_spacing(0) == 0.0

    def test_negative_raises(self):
        """Negative spacing raises InvalidSpacingError."""
        with pytest.raises(InvalidSpacingError, match="vertical_spacing must be non-negative"):
            validate_spacing(-1, "vertical_spacing")

    def test_infinite_raises(self):
        """Infinite spacing raises InvalidSpacingError."""
        with pytest.raises(InvalidSpacingError, match="finite"):
            validate_spacing(float("inf"))

    def test_non_numeric_raises(self):
        """Strings that are not numbers raise InvalidSpacingError."""
        with pytest.raises(InvalidSpacingError, match="must be a number"):
            validate_spacing("wide")

    def test_is_value_error(self):
        """Validation errors are ValueErrors."""
        assert issubclass(InvalidSpacingError, ValidationError)
        assert issubclass(ValidationError, ValueError)


class TestRootPositionValidation:
    """Tests for root position validation."""

    def test_valid_position(self):
        """Valid position returns tuple of floats."""
        assert validate_root_position([3, 4]) == (3.0, 4.0)

    def test_wrong_length_raises(self):
        """Positions need two coordinates."""
        with pytest.raises(InvalidPositionError, match="must have 2 elements"):
            validate_root_position([1, 2, 3])

    def test_nan_raises(self):
        """NaN coordinates are rejected."""
        with pytest.raises(InvalidPositionError, match="finite"):
            validate_root_position([float("nan"), 0])

    def test_non_numeric_raises(self):
        """Non-numeric coordinates are rejected."""
        with pytest.raises(InvalidPositionError, match="numeric"):
            validate_root_position(["left", 0])


class TestEdgeOrderValidation:
    """Tests for edge order validation."""

    def test_known_orders(self):
        """Known modes pass through."""
        assert validate_edge_order("insertion") == "insertion"
        assert validate_edge_order("counterclockwise") == "counterclockwise"

    def test_unknown_order_raises(self):
        """Unknown modes raise InvalidEdgeOrderError."""
        with pytest.raises(InvalidEdgeOrderError, match="edge_order must be one of"):
            validate_edge_order("clockwise")


class TestLinkValidation:
    """Tests for link index validation."""

    def test_valid_links(self):
        """Valid links return no issues."""
        links = [Link(0, 1), Link(1, 2)]
        assert validate_link_indices(links, 3) == []

    def test_dict_links(self):
        """Dict links are checked too."""
        links = [{"source": 0, "target": 1}]
        assert validate_link_indices(links, 2) == []

    def test_node_endpoints(self):
        """Node endpoints are checked through their index."""
        links = [Link(Node(index=0), Node(index=7))]
        issues = validate_link_indices(links, 2, strict=False)
        assert len(issues) == 1
        assert "target index 7" in issues[0][1]

    def test_out_of_bounds_raises(self):
        """Out-of-range indices raise in strict mode."""
        with pytest.raises(InvalidLinkError, match="source index 5 out of bounds"):
            validate_link_indices([Link(5, 0)], 2)

    def test_negative_index_non_strict(self):
        """Non-strict mode reports issues instead of raising."""
        issues = validate_link_indices([Link(0, -1)], 2, strict=False)
        assert issues == [(0, "Link 0: target index -1 out of bounds [0, 2)")]

    def test_missing_endpoint(self):
        """Links without endpoints are reported."""
        issues = validate_link_indices([{"target": 0}], 1, strict=False)
        assert issues == [(0, "Link 0: source is None")]
