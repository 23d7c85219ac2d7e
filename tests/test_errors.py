"""Tests for the exception hierarchy."""

from __future__ import annotations

import pytest

from markrun.errors import (
    ASTConstructionError,
    MarkrunError,
    NestingDepthError,
    OrphanListItemError,
    ParseTreeError,
    UnknownNodeTypeError,
)
from markrun.parse_tree import NodeType


class TestErrorHierarchy:
    """All errors share one base."""

    @pytest.mark.parametrize(
        "error",
        [
            UnknownNodeTypeError(NodeType.TEXT, "block"),
            OrphanListItemError(),
            NestingDepthError(3),
        ],
    )
    def test_construction_errors(self, error: Exception) -> None:
        assert isinstance(error, ASTConstructionError)
        assert isinstance(error, MarkrunError)

    def test_parse_tree_error_is_not_construction_error(self) -> None:
        error = ParseTreeError("table")
        assert isinstance(error, MarkrunError)
        assert not isinstance(error, ASTConstructionError)


class TestErrorMessages:
    """Messages name the offending input."""

    def test_unknown_node(self) -> None:
        error = UnknownNodeTypeError(NodeType.EMPH, "block")
        assert "block" in str(error)
        assert "EMPH" in str(error)

    def test_nesting_depth(self) -> None:
        assert "12" in str(NestingDepthError(12))

    def test_parse_tree_error(self) -> None:
        assert str(ParseTreeError("table")) == "Unsupported parser node type: 'table'"
