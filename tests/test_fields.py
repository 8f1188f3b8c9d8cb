"""
Field parsing tests.

Covers multi-value and hierarchical cell conventions plus slug generation.
"""

from learngraph.pipeline.fields import (
    parse_hierarchy_field,
    path_prefixes,
    slugify,
    split_multi_field,
)


class TestSlugify:
    """Test slug generation for module, resource and tag ids."""

    def test_lowercases_and_joins(self):
        assert slugify("Math::Linear Algebra") == "math-linear-algebra"

    def test_strips_edge_separators(self):
        assert slugify("  --Hello, World!--  ") == "hello-world"

    def test_tag_path(self):
        assert slugify("Math>Algebra>Linear") == "math-algebra-linear"

    def test_empty(self):
        assert slugify("") == ""
        assert slugify("!!!") == ""


class TestMultiValueField:
    """Test '|' then ',' splitting."""

    def test_pipe_and_comma(self):
        assert split_multi_field("Algebra | Calculus, Geometry") == ["Algebra", "Calculus", "Geometry"]

    def test_drops_empty_tokens(self):
        assert split_multi_field(" | ,Algebra,, |") == ["Algebra"]

    def test_empty_and_none(self):
        assert split_multi_field("") == []
        assert split_multi_field(None) == []

    def test_keeps_duplicates(self):
        # Deduplication happens at resolution time
        assert split_multi_field("A|A") == ["A", "A"]


class TestHierarchyField:
    """Test tag path parsing."""

    def test_single_path(self):
        assert parse_hierarchy_field("Math > Algebra > Linear") == [["Math", "Algebra", "Linear"]]

    def test_multiple_paths(self):
        assert parse_hierarchy_field("Math>Algebra | Art") == [["Math", "Algebra"], ["Art"]]

    def test_drops_empty_segments(self):
        assert parse_hierarchy_field("Math>>Algebra>") == [["Math", "Algebra"]]

    def test_drops_empty_entries(self):
        assert parse_hierarchy_field(" > | Math | ") == [["Math"]]

    def test_empty_and_none(self):
        assert parse_hierarchy_field("") == []
        assert parse_hierarchy_field(None) == []

    def test_path_prefixes(self):
        assert path_prefixes(["Math", "Algebra", "Linear"]) == [
            "Math",
            "Math>Algebra",
            "Math>Algebra>Linear",
        ]
