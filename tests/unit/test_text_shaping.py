"""
Unit tests for paragraph splitting and pipeline input literals.
"""

import pytest

from mamlgen.maml.pipeline import PipelineInputType, to_literal
from mamlgen.text import to_paragraphs

# ============================================================================
# PARAGRAPH TESTS
# ============================================================================


class TestToParagraphs:
    """Test splitting text into paragraphs."""

    @pytest.mark.parametrize("text", [None, ""])
    def test_empty_text_gives_one_empty_paragraph(self, text):
        assert to_paragraphs(text) == [""]

    def test_splits_and_strips(self):
        assert to_paragraphs("  First line\r\n\n Second line ") == ["First line", "", "Second line"]

    def test_single_paragraph_is_unchanged(self):
        assert to_paragraphs("One paragraph") == ["One paragraph"]

    def test_lone_carriage_return_is_not_a_separator(self):
        assert to_paragraphs("a\rb") == ["a\rb"]

    @pytest.mark.parametrize("separator", ["\n", "\r\n"])
    def test_resplitting_joined_paragraphs_is_stable(self, separator):
        paragraphs = ["Gets a greeting.", "", "Titles come first."]
        assert to_paragraphs(separator.join(paragraphs)) == paragraphs
        assert to_paragraphs(separator.join(to_paragraphs(separator.join(paragraphs)))) == paragraphs


# ============================================================================
# PIPELINE INPUT TESTS
# ============================================================================


class TestPipelineInputLiterals:
    """Test the closed pipeline input vocabulary."""

    @pytest.mark.parametrize(
        ("value", "literal"),
        [
            (PipelineInputType.NONE, "false"),
            (PipelineInputType.BY_VALUE, "true (ByValue)"),
            (PipelineInputType.BY_PROPERTY_NAME, "true (ByPropertyName)"),
            (PipelineInputType.BY_VALUE | PipelineInputType.BY_PROPERTY_NAME, "true (ByPropertyName, ByValue)"),
            (PipelineInputType.FROM_REMAINING_ARGUMENTS, "true (FromRemainingArguments)"),
            (
                PipelineInputType.BY_VALUE | PipelineInputType.FROM_REMAINING_ARGUMENTS,
                "true (ByValue, FromRemainingArguments)",
            ),
            (
                PipelineInputType.BY_PROPERTY_NAME | PipelineInputType.FROM_REMAINING_ARGUMENTS,
                "true (ByPropertyName, FromRemainingArguments)",
            ),
            (
                PipelineInputType.BY_VALUE
                | PipelineInputType.BY_PROPERTY_NAME
                | PipelineInputType.FROM_REMAINING_ARGUMENTS,
                "true (ByPropertyName, ByValue, FromRemainingArguments)",
            ),
        ],
    )
    def test_literal(self, value, literal):
        assert to_literal(value) == literal
