"""
Unit tests for the document composer.

Covers numbering, lettering, answer lines, header and footer, and the
relationship between the two variants of the same input.
"""

import pytest

from exam_paper.builder.layout import (
    ComposerConfig,
    CompositionError,
    OptionOverflow,
    Slot,
    TextRole,
    compose,
    flow_style,
)
from exam_paper.core.models import HeaderMetadata, LayoutMode, Question


def _texts(lines):
    return [line.text for line in lines]


class TestComposeQuestions:
    """Tests for question blocks produced by compose()."""

    def test_compose_when_multiple_choice_then_numbered_and_lettered(self, sample_questions, sample_header):
        """Prompts are numbered from 1 and options lettered from A."""
        # Act
        description = compose(sample_questions, LayoutMode.VERTICAL, False, sample_header)

        # Assert
        first = description.questions[0]
        assert first.prompt.text == "1. 2+2=?"
        assert _texts(first.options) == ["A) 3", "B) 4", "C) 5"]
        assert first.answer is None
        assert description.questions[2].prompt.text == "3. Explain photosynthesis."

    def test_compose_when_open_question_then_no_option_lines(self, sample_questions, sample_header):
        """A question without options gets only its prompt."""
        description = compose(sample_questions, LayoutMode.VERTICAL, False, sample_header)

        open_block = description.questions[2]
        assert open_block.options == ()
        assert _texts(open_block.lines) == ["3. Explain photosynthesis."]

    def test_compose_when_show_answers_then_green_answer_last(self, sample_questions, sample_header):
        """With answers, every block ends with a green answer line."""
        # Act
        description = compose(sample_questions, LayoutMode.VERTICAL, True, sample_header)

        # Assert
        for block, question in zip(description.questions, sample_questions):
            assert block.lines[-1] is block.answer
            assert block.answer.text == f"Answer: {question.answer}"
            assert block.answer.role is TextRole.ANSWER
            assert block.answer.style.color == "green"

    def test_compose_when_answer_empty_then_answer_line_still_present(self, sample_header):
        """A blank answer still yields the "Answer: " line."""
        description = compose([Question(id=1, text="Q")], LayoutMode.VERTICAL, True, sample_header)

        assert description.questions[0].answer.text == "Answer: "

    def test_compose_when_empty_collection_then_no_blocks(self, sample_header):
        """No questions still yields header and footer."""
        # Act
        description = compose((), LayoutMode.HORIZONTAL, True, sample_header)

        # Assert
        assert description.questions == ()
        assert description.row_count == 0
        assert description.footer.line.text == "End of Page"
        assert description.header.school_name.text == "Lincoln High"

    def test_compose_when_questions_none_then_treated_as_empty(self):
        """None degrades to an empty collection."""
        description = compose(None, LayoutMode.VERTICAL, False, None)

        assert description.question_count == 0

    def test_compose_when_duplicate_text_then_both_blocks_kept(self, sample_header):
        """Blocks map 1:1 to questions, duplicates included."""
        questions = [Question(id=1, text="Same"), Question(id=2, text="Same")]

        description = compose(questions, LayoutMode.VERTICAL, False, sample_header)

        assert _texts(b.prompt for b in description.questions) == ["1. Same", "2. Same"]


class TestComposeHeaderAndFooter:
    """Tests for the header and footer blocks."""

    def test_compose_when_header_filled_then_three_lines_in_order(self, sample_header):
        """Header lines are school name, subject, date."""
        # Act
        description = compose((), LayoutMode.VERTICAL, False, sample_header)

        # Assert
        assert _texts(description.header.lines) == ["Lincoln High", "Subject: Math", "Date: 2024-05-01"]
        assert description.header.school_name.style.bold
        assert description.header.school_name.style.font_size == 16

    def test_compose_when_header_blank_then_labels_kept(self):
        """Blank fields are printed with their labels, never dropped."""
        description = compose((), LayoutMode.VERTICAL, False, HeaderMetadata())

        assert _texts(description.header.lines) == ["", "Subject: ", "Date: "]

    def test_compose_when_watermark_set_then_not_in_body_text(self, sample_questions):
        """The watermark is carried on the description, not printed as text."""
        # Arrange
        header = HeaderMetadata(school_name="S", watermark="DRAFT")

        # Act
        description = compose(sample_questions, LayoutMode.VERTICAL, False, header)

        # Assert
        assert description.watermark == "DRAFT"
        assert all("DRAFT" not in line.text for line in description.iter_lines())

    def test_compose_when_custom_footer_then_used_on_description(self):
        """Footer text comes from the composer config."""
        config = ComposerConfig(footer_text="Turn over")

        description = compose((), LayoutMode.VERTICAL, False, None, config=config)

        assert description.footer.line.text == "Turn over"


class TestComposeVariants:
    """Tests for the invariant between the two variants."""

    def test_compose_when_answers_stripped_then_equals_questions_only(self, sample_questions, sample_header):
        """The variants differ only by the presence of answer lines."""
        # Arrange
        for layout in LayoutMode:
            # Act
            without = compose(sample_questions, layout, False, sample_header)
            with_answers = compose(sample_questions, layout, True, sample_header)

            # Assert
            assert with_answers.without_answers() == without

    def test_compose_when_called_twice_then_equal_descriptions(self, sample_questions, sample_header):
        """Composition is deterministic."""
        first = compose(sample_questions, LayoutMode.HORIZONTAL, True, sample_header)
        second = compose(sample_questions, LayoutMode.HORIZONTAL, True, sample_header)

        assert first == second

    def test_compose_when_layout_switched_then_only_flow_and_slots_change(self, sample_questions, sample_header):
        """Switching layout keeps order, numbering and lettering."""
        # Act
        vertical = compose(sample_questions, LayoutMode.VERTICAL, True, sample_header)
        horizontal = compose(sample_questions, LayoutMode.HORIZONTAL, True, sample_header)

        # Assert
        assert vertical.flow == flow_style(LayoutMode.VERTICAL)
        assert horizontal.flow == flow_style(LayoutMode.HORIZONTAL)
        assert [b.slot for b in horizontal.questions] == [Slot(0, 0), Slot(0, 1), Slot(1, 0)]
        for v_block, h_block in zip(vertical.questions, horizontal.questions):
            assert v_block.lines == h_block.lines

    def test_compose_when_too_many_options_then_both_variants_fail(self, sample_header):
        """More than 26 options is rejected the same way for both variants."""
        # Arrange
        question = Question(id="big", text="Pick", options=[str(i) for i in range(27)])

        # Act & Assert
        for show_answers in (False, True):
            with pytest.raises(CompositionError, match="'big'"):
                compose([question], LayoutMode.VERTICAL, show_answers, sample_header)

    def test_compose_when_too_many_options_and_extend_then_aa_used(self, sample_header):
        """EXTEND letters the 27th option as AA."""
        question = Question(id=1, text="Pick", options=[str(i) for i in range(27)])
        config = ComposerConfig(option_overflow=OptionOverflow.EXTEND)

        description = compose([question], LayoutMode.VERTICAL, False, sample_header, config=config)

        assert description.questions[0].options[-1].text == "AA) 26"
