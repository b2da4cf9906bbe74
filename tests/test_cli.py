"""Tests for the exam-paper command line."""

import json

import fitz

from exam_paper.cli import EXIT_BAD_INPUT, EXIT_EXPORT_FAILED, EXIT_OK, main


def _write_questions(path, questions):
    path.write_text(json.dumps(questions))
    return path


class TestCli:
    """Tests for cli.main()."""

    def test_main_when_valid_input_then_both_pdfs_written(self, tmp_path, capsys):
        """A valid run writes both variants and prints their paths."""
        # Arrange
        questions = _write_questions(
            tmp_path / "questions.json",
            [{"id": 1, "text": "2+2=?", "answer": "4", "options": ["3", "4"]}],
        )
        out = tmp_path / "out"

        # Act
        code = main([str(questions), "--out", str(out), "--school-name", "Lincoln High", "--layout", "horizontal"])

        # Assert
        assert code == EXIT_OK
        printed = capsys.readouterr().out.splitlines()
        assert [p.rsplit("/", 1)[-1] for p in printed] == ["questions_only.pdf", "questions_with_answers.pdf"]
        with fitz.open(out / "questions_with_answers.pdf") as doc:
            text = doc[0].get_text()
        assert "Lincoln High" in text
        assert "Answer: 4" in text

    def test_main_when_file_missing_then_input_error(self, tmp_path, capsys):
        """Unreadable input exits with code 2."""
        code = main([str(tmp_path / "missing.json"), "--out", str(tmp_path)])

        assert code == EXIT_BAD_INPUT
        assert "Cannot read" in capsys.readouterr().err

    def test_main_when_too_many_options_then_export_failure(self, tmp_path):
        """Unletterable questions fail the export with code 1."""
        questions = _write_questions(
            tmp_path / "questions.json",
            [{"id": 1, "text": "Pick", "options": [str(i) for i in range(27)]}],
        )

        code = main([str(questions), "--out", str(tmp_path / "out")])

        assert code == EXIT_EXPORT_FAILED
        assert not (tmp_path / "out").exists()

    def test_main_when_extended_options_allowed_then_exported(self, tmp_path):
        """--allow-extended-options letters past Z."""
        questions = _write_questions(
            tmp_path / "questions.json",
            [{"id": 1, "text": "Pick", "options": [str(i) for i in range(27)]}],
        )

        code = main([str(questions), "--out", str(tmp_path / "out"), "--allow-extended-options"])

        assert code == EXIT_OK

    def test_main_when_options_not_list_then_input_error(self, tmp_path, capsys):
        """A malformed question exits with code 2 and no traceback."""
        questions = _write_questions(
            tmp_path / "questions.json",
            [{"id": 1, "text": "x", "options": 5, "answer": "a"}],
        )

        code = main([str(questions), "--out", str(tmp_path / "out")])

        assert code == EXIT_BAD_INPUT
        assert "malformed" in capsys.readouterr().err
        assert not (tmp_path / "out").exists()
