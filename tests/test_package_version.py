"""Tests for the package version lookup."""

from pathlib import Path

import exam_paper

PYPROJECT = Path(__file__).resolve().parent.parent / "pyproject.toml"


class TestPackageVersion:
    """Tests for exam_paper.__version__."""

    def test_version_when_checkout_then_matches_pyproject(self):
        """The checkout's declared version is reported."""
        # Arrange
        declared = [
            line.split("=", 1)[1].strip().strip('"')
            for line in PYPROJECT.read_text(encoding="utf-8").splitlines()
            if line.startswith("version")
        ]

        # Act & Assert
        assert exam_paper.__version__ == declared[0]

    def test_version_from_pyproject_when_file_unreadable_then_empty(self, monkeypatch):
        """A missing pyproject.toml falls through to installed metadata."""
        def unreadable(self, *args, **kwargs):
            raise OSError("gone")

        monkeypatch.setattr(Path, "read_text", unreadable)

        assert exam_paper._version_from_pyproject() == ""
