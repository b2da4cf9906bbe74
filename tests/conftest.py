import os
import pytest
import sys

# Run Qt headless unless a platform is explicitly configured
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
from pathlib import Path

# Add src to sys.path so we can import exam_paper
SRC_PATH = Path(__file__).resolve().parent.parent / "src"
if SRC_PATH.as_posix() not in sys.path:
    sys.path.insert(0, SRC_PATH.as_posix())

from exam_paper.builder.output.fonts import reset_fonts
from exam_paper.core.models import HeaderMetadata, Question


# Common test fixtures
@pytest.fixture
def sample_questions():
    """Two multiple-choice questions and one open question."""
    return (
        Question(id=1, text="2+2=?", answer="4", options=("3", "4", "5")),
        Question(id=2, text="Capital of France?", answer="Paris", options=("Paris", "Rome")),
        Question(id=3, text="Explain photosynthesis.", answer="Light to chemical energy"),
    )


@pytest.fixture
def sample_header():
    """Filled-in header metadata."""
    return HeaderMetadata(
        school_name="Lincoln High",
        subject="Math",
        date="2024-05-01",
    )


@pytest.fixture(autouse=True)
def builtin_fonts():
    """Every test renders with the built-in Times family."""
    reset_fonts()
    yield
    reset_fonts()
