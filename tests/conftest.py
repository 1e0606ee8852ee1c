import pytest
import sys
from pathlib import Path
from PIL import Image

# Add src to sys.path so we can import exam_builder
SRC_PATH = Path(__file__).resolve().parent.parent / "src"
if SRC_PATH.as_posix() not in sys.path:
    sys.path.insert(0, SRC_PATH.as_posix())

from exam_builder.core.models import ExamSetup, QuestionType, QuestionTypeAllocation


# Common test fixtures
@pytest.fixture
def sample_image(tmp_path: Path):
    """Create a simple test image."""
    img = Image.new("RGB", (1200, 600), color="white")
    img_path = tmp_path / "sample.png"
    img.save(img_path)
    return img_path


@pytest.fixture
def mixed_setup():
    """MCQ (10 marks / 5), Short Answer (20 / 4), Paragraph (30 / 2): 60 marks."""
    return ExamSetup(
        school_name="ABC School",
        subject="Mathematics",
        class_name="10th Grade",
        total_marks=60,
        question_types=(
            QuestionTypeAllocation(QuestionType.MCQ, 10, 5),
            QuestionTypeAllocation(QuestionType.SHORT_ANSWER, 20, 4),
            QuestionTypeAllocation(QuestionType.PARAGRAPH, 30, 2),
        ),
    )


@pytest.fixture
def short_answer_setup():
    """Single Short Answer section: 10 marks over 2 questions."""
    return ExamSetup(
        school_name="ABC School",
        subject="Science",
        class_name="8",
        total_marks=10,
        question_types=(QuestionTypeAllocation(QuestionType.SHORT_ANSWER, 10, 2),),
    )
