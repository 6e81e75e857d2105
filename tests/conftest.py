import pytest
import sys
from pathlib import Path
from PIL import Image

# Add src to sys.path so we can import drawlines_toolkit
SRC_PATH = Path(__file__).resolve().parent.parent / "src"
if SRC_PATH.as_posix() not in sys.path:
    sys.path.insert(0, SRC_PATH.as_posix())

from drawlines_toolkit.core.models import (  # noqa: E402
    Coordinate,
    LineDefinition,
    LineType,
    QuestionDefinition,
)


# Common test fixtures
@pytest.fixture
def sample_image(tmp_path: Path):
    """Create a simple background image (400x300)."""
    img = Image.new("RGB", (400, 300), color="white")
    img_path = tmp_path / "background.png"
    img.save(img_path)
    return img_path


@pytest.fixture
def two_line_question() -> QuestionDefinition:
    """Two segment lines: one along y=10, one along y=200."""
    return QuestionDefinition(
        id="q1",
        lines=(
            LineDefinition(
                number=1,
                type=LineType.SEGMENT,
                zone_start=Coordinate.parse("10,10;12"),
                zone_end=Coordinate.parse("300,10;12"),
                label_start="A",
                label_end="B",
            ),
            LineDefinition(
                number=2,
                type=LineType.SEGMENT,
                zone_start=Coordinate.parse("10,200;12"),
                zone_end=Coordinate.parse("300,200;12"),
                label_middle="mid",
            ),
        ),
    )


@pytest.fixture
def question_data() -> dict:
    """Stored form of a two-line question."""
    return {
        "id": "q1",
        "grademethod": "partial",
        "shownumcorrect": True,
        "showmisplaced": False,
        "lines": [
            {
                "number": 1,
                "type": "linesegment",
                "labelstart": "A",
                "labelmiddle": "",
                "labelend": "B",
                "zonestart": "10,10;12",
                "zoneend": "300,10;12",
            },
            {
                "number": 2,
                "type": "lineinfinite",
                "labelstart": "",
                "labelmiddle": "mid",
                "labelend": "",
                "zonestart": "10,200;12",
                "zoneend": "300,200;12",
            },
        ],
    }
