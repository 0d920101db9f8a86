"""Layout of the on-disk topic catalog and access code files."""

from pathlib import Path

DEFAULT_DATA_DIR: Path = Path("data")
FILES_CONFIG_RELATIVE_PATH: Path = Path("config") / "files.txt"
QUESTIONS_RELATIVE_DIR: Path = Path("questions")
CODES_RELATIVE_PATH: Path = Path("codes.txt")

TOPIC_FILENAME_PATTERN: str = r"^class(\d+)-([a-zA-Z]+)(?:-([\w-]+))?\.json$"

SUBJECT_ALIASES: dict[str, str] = {
    "algebra": "Mathematics",
    "math": "Mathematics",
    "mathematics": "Mathematics",
    "physics": "Physics",
    "science": "Science",
    "english": "English",
}

PLACEHOLDER_CLASSES: tuple[str, ...] = ("7", "8", "9", "10", "11", "12")
PLACEHOLDER_SUBJECTS: tuple[str, ...] = ("Mathematics", "Science", "English")
PLACEHOLDER_QUESTION_COUNT: int = 30
