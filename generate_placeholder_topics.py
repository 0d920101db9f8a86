"""Helper script that writes placeholder topic files into the data directory."""

from __future__ import annotations

from pathlib import Path

from cognition_quiz.constants.catalog_constants import (
    DEFAULT_DATA_DIR,
    FILES_CONFIG_RELATIVE_PATH,
    PLACEHOLDER_CLASSES,
    PLACEHOLDER_SUBJECTS,
    QUESTIONS_RELATIVE_DIR,
)
from cognition_quiz.core.topic_exporter import build_placeholder_topic, save_topic_to_file


def main() -> None:
    data_dir = Path(__file__).resolve().parent / DEFAULT_DATA_DIR
    questions_dir = data_dir / QUESTIONS_RELATIVE_DIR

    filenames: list[str] = []
    for class_level in PLACEHOLDER_CLASSES:
        for subject in PLACEHOLDER_SUBJECTS:
            topic = build_placeholder_topic(class_level, subject)
            save_topic_to_file(questions_dir / topic.source_name, topic)
            filenames.append(topic.source_name)
            print(f"Generated {topic.source_name}")

    config_path = data_dir / FILES_CONFIG_RELATIVE_PATH
    config_path.parent.mkdir(parents=True, exist_ok=True)
    config_path.write_text("\n".join(filenames) + "\n", encoding="utf-8")
    print(f"Wrote {len(filenames)} topic(s) to {config_path}")


if __name__ == "__main__":
    main()
