"""Access codes: base64-encoded learner profiles plus an optional registry.

An access code is ``base64(json)`` of::

    {"name": "Asha", "class": "10",
     "topics": [{"class": "10", "chapter": "Mathematics", "topic": "Quadratic"}]}

Codes are only accepted when they also appear in the registry file
(``codes.txt``), unless no registry is configured.
"""

from __future__ import annotations

import base64
import binascii
import json
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from cognition_quiz.core.models import TopicRef, UserProfile


class AccessCodeError(Exception):
    """Raised when an access code is malformed or not registered."""


class TopicGrant(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    class_level: str | int = Field(alias="class")
    chapter: str
    topic: str


class AccessCodePayload(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    name: str
    class_level: str | int = Field(alias="class")
    topics: list[TopicGrant]

    @field_validator("name")
    @classmethod
    def _name_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("name must not be empty")
        return value.strip()

    @field_validator("topics")
    @classmethod
    def _topics_not_empty(cls, value: list[TopicGrant]) -> list[TopicGrant]:
        if not value:
            raise ValueError("at least one topic must be granted")
        return value


def decode_access_code(access_code: str) -> UserProfile:
    code = access_code.strip()
    if not code:
        raise AccessCodeError("Please enter an access code.")
    try:
        decoded = base64.b64decode(code, validate=True).decode("utf-8")
        payload = AccessCodePayload.model_validate_json(decoded)
    except (binascii.Error, UnicodeDecodeError, ValidationError) as exc:
        raise AccessCodeError(
            "Invalid access code format. Please check your code and try again."
        ) from exc
    return UserProfile(
        name=payload.name,
        class_level=str(payload.class_level),
        allowed_topics=tuple(
            TopicRef(str(grant.class_level), grant.chapter, grant.topic)
            for grant in payload.topics
        ),
    )


def encode_access_code(profile: UserProfile) -> str:
    """Issue the access code for a profile (inverse of :func:`decode_access_code`)."""
    if not profile.allowed_topics:
        raise ValueError("Select at least one topic before generating a code.")
    document = {
        "name": profile.name,
        "class": profile.class_level,
        "topics": [
            {"class": ref.class_level, "chapter": ref.subject, "topic": ref.topic_name}
            for ref in profile.allowed_topics
        ],
    }
    raw = json.dumps(document, ensure_ascii=False, separators=(",", ":"))
    return base64.b64encode(raw.encode("utf-8")).decode("ascii")


class AccessCodeRegistry:
    """Set of issued access codes loaded from a text file."""

    def __init__(self, codes: list[str]) -> None:
        self._codes = {code.strip() for code in codes if code.strip()}

    @classmethod
    def from_file(cls, file_path: Path) -> "AccessCodeRegistry | None":
        """Return the registry, or ``None`` when the file does not exist."""
        if not file_path.exists():
            return None
        lines = file_path.read_text(encoding="utf-8").splitlines()
        return cls([line for line in lines if not line.strip().startswith("#")])

    def __len__(self) -> int:
        return len(self._codes)

    def is_registered(self, access_code: str) -> bool:
        return access_code.strip() in self._codes
