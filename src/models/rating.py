"""
Rating data model.

Represents one fluency rating row as exported from the ratings table.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

import config.settings as settings

SCORE_FIELDS = ("naturalness", "confidence", "eye_contact")


@dataclass(frozen=True)
class RatingRecord:
    """
    A single rating submitted about a video clip.
    Validated once here; the aggregators assume well-formed records.
    """
    id: str  # Opaque unique identifier
    user_id: str  # Identifier of the rater
    created_at: datetime  # Submission time (aware or local-naive)
    naturalness: int  # 1-10
    confidence: int  # 1-10
    eye_contact: int  # 1-10
    comment: Optional[str] = None  # Optional free text

    def __post_init__(self):
        for name in ("id", "user_id"):
            value = getattr(self, name)
            if not isinstance(value, str) or not value.strip():
                raise ValueError(f"Invalid {name}: {value!r}. Must be a non-empty string")

        if self.comment is not None and not isinstance(self.comment, str):
            raise ValueError(f"Invalid comment for rating {self.id}: {self.comment!r}")

        if not isinstance(self.created_at, datetime):
            raise ValueError(
                f"Invalid created_at for rating {self.id}: {self.created_at!r}"
            )

        for name in SCORE_FIELDS:
            value = getattr(self, name)
            # bool is an int subclass; reject it explicitly
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValueError(f"Invalid {name}: {value!r}. Must be an integer")
            if not (settings.SCORE_MIN <= value <= settings.SCORE_MAX):
                raise ValueError(
                    f"Invalid {name}: {value}. "
                    f"Must be {settings.SCORE_MIN}-{settings.SCORE_MAX}"
                )

    @property
    def scores(self) -> tuple:
        """(naturalness, confidence, eye_contact)"""
        return (self.naturalness, self.confidence, self.eye_contact)

    @classmethod
    def from_dict(cls, data: dict) -> "RatingRecord":
        """
        Create RatingRecord from a ratings table row.

        Integer ids are accepted and stringified; null or blank ids are not.

        Raises:
            ValueError: If the row is not a dict or a field is malformed
            KeyError: If a required column is missing
        """
        if not isinstance(data, dict):
            raise ValueError(f"Rating row must be an object, got {type(data).__name__}")

        comment = data.get("comment")
        if isinstance(comment, str):
            comment = comment.strip() or None
        elif comment is not None:
            raise ValueError(f"Invalid comment: {comment!r}. Must be a string or null")

        return cls(
            id=_identifier(data["id"], "id"),
            user_id=_identifier(data["user_id"], "user_id"),
            created_at=parse_timestamp(data["created_at"]),
            naturalness=data["naturalness"],
            confidence=data["confidence"],
            eye_contact=data["eye_contact"],
            comment=comment
        )

    def to_dict(self) -> dict:
        """Convert to JSON-serializable dict (ratings table row shape)."""
        return {
            "id": self.id,
            "user_id": self.user_id,
            "created_at": self.created_at.isoformat(),
            "naturalness": self.naturalness,
            "confidence": self.confidence,
            "eye_contact": self.eye_contact,
            "comment": self.comment
        }


def _identifier(value, name: str) -> str:
    """Store ids may be strings or integers; anything else is rejected."""
    if isinstance(value, bool) or not isinstance(value, (str, int)):
        raise ValueError(f"Invalid {name}: {value!r}. Must be a string or integer")
    text = str(value).strip()
    if not text:
        raise ValueError(f"Invalid {name}: {value!r}. Must not be blank")
    return text


def parse_timestamp(value) -> datetime:
    """
    Parse an ISO-8601 timestamp as written by the backing store.

    Accepts datetime objects unchanged and a trailing "Z" for UTC.
    """
    if isinstance(value, datetime):
        return value
    if not isinstance(value, str):
        raise ValueError(f"Invalid timestamp: {value!r}")

    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"

    try:
        return datetime.fromisoformat(text)
    except ValueError:
        raise ValueError(f"Invalid timestamp: {value!r}") from None


# Design Rationale and Trade-offs:
#
# 1. Why validate in __post_init__ instead of in the aggregators?
#    - Rows are checked once when loaded; every later step reads typed fields
#    - A null id, a non-string comment or an out-of-range score stops the load
#    - Trade-off: One bad row fails the whole snapshot instead of being skipped
#
# 2. Why accept integer ids in from_dict?
#    - The ratings table may use bigint keys; they are stored as strings here
#    - Null and blank ids are still rejected, never stringified to "None"
#
# 3. Why frozen?
#    - Records are shared between the filtered and unfiltered views of one pass
#    - Trade-off: Corrections need dataclasses.replace(), not assignment
