"""
Album Request Validators

Checks request bodies before any storage access and returns an explicit
result value instead of raising. Handlers decide how to respond.
"""

from dataclasses import dataclass
from typing import Any, Optional

from pydantic import ValidationError

from .models import (
    ALBUM_ID_PATTERN,
    AlbumBody,
    AlbumEnvelope,
    Number,
    is_finite_number,
    normalize_number,
)


REQUIRED_BODY_FIELDS = ("title", "year", "artist", "photoUrl")

MANDATORY_FIELDS_MESSAGE = "All fields of the JSON body are mandatory."
SCORE_REQUIRED_MESSAGE = 'The "score" field in the JSON body is required.'
SCORE_NOT_NUMBER_MESSAGE = 'The "score" field in the JSON body must be a number.'


@dataclass
class AlbumValidationResult:
    """Outcome of validating a create/update body"""
    ok: bool
    album: Optional[AlbumBody] = None
    error: Optional[AlbumEnvelope] = None

    @classmethod
    def success(cls, album: AlbumBody) -> "AlbumValidationResult":
        return cls(ok=True, album=album)

    @classmethod
    def failure(cls, message: str = MANDATORY_FIELDS_MESSAGE) -> "AlbumValidationResult":
        return cls(ok=False, error=AlbumEnvelope(ok=False, msg=message))


@dataclass
class ScoreValidationResult:
    """Outcome of validating a score-append body"""
    ok: bool
    score: Optional[Number] = None
    error: Optional[AlbumEnvelope] = None

    @classmethod
    def success(cls, score: Number) -> "ScoreValidationResult":
        return cls(ok=True, score=score)

    @classmethod
    def failure(cls, message: str) -> "ScoreValidationResult":
        return cls(ok=False, error=AlbumEnvelope(ok=False, msg=message))


def _is_missing(value: Any) -> bool:
    if value is None:
        return True
    return isinstance(value, str) and not value.strip()


def validate_album_body(body: Any) -> AlbumValidationResult:
    """
    Validate a create / full-update body.

    All of title, year, artist and photoUrl must be present and non-empty.
    Any failure (missing field, wrong type, non-object body) yields the
    same single message; there is no per-field detail.
    """
    if not isinstance(body, dict):
        return AlbumValidationResult.failure()

    if any(_is_missing(body.get(field)) for field in REQUIRED_BODY_FIELDS):
        return AlbumValidationResult.failure()

    try:
        album = AlbumBody.model_validate(body)
    except ValidationError:
        return AlbumValidationResult.failure()

    return AlbumValidationResult.success(album)


def validate_score_body(body: Any) -> ScoreValidationResult:
    """
    Validate a score-append body.

    Only an absent or null score counts as missing; 0 is a valid score.
    NaN and infinities are not numbers.
    """
    if not isinstance(body, dict) or body.get("score") is None:
        return ScoreValidationResult.failure(SCORE_REQUIRED_MESSAGE)

    score = body["score"]
    if not is_finite_number(score):
        return ScoreValidationResult.failure(SCORE_NOT_NUMBER_MESSAGE)

    return ScoreValidationResult.success(normalize_number(score))


def is_valid_album_id(album_id: str) -> bool:
    """Check identifier format before it reaches storage"""
    return bool(album_id) and ALBUM_ID_PATTERN.match(album_id) is not None
