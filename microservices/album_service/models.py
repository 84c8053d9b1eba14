"""
Album Service Models

Independent models for the album collection.
Handles the stored album record, validated request payloads and the
response envelope shared by every endpoint.
"""

from typing import Optional, Dict, Any, List, Union
from pydantic import BaseModel, Field, field_validator
from datetime import datetime
import json
import math
import re
import uuid


Number = Union[int, float]

# Score assigned to every new album
DEFAULT_SCORE: List[Number] = [0]

# Release years beyond this magnitude do not survive the DOUBLE PRECISION column
YEAR_LIMIT = 10 ** 15

# Fields compared by the no-op update check, in storage naming
COMPARISON_FIELDS = ("title", "year", "artist", "photo_url", "score")

ALBUM_ID_PATTERN = re.compile(r"^album_[0-9a-f]{16}$")


def generate_album_id() -> str:
    """Generate a new album identifier"""
    return f"album_{uuid.uuid4().hex[:16]}"


def is_finite_number(value: Any) -> bool:
    """True for int/float values other than booleans, NaN and infinities"""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return not isinstance(value, float) or math.isfinite(value)


def normalize_number(value: Any) -> Any:
    """Reject booleans and non-finite floats, collapse integral floats (1900.0 -> 1900)"""
    if isinstance(value, bool):
        raise ValueError("booleans are not numbers")
    if isinstance(value, float) and not math.isfinite(value):
        raise ValueError("NaN and infinity are not numbers")
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


def parse_score(value: Any) -> Any:
    """Accept a JSON array string (JSONB column) or a list of numbers"""
    if isinstance(value, str):
        try:
            value = json.loads(value) if value else []
        except json.JSONDecodeError:
            raise ValueError("score must be a JSON array")
    if isinstance(value, list):
        return [normalize_number(item) for item in value]
    return value


# ==================== Core Models ====================

class Album(BaseModel):
    """Stored album record"""
    id: str
    title: str
    artist: str
    year: Number
    photo_url: str = Field(..., alias="photoUrl")
    score: List[Number] = Field(default_factory=lambda: list(DEFAULT_SCORE))
    created_at: Optional[datetime] = Field(None, alias="createdAt")
    updated_at: Optional[datetime] = Field(None, alias="updatedAt")

    @field_validator('year', mode='before')
    @classmethod
    def parse_year(cls, v):
        return normalize_number(v)

    @field_validator('score', mode='before')
    @classmethod
    def parse_score_array(cls, v):
        return parse_score(v) if v is not None else list(DEFAULT_SCORE)

    class Config:
        from_attributes = True
        populate_by_name = True


class AlbumProjection(BaseModel):
    """Partial album record holding only the projected fields"""
    title: Optional[str] = None
    year: Optional[Number] = None
    artist: Optional[str] = None
    photo_url: Optional[str] = Field(None, alias="photoUrl")
    score: Optional[List[Number]] = None

    @field_validator('year', mode='before')
    @classmethod
    def parse_year(cls, v):
        return normalize_number(v)

    @field_validator('score', mode='before')
    @classmethod
    def parse_score_array(cls, v):
        return parse_score(v)

    class Config:
        from_attributes = True
        populate_by_name = True


# ==================== Request Models ====================

class AlbumBody(BaseModel):
    """Validated create / full-update payload"""
    title: str = Field(..., min_length=1, description="Album title")
    year: Number = Field(..., ge=-YEAR_LIMIT, le=YEAR_LIMIT, description="Release year")
    artist: str = Field(..., min_length=1, description="Album artist")
    photo_url: str = Field(..., alias="photoUrl", min_length=1, description="Cover photo URL")
    score: Optional[List[Number]] = Field(None, min_length=1, description="Score history")

    @field_validator('title', 'artist', 'photo_url', mode='before')
    @classmethod
    def strip_text(cls, v):
        return v.strip() if isinstance(v, str) else v

    @field_validator('year', mode='before')
    @classmethod
    def parse_year(cls, v):
        return normalize_number(v)

    @field_validator('score', mode='before')
    @classmethod
    def parse_score_array(cls, v):
        return parse_score(v)

    def to_update_data(self) -> Dict[str, Any]:
        """Fields written by a full update; score only when supplied"""
        return self.model_dump(exclude_none=True)

    def to_insert_data(self) -> Dict[str, Any]:
        """Fields for a new record, score defaulted"""
        data = self.model_dump()
        if data["score"] is None:
            data["score"] = list(DEFAULT_SCORE)
        return data

    class Config:
        populate_by_name = True
        allow_inf_nan = False


class ScoreUpdate(BaseModel):
    """Complete score history written back by the score operation"""
    score: List[Number] = Field(..., min_length=1)

    @field_validator('score', mode='before')
    @classmethod
    def parse_score_array(cls, v):
        return parse_score(v)


# ==================== Result Models ====================

class AlbumUpdateResult(BaseModel):
    """Outcome of a full update: either modified with the new record, or a no-op"""
    modified: bool
    album: Optional[Album] = None


# ==================== Response Models ====================

class AlbumEnvelope(BaseModel):
    """Uniform response wrapper: {ok, data?, msg?, error?}"""
    ok: bool
    data: Optional[Any] = None
    msg: Optional[str] = None
    error: Optional[Any] = None

    def to_content(self) -> Dict[str, Any]:
        """JSON-ready content with absent keys omitted"""
        content: Dict[str, Any] = {"ok": self.ok}
        if self.data is not None:
            content["data"] = _serialize(self.data)
        if self.msg is not None:
            content["msg"] = self.msg
        if self.error is not None:
            content["error"] = self.error
        return content


def _serialize(data: Any) -> Any:
    if isinstance(data, BaseModel):
        return data.model_dump(mode="json", by_alias=True)
    if isinstance(data, list):
        return [_serialize(item) for item in data]
    return data


# ==================== Service Status Models ====================

class AlbumServiceStatus(BaseModel):
    """Album service health response"""
    service: str = "album_service"
    status: str = "healthy"
    version: str = "1.0.0"
    database_connected: bool
    timestamp: datetime


# ==================== Export Models ====================

__all__ = [
    # Constants
    'DEFAULT_SCORE', 'COMPARISON_FIELDS', 'ALBUM_ID_PATTERN',
    'YEAR_LIMIT',
    'generate_album_id', 'is_finite_number', 'normalize_number', 'parse_score',
    # Core Models
    'Album', 'AlbumProjection',
    # Request Models
    'AlbumBody', 'ScoreUpdate',
    # Result Models
    'AlbumUpdateResult',
    # Response Models
    'AlbumEnvelope',
    # Service Models
    'AlbumServiceStatus',
]
