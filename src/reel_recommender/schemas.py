from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Generic, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")


class ResolutionStatus(Enum):
    FOUND = "found"
    ABSENT = "absent"    # upstream answered, nothing matched
    FAILED = "failed"    # transport, HTTP or payload error


@dataclass(frozen=True)
class Resolution(Generic[T]):
    """
    Outcome of a soft upstream lookup.

    Soft resolvers never raise: they report FOUND, ABSENT or FAILED and let the
    caller decide how much the difference matters. The recommendation pipeline
    treats ABSENT and FAILED alike; the single-resource HTTP routes map them to
    404 and 500 respectively.
    """
    status: ResolutionStatus
    value: Optional[T] = None
    error: Optional[BaseException] = None

    @classmethod
    def found(cls, value: T) -> "Resolution[T]":
        return cls(ResolutionStatus.FOUND, value=value)

    @classmethod
    def absent(cls) -> "Resolution[T]":
        return cls(ResolutionStatus.ABSENT)

    @classmethod
    def failed(cls, error: BaseException) -> "Resolution[T]":
        return cls(ResolutionStatus.FAILED, error=error)

    @property
    def ok(self) -> bool:
        return self.status is ResolutionStatus.FOUND

    @property
    def failed_with(self) -> Optional[str]:
        """Underlying error message, if any."""
        return str(self.error) if self.error is not None else None


@dataclass(frozen=True)
class LocationInfo:
    """City/state for a coordinate pair; either may be missing."""
    city: Optional[str]
    state: Optional[str]


class MovieRecord(BaseModel):
    """
    Catalog movie details, optionally enriched with streaming availability.

    Every field from the catalog payload is kept (extra="allow"). The
    enrichment fields are only present when the streaming lookup succeeded.
    """
    model_config = ConfigDict(extra="allow", frozen=True)

    id: int
    title: Optional[str] = None
    poster_path: Optional[str] = None
    backdrop_path: Optional[str] = None
    release_dates: Optional[Dict[str, Any]] = None
    streamingProviders: Optional[Any] = None
    cast: Optional[List[Any]] = None
    directors: Optional[List[Any]] = None

    @property
    def is_enriched(self) -> bool:
        return "streamingProviders" in self.model_fields_set

    def to_payload(self) -> Dict[str, Any]:
        """JSON-ready dict holding only the fields that were actually provided."""
        return self.model_dump(mode="json", exclude_unset=True)


class RecommendationItem(BaseModel):
    """
    One entry of the /recommendations response.

    Only fields that were actually resolved are serialized (dump with
    ``exclude_unset=True``): an unmatched title carries just ``title`` and a
    null ``tmdbId``.
    """
    model_config = ConfigDict(populate_by_name=True)

    title: str
    tmdb_id: Optional[int] = Field(None, alias="tmdbId")
    backdrop_path: Optional[str] = None
    poster_path: Optional[str] = Field(None, alias="posterPath")
    streaming_providers: Optional[Any] = Field(None, alias="streamingProviders")

    @classmethod
    def unmatched(cls, title: str) -> "RecommendationItem":
        return cls(title=title, tmdb_id=None)

    @classmethod
    def from_movie(cls, title: str, movie: MovieRecord) -> "RecommendationItem":
        fields: Dict[str, Any] = {
            "title": title,
            "tmdb_id": movie.id,
            "backdrop_path": movie.backdrop_path,
            "poster_path": movie.poster_path,
        }
        if movie.is_enriched:
            fields["streaming_providers"] = movie.streamingProviders
        return cls(**fields)

    def to_payload(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_unset=True)
