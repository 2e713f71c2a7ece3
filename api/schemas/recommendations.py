"""
Recommendation API Schemas - Request/response models for /recommendations

JSON field names are the front end's camelCase; attributes are snake_case.
"""

from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from reel_recommender.recommendations.prompt import RecommendationContext
from reel_recommender.schemas import RecommendationItem

__all__ = ["RecommendationRequest", "RecommendationItem"]


class RecommendationRequest(BaseModel):
    """Viewer context sent by the front end"""

    model_config = ConfigDict(populate_by_name=True)

    current_time: str = Field(..., alias="currentTime", description="Local time of viewing, e.g. '8:30 PM'")
    month: str = Field(..., description="Month name, e.g. 'October'")
    day_of_week: str = Field(..., alias="dayOfWeek", description="Weekday name, e.g. 'Friday'")
    latitude: float = Field(..., ge=-90, le=90, description="Decimal degrees")
    longitude: float = Field(..., ge=-180, le=180, description="Decimal degrees")
    genres: Optional[str] = Field(None, description="Favorite genres, free text")
    mood: Optional[str] = Field(None, description="Current mood, free text")
    gender: Optional[str] = Field(None, description="Logged only, not used in the prompt")
    age: Optional[int] = Field(None, ge=0, description="Viewer age; under 18 excludes R-rated titles")
    language: str = Field("English", description="Spoken language of the recommended titles")
    seen_movies: List[str] = Field(default_factory=list, alias="seenMovies")
    liked_movies: List[str] = Field(default_factory=list, alias="likedMovies")
    disliked_movies: List[str] = Field(default_factory=list, alias="dislikedMovies")

    @field_validator("genres", mode="before")
    @classmethod
    def join_genres(cls, v: Any) -> Any:
        """Accept a list of genres as well as a single string"""
        if isinstance(v, list):
            return ",".join(str(g) for g in v)
        return v

    @field_validator("seen_movies", "liked_movies", "disliked_movies", mode="before")
    @classmethod
    def none_as_empty(cls, v: Any) -> Any:
        return [] if v is None else v

    def to_context(self) -> RecommendationContext:
        return RecommendationContext(
            current_time=self.current_time,
            month=self.month,
            day_of_week=self.day_of_week,
            latitude=self.latitude,
            longitude=self.longitude,
            language=self.language,
            genres=self.genres,
            mood=self.mood,
            gender=self.gender,
            age=self.age,
            seen_movies=list(self.seen_movies),
            liked_movies=list(self.liked_movies),
            disliked_movies=list(self.disliked_movies),
        )
