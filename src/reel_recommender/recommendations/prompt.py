"""
Prompt Builder - renders the recommendation request for the LLM

Pure and deterministic: the same context always yields the same text. Each
optional field contributes exactly one line (or block) and nothing else, and
the line order is fixed because it affects what the model returns.
"""

from dataclasses import dataclass, field
from typing import List, Optional

from reel_recommender.schemas import LocationInfo

TITLE_COUNT = 5

HEADER = "Recommend a list of {count} {language}-language movie titles for a person based on the following details:\n"
NO_R_RATED = "Do not suggest movies that are rated R.\n"
FOOTER = (
    "No adult movies."
    "\nOnly list the movie titles without any additional text or explanation. "
    "Provide the response in the following format:\n"
    "1. Movie Title 1\n2. Movie Title 2\n3. Movie Title 3\n4. Movie Title 4\n5. Movie Title 5"
)
ADULT_AGE = 18


@dataclass(frozen=True)
class RecommendationContext:
    """Everything the viewer told us, independent of the HTTP layer."""
    current_time: str
    month: str
    day_of_week: str
    latitude: float
    longitude: float
    language: str = "English"
    genres: Optional[str] = None
    mood: Optional[str] = None
    gender: Optional[str] = None
    age: Optional[int] = None
    seen_movies: List[str] = field(default_factory=list)
    liked_movies: List[str] = field(default_factory=list)
    disliked_movies: List[str] = field(default_factory=list)


def _title_block(intro: str, titles: List[str]) -> str:
    return intro + ":\n " + "\n".join(titles) + "\n"


def build_prompt(context: RecommendationContext,
                 location: Optional[LocationInfo],
                 weather: Optional[str]) -> str:
    prompt = HEADER.format(count=TITLE_COUNT, language=context.language)

    if context.age:
        prompt += f"Age: {context.age}\n"

    if location is not None and location.city and location.state:
        prompt += f"Location: {location.city}, {location.state}\n"

    if weather:
        prompt += f"Weather: {weather}\n"

    prompt += f"Watch Time: {context.current_time} on a {context.day_of_week} in {context.month}\n"

    if context.genres:
        prompt += f"Favorite Genres: {context.genres}\n"

    if context.mood:
        prompt += f"Mood: {context.mood}\n"

    if context.seen_movies:
        prompt += _title_block("Do not suggest the following movies", context.seen_movies)

    if context.age is not None and context.age < ADULT_AGE:
        prompt += NO_R_RATED

    if context.liked_movies:
        prompt += _title_block("They liked the following movies", context.liked_movies)

    if context.disliked_movies:
        prompt += _title_block("They disliked the following movies", context.disliked_movies)

    return prompt + FOOTER
