import asyncio
import logging
from typing import List

from requests.exceptions import RequestException

from reel_recommender.adapters.openai import OpenAI_API
from reel_recommender.recommendations.errors import RecommendationGenerationError
from reel_recommender.utils.text_cleaning import parse_title_list

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = "You are an expert movie recommendation assistant."


class RecommendationGenerator:
    """
    Asks the chat model for ranked titles and parses its answer.

    Upstream or payload failures raise RecommendationGenerationError.
    """

    def __init__(self, llm: OpenAI_API, max_tokens: int = 200, temperature: float = 0.7):
        self._llm = llm
        self.max_tokens = max_tokens
        self.temperature = temperature

    async def generate(self, prompt: str) -> List[str]:
        messages = [
            {"role": "system", "content": SYSTEM_PROMPT},
            {"role": "user", "content": prompt},
        ]
        try:
            content = await asyncio.to_thread(
                self._llm.chat_completion, messages, self.max_tokens, self.temperature
            )
        except (RequestException, ValueError, LookupError, TypeError) as e:
            logger.error(f"Error fetching recommendations: {e}")
            raise RecommendationGenerationError(str(e)) from e

        if not isinstance(content, str):
            raise RecommendationGenerationError(f"Unexpected completion content: {content!r}")

        titles = parse_title_list(content)
        logger.info(f"Model suggested {len(titles)} titles: {titles}")
        return titles
