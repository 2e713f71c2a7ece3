"""
Ask Service - free-form questions relayed to the text-completion model
"""

import asyncio
import logging

from reel_recommender.adapters.openai import OpenAI_API

logger = logging.getLogger(__name__)


class AskService:

    def __init__(self, llm: OpenAI_API, max_tokens: int = 150):
        self._llm = llm
        self.max_tokens = max_tokens

    async def answer(self, question: str) -> str:
        """Returns the trimmed completion text; upstream errors propagate."""
        text = await asyncio.to_thread(self._llm.text_completion, question, self.max_tokens)
        return text.strip()
