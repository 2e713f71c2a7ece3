"""OpenAI REST adapter for chat and legacy text completions."""

import logging
from typing import Dict, List, Optional

from reel_recommender.adapters.client import APIClient
from reel_recommender.settings import OpenAISettings, get_settings

logger = logging.getLogger(__name__)


class OpenAI_API:
    def __init__(self, settings: Optional[OpenAISettings] = None, client: Optional[APIClient] = None):
        self.settings: OpenAISettings = settings or get_settings().openai
        if not self.settings.api_key.get_secret_value():
            logger.warning("OPENAI_API_KEY is not set; completion requests will be rejected upstream")
        self._client: APIClient = client or APIClient(
            base_url=str(self.settings.api_base_url),
            headers={
                "Authorization": f"Bearer {self.settings.api_key.get_secret_value()}",
                "Content-Type": "application/json",
            },
        )

    def chat_completion(self, messages: List[Dict[str, str]], max_tokens: int, temperature: Optional[float] = None) -> str:
        """Returns the content of the first choice's message."""
        response = self._client.post(
            "chat/completions",
            {
                "model": self.settings.chat_model,
                "messages": messages,
                "max_tokens": max_tokens,
                "temperature": self.settings.temperature if temperature is None else temperature,
            },
        )
        return response["choices"][0]["message"]["content"]

    def text_completion(self, prompt: str, max_tokens: int, temperature: Optional[float] = None) -> str:
        """Returns the text of the first choice."""
        response = self._client.post(
            "completions",
            {
                "model": self.settings.completion_model,
                "prompt": prompt,
                "max_tokens": max_tokens,
                "temperature": self.settings.temperature if temperature is None else temperature,
            },
        )
        return response["choices"][0]["text"]

    def close(self) -> None:
        self._client.close()
