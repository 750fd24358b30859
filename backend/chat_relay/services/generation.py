"""OpenAI chat completion and image generation calls."""

from __future__ import annotations

import logging
from typing import Dict, List

from openai import AsyncOpenAI

logger = logging.getLogger(__name__)

# Fixed sampling parameters for chat replies
CHAT_COMPLETION_PARAMS = {
    "temperature": 0.5,
    "max_tokens": 10000,
    "top_p": 1,
    "frequency_penalty": 0.5,
    "presence_penalty": 0,
}
IMAGE_SIZE = "256x256"


class GenerationService:
    def __init__(self, client: AsyncOpenAI, chat_model: str = "gpt-3.5-turbo"):
        self.client = client
        self.chat_model = chat_model

    async def complete_chat(self, messages: List[Dict[str, str]]) -> str:
        """Return the trimmed text of the first completion choice."""
        logger.info("[openai->] chat.completions model=%s messages=%d", self.chat_model, len(messages))
        response = await self.client.chat.completions.create(
            model=self.chat_model,
            messages=messages,
            **CHAT_COMPLETION_PARAMS,
        )
        content = response.choices[0].message.content or ""
        return content.strip()

    async def generate_image(self, prompt: str) -> str:
        """Generate a single image and return the provider-hosted URL."""
        logger.info("[openai->] images.generate size=%s prompt_chars=%d", IMAGE_SIZE, len(prompt))
        response = await self.client.images.generate(
            prompt=prompt,
            n=1,
            size=IMAGE_SIZE,
            response_format="url",
        )
        return response.data[0].url
