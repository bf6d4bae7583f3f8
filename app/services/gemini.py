"""
FitTrack API - Gemini AI Service.

Centralized Gemini API client shared by meal planning, workout planning
and the AI coach. One model call per request; failures propagate to the
caller, which decides between a static fallback and an error response.
"""

import asyncio
import logging
from typing import Dict, List, Optional

from google import genai
from google.genai import types

from settings import settings


logger = logging.getLogger(__name__)


class GeminiNotConfiguredError(RuntimeError):
    """Raised when a Gemini call is attempted without an API key."""


class _ModelWrapper:
    """
    Thin wrapper over the google-genai client bound to one model name.
    """

    def __init__(self, client: genai.Client, model_name: str):
        self.client = client
        self.model_name = model_name

    def generate_content(self, contents):
        return self.client.models.generate_content(model=self.model_name, contents=contents)

    def send_chat(self, system_instruction: str, history: List[Dict[str, str]], message: str):
        """
        Start a chat seeded with ``history`` and send ``message``.

        Args:
            system_instruction: System prompt for the conversation.
            history: Prior turns as ``{"role": "user"|"model", "text": ...}``.
            message: New user message.
        """
        chat = self.client.chats.create(
            model=self.model_name,
            config=types.GenerateContentConfig(
                system_instruction=system_instruction,
                max_output_tokens=1024,
                temperature=0.7,
            ),
            history=[
                types.Content(role=turn["role"], parts=[types.Part(text=turn["text"])])
                for turn in history
            ],
        )
        return chat.send_message(message)


class GeminiService:
    """
    Gemini API service for AI-powered features.
    """

    def __init__(self, api_key: Optional[str] = None, model_name: Optional[str] = None):
        self.api_key = api_key or settings.GEMINI_API_KEY
        self.model_name = model_name or settings.GEMINI_MODEL
        if self.api_key:
            self.client = genai.Client(api_key=self.api_key)
            self.text_model = _ModelWrapper(self.client, self.model_name)
        else:
            self.client = None
            self.text_model = None
        self.logger = logging.getLogger(__name__)

    @property
    def is_configured(self) -> bool:
        return self.text_model is not None

    async def generate(self, prompt: str) -> str:
        """
        Send ``prompt`` and return the response text.

        Raises:
            GeminiNotConfiguredError: No API key configured.
            Exception: Any client or transport error, unchanged.
        """
        if not self.text_model:
            self.logger.error("Gemini API key not configured")
            raise GeminiNotConfiguredError("AI service not configured")

        response = await asyncio.to_thread(self.text_model.generate_content, prompt)
        return response.text or ""

    async def chat(self, system_prompt: str, history: List[Dict[str, str]], message: str) -> str:
        """
        Continue a conversation.

        Raises:
            GeminiNotConfiguredError: No API key configured.
        """
        if not self.text_model:
            self.logger.error("Gemini API key not configured")
            raise GeminiNotConfiguredError("AI service not configured")

        response = await asyncio.to_thread(self.text_model.send_chat, system_prompt, history, message)
        return response.text or ""


# Global Gemini service instance
gemini_service = GeminiService()
