# backend/sitefactory/services/ai.py
from ..schemas.proxy import TextResponse
from ..schemas.upstream import CompletionPayload, GeminiPayload
from ..utils.logging import service_logger
from .upstream import UpstreamService


class CompletionService(UpstreamService):
    """Text completion through the OpenAI chat completions API"""

    service_name = "OpenAI"

    async def complete(self, prompt: str) -> TextResponse:
        api_key = self.require(self.settings.OPENAI_API_KEY, "OPENAI_API_KEY")
        data = await self.fetch_json(
            "POST",
            f"{self.settings.OPENAI_BASE_URL.rstrip('/')}/chat/completions",
            headers={"Authorization": f"Bearer {api_key}"},
            json={
                "model": self.settings.OPENAI_MODEL,
                "messages": [{"role": "user", "content": prompt}],
            },
        )

        text = self.parse(CompletionPayload, data).extract_text()
        if text is None:
            raise self.unparseable()
        return TextResponse(text=text)


class GeminiService(UpstreamService):
    """Generative text through the Gemini generateContent API"""

    service_name = "Gemini"

    async def generate(self, prompt: str) -> TextResponse:
        api_key = self.require(self.settings.GEMINI_API_KEY, "GEMINI_API_KEY")
        data = await self.fetch_json(
            "POST",
            f"{self.settings.GEMINI_BASE_URL.rstrip('/')}/models/{self.settings.GEMINI_MODEL}:generateContent",
            params={"key": api_key},
            json={"contents": [{"role": "user", "parts": [{"text": prompt}]}]},
        )

        payload = self.parse(GeminiPayload, data)
        if payload.blocked:
            service_logger.warning("Gemini blocked the prompt", extra={
                "block_reason": payload.prompt_feedback.block_reason if payload.prompt_feedback else None
            })
        text = payload.extract_text()
        if text is None:
            raise self.unparseable()
        return TextResponse(text=text)
