"""OpenAI Responses API client for summary text."""

from dataclasses import dataclass

from openai import AsyncOpenAI

from milk_tracker.services.summary import TextGenerationClient


@dataclass
class OpenAITextClient(TextGenerationClient):
    """Text generation backed by the OpenAI Responses API."""

    client: AsyncOpenAI | None

    @classmethod
    def create(cls, api_key: str | None) -> "OpenAITextClient":
        """Create a client. Without a key every call fails."""
        return cls(client=AsyncOpenAI(api_key=api_key) if api_key else None)

    async def generate(self, *, model: str, instructions: str, prompt: str) -> str:
        """Return the model's text output for a prompt."""
        if self.client is None:
            raise RuntimeError("OPENAI_API_KEY is not configured")
        response = await self.client.responses.create(
            model=model,
            instructions=instructions,
            input=prompt,
        )
        return response.output_text or ""

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        if self.client is not None:
            await self.client.close()
