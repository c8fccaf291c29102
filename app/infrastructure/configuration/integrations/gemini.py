"""Gemini text-generation integration settings."""

from pydantic import Field

from infrastructure.configuration.base import IntegrationSettings


class GeminiSettings(IntegrationSettings):
    """Gemini generateContent configuration used for message personalization.

    Environment Variables:
        GEMINI_API_KEY: Server-side API key (never sent to browsers)
        GEMINI_API_URL: generateContent endpoint URL
    """

    GEMINI_API_KEY: str | None = Field(default=None, alias="GEMINI_API_KEY")
    GEMINI_API_URL: str = Field(
        default=(
            "https://generativelanguage.googleapis.com/v1beta/models/"
            "gemini-pro:generateContent"
        ),
        alias="GEMINI_API_URL",
    )

    @property
    def is_configured(self) -> bool:
        return bool(self.GEMINI_API_KEY)
