"""Gemini text-generation client for infrastructure layer."""

from infrastructure.clients.gemini.client import GeminiClient, build_prompt, extract_text

__all__ = ["GeminiClient", "build_prompt", "extract_text"]
