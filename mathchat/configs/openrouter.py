"""
Upstream completion service configuration.

Settings for the OpenRouter chat-completion API used for streamed
replies and conversation title generation.

Dependencies: pydantic_settings
System role: Upstream LLM API configuration
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_SYSTEM_PROMPT = (
    "You are an AI assistant that supports the study of mathematics, "
    "including category theory.\n"
    "Write mathematics in LaTeX notation: use $...$ for inline math and "
    "$$...$$ for display math.\n"
    "Commutative diagrams may be written in tikz-cd notation.\n"
    "Explain politely in Japanese."
)

TITLE_PROMPT = (
    "Summarize the following conversation concisely and produce a Japanese "
    "title of at most 20 characters. Output only the title, without any "
    "explanation or quotation marks."
)


class OpenRouterSettings(BaseSettings):
    """OpenRouter API configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="OPENROUTER_",
        case_sensitive=False,
        extra="ignore",
    )

    base_url: str = Field(
        default="https://openrouter.ai/api/v1",
        description="Base URL of the chat-completion API",
    )
    app_url: str = Field(
        default="http://localhost:3000",
        description="Public URL of this app, sent as HTTP-Referer",
    )
    app_title: str = Field(
        default="Math Study Chatbot",
        description="App name sent as X-Title",
    )
    title_model: str = Field(
        default="anthropic/claude-3-haiku",
        description="Model used for conversation title generation",
    )
    title_max_tokens: int = Field(default=50, description="Token cap for generated titles")
    connect_timeout: float = Field(default=10.0, description="Connect timeout in seconds")
    request_timeout: float | None = Field(
        default=None,
        description="Read timeout in seconds; None leaves streamed reads unbounded",
    )
    system_prompt: str = Field(
        default=DEFAULT_SYSTEM_PROMPT,
        description="System prompt prepended to every streamed chat request",
    )
