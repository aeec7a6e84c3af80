"""
User settings models and schemas.

Per-user upstream API key, model selection and sampling options.

Dependencies: pydantic
System role: Settings API contracts
"""

from datetime import datetime
from typing import Literal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_MODEL = "google/gemini-3-flash-preview"

DEFAULT_MODELS: tuple[dict[str, str], ...] = (
    {"id": "google/gemini-3-flash-preview", "name": "Gemini 3 Flash Preview"},
    {"id": "z-ai/glm-4.7", "name": "GLM 4.7"},
    {"id": "openai/gpt-5.2-pro", "name": "GPT-5.2 Pro"},
    {"id": "openai/gpt-5.2", "name": "GPT-5.2"},
)


class ModelOptions(BaseModel):
    """Sampling options forwarded to the completion API."""

    temperature: float | None = None
    max_tokens: int | None = None
    top_p: float | None = None
    frequency_penalty: float | None = None
    presence_penalty: float | None = None


DEFAULT_MODEL_OPTIONS = ModelOptions(
    temperature=0.7,
    max_tokens=4096,
    top_p=1,
    frequency_penalty=0,
    presence_penalty=0,
)


class UserSettings(BaseModel):
    """Stored settings for one user."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    user_id: str
    openrouter_api_key: str | None = None
    selected_model: str = DEFAULT_MODEL
    custom_models: list[str] = Field(default_factory=list)
    model_options: ModelOptions = Field(default_factory=lambda: DEFAULT_MODEL_OPTIONS.model_copy())
    math_renderer: Literal["mathjax", "katex"] = "katex"
    theme: Literal["dark", "light"] = "light"
    created_at: datetime
    updated_at: datetime


class UpdateSettingsRequest(BaseModel):
    """Partial settings update; omitted fields are left unchanged."""

    openrouter_api_key: str | None = None
    selected_model: str | None = None
    custom_models: list[str] | None = None
    model_options: ModelOptions | None = None
    math_renderer: Literal["mathjax", "katex"] | None = None
    theme: Literal["dark", "light"] | None = None
