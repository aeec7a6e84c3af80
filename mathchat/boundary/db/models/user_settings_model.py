"""
User settings ORM model.

Dependencies: sqlalchemy, mathchat.boundary.db.base
System role: Per-user settings persistence
"""

from sqlalchemy import JSON, String
from sqlalchemy.orm import Mapped, mapped_column

from mathchat.boundary.db.base import Base, TimestampMixin, UUIDMixin
from mathchat.models.settings import DEFAULT_MODEL, DEFAULT_MODEL_OPTIONS


class UserSettingsModel(Base, UUIDMixin, TimestampMixin):
    """
    Settings row, one per user.

    Attributes:
        user_id: Owner identity (unique)
        openrouter_api_key: Upstream API key, None until configured
        selected_model: Model id used for replies
        custom_models: User-added model ids
        model_options: Sampling options as JSON
        math_renderer: "katex" or "mathjax"
        theme: "light" or "dark"
    """

    __tablename__ = "user_settings"

    user_id: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    openrouter_api_key: Mapped[str | None] = mapped_column(String(512), nullable=True)
    selected_model: Mapped[str] = mapped_column(String(255), nullable=False, default=DEFAULT_MODEL)
    custom_models: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    model_options: Mapped[dict] = mapped_column(
        JSON,
        nullable=False,
        default=lambda: DEFAULT_MODEL_OPTIONS.model_dump(),
    )
    math_renderer: Mapped[str] = mapped_column(String(16), nullable=False, default="katex")
    theme: Mapped[str] = mapped_column(String(16), nullable=False, default="light")
