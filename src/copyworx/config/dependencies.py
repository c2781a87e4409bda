"""Dependency injection configuration."""

from dataclasses import dataclass, field
from typing import Any, Callable, Optional

from langchain_core.language_models.chat_models import BaseChatModel

from .settings import Settings, settings as default_settings
from ..utils.llm import configure_llm
from ..utils.supabase_utils import SupabaseManager

LLMFactory = Callable[..., BaseChatModel]


@dataclass
class Dependencies:
    """Container for application dependencies.

    The chat model is built per pipeline run through ``llm_factory``; the
    Supabase manager is created on first use so that the analysis endpoints
    work without a database.
    """

    settings: Settings
    llm_factory: LLMFactory = configure_llm
    supabase_factory: Callable[[Settings], Any] = SupabaseManager
    _supabase: Optional[Any] = field(default=None, repr=False)

    def create_llm(self, *, max_tokens: int, temperature: Optional[float] = None) -> BaseChatModel:
        return self.llm_factory(self.settings, max_tokens=max_tokens, temperature=temperature)

    @property
    def supabase(self) -> SupabaseManager:
        if self._supabase is None:
            self._supabase = self.supabase_factory(self.settings)
        return self._supabase


def create_dependencies(settings: Optional[Settings] = None) -> Dependencies:
    """Create and configure application dependencies."""
    return Dependencies(settings=settings or default_settings)
