"""FastAPI dependency providers."""

from typing import Optional

from fastapi import Depends, Header, Request

from ..config.dependencies import Dependencies
from ..exceptions import Unauthorized
from ..storage import BrandVoiceRepository, PersonaRepository


def get_dependencies(request: Request) -> Dependencies:
    return request.app.state.dependencies


def require_user_id(x_user_id: Optional[str] = Header(None)) -> str:
    """Return the caller's id, set by the identity gateway in front of the service."""
    if not x_user_id or not x_user_id.strip():
        raise Unauthorized()
    return x_user_id.strip()


def get_brand_voice_repository(
    dependencies: Dependencies = Depends(get_dependencies),
) -> BrandVoiceRepository:
    return BrandVoiceRepository(dependencies.supabase)


def get_persona_repository(
    dependencies: Dependencies = Depends(get_dependencies),
) -> PersonaRepository:
    return PersonaRepository(dependencies.supabase)
