"""Brand voice and persona CRUD endpoints.

Every route resolves the repository before the caller, so an unconfigured
database answers 503 even to anonymous callers.
"""

from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from ...analysis.validation import decode_body
from ...exceptions import InvalidInput
from ...storage import BrandVoiceRepository, PersonaRepository
from ..dependencies import get_brand_voice_repository, get_persona_repository, require_user_id

router = APIRouter(prefix="/api/db", tags=["db"])


async def _json_object(request: Request) -> Dict[str, Any]:
    body = decode_body(await request.body())
    if not isinstance(body, dict):
        raise InvalidInput("The request body must be a JSON object")
    return body


def _require(value: Optional[str], message: str) -> str:
    if not value:
        raise InvalidInput(message)
    return value


@router.get("/brand-voices")
async def get_brand_voice(
    project_id: Optional[str] = None,
    repository: BrandVoiceRepository = Depends(get_brand_voice_repository),
    user_id: str = Depends(require_user_id),
):
    return await repository.get(user_id, _require(project_id, "Project ID is required"))


@router.post("/brand-voices")
async def save_brand_voice(
    request: Request,
    repository: BrandVoiceRepository = Depends(get_brand_voice_repository),
    user_id: str = Depends(require_user_id),
):
    row, created = await repository.save(user_id, await _json_object(request))
    return JSONResponse(row, status_code=201 if created else 200)


@router.delete("/brand-voices")
async def delete_brand_voice(
    project_id: Optional[str] = None,
    repository: BrandVoiceRepository = Depends(get_brand_voice_repository),
    user_id: str = Depends(require_user_id),
):
    project_id = _require(project_id, "Project ID is required")
    await repository.delete(user_id, project_id)
    return {"success": True, "project_id": project_id}


@router.get("/personas")
async def get_personas(
    project_id: Optional[str] = None,
    id: Optional[str] = None,
    repository: PersonaRepository = Depends(get_persona_repository),
    user_id: str = Depends(require_user_id),
):
    """List a project's personas, or fetch one persona when ``id`` is given."""
    if id:
        return await repository.get(user_id, id)
    return await repository.list(user_id, _require(project_id, "Project ID is required"))


@router.post("/personas", status_code=201)
async def create_persona(
    request: Request,
    repository: PersonaRepository = Depends(get_persona_repository),
    user_id: str = Depends(require_user_id),
):
    return await repository.create(user_id, await _json_object(request))


@router.put("/personas")
async def update_persona(
    request: Request,
    repository: PersonaRepository = Depends(get_persona_repository),
    user_id: str = Depends(require_user_id),
):
    return await repository.update(user_id, await _json_object(request))


@router.delete("/personas")
async def delete_persona(
    id: Optional[str] = None,
    repository: PersonaRepository = Depends(get_persona_repository),
    user_id: str = Depends(require_user_id),
):
    persona_id = _require(id, "Persona ID is required")
    await repository.delete(user_id, persona_id)
    return {"success": True, "id": persona_id}
