"""Persona persistence. A project can hold any number of personas."""

from typing import Any, Dict, List

from ..exceptions import InvalidInput, NotFound
from ..models.records import PersonaCreate, PersonaUpdate
from ..utils.logging import get_logger
from .base import Repository, validate_payload

logger = get_logger(__name__)


class PersonaRepository(Repository):
    table = "personas"

    async def list(self, user_id: str, project_id: str) -> List[Dict[str, Any]]:
        """Personas of a project, oldest first."""
        return await self.supabase.execute_with_retry(
            "select",
            self.table,
            filters={"project_id": project_id, "user_id": user_id},
            order=("created_at", False),
        )

    async def get(self, user_id: str, persona_id: str) -> Dict[str, Any]:
        rows = await self.supabase.execute_with_retry(
            "select",
            self.table,
            filters={"id": persona_id, "user_id": user_id},
            limit=1,
        )
        if not rows:
            raise NotFound("Persona not found")
        return rows[0]

    async def create(self, user_id: str, body: Dict[str, Any]) -> Dict[str, Any]:
        project_id = body.get("project_id")
        if not project_id:
            raise InvalidInput("Project ID is required")
        persona = validate_payload(PersonaCreate, body)

        rows = await self.supabase.execute_with_retry(
            "insert",
            self.table,
            {"project_id": project_id, "user_id": user_id, **persona.model_dump()},
        )
        logger.info("Created persona", project_id=project_id)
        return rows[0] if rows else {}

    async def update(self, user_id: str, body: Dict[str, Any]) -> Dict[str, Any]:
        """
        Apply a partial update to the persona whose ``id`` is in ``body``.

        Raises:
            InvalidInput: If the id is missing or no updatable field is present
            NotFound: If the user has no persona with that id
        """
        persona_id = body.get("id")
        if not persona_id:
            raise InvalidInput("Persona ID is required")
        updates = validate_payload(PersonaUpdate, body).model_dump(exclude_unset=True)
        if not updates:
            raise InvalidInput("No valid updates provided")

        rows = await self.supabase.execute_with_retry(
            "update",
            self.table,
            updates,
            filters={"id": persona_id, "user_id": user_id},
        )
        if not rows:
            raise NotFound("Persona not found")
        logger.info("Updated persona", persona_id=persona_id, fields=sorted(updates))
        return rows[0]

    async def delete(self, user_id: str, persona_id: str) -> None:
        await self.supabase.execute_with_retry(
            "delete",
            self.table,
            filters={"id": persona_id, "user_id": user_id},
        )
        logger.info("Deleted persona", persona_id=persona_id)
