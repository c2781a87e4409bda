"""Brand voice persistence. Each project holds at most one brand voice per user."""

from typing import Any, Dict, Optional, Tuple

from ..exceptions import InvalidInput
from ..models.records import BrandVoiceRecord
from ..utils.logging import get_logger
from .base import Repository, validate_payload

logger = get_logger(__name__)


class BrandVoiceRepository(Repository):
    table = "brand_voices"

    async def get(self, user_id: str, project_id: str) -> Optional[Dict[str, Any]]:
        """Return the project's brand voice, or None if it has none."""
        rows = await self.supabase.execute_with_retry(
            "select",
            self.table,
            filters={"project_id": project_id, "user_id": user_id},
            limit=1,
        )
        return rows[0] if rows else None

    async def save(self, user_id: str, body: Dict[str, Any]) -> Tuple[Dict[str, Any], bool]:
        """
        Create or update the brand voice of the project named in ``body``.

        Returns:
            Tuple[Dict[str, Any], bool]: The stored row and whether it was created

        Raises:
            InvalidInput: If project_id or brand_name are missing
        """
        project_id = body.get("project_id")
        if not project_id:
            raise InvalidInput("Project ID is required")
        record = validate_payload(BrandVoiceRecord, body).model_dump()

        existing = await self.supabase.execute_with_retry(
            "select",
            self.table,
            {"select": "id"},
            filters={"project_id": project_id, "user_id": user_id},
            limit=1,
        )

        if existing:
            rows = await self.supabase.execute_with_retry(
                "update",
                self.table,
                record,
                filters={"id": existing[0]["id"], "user_id": user_id},
            )
            created = False
        else:
            rows = await self.supabase.execute_with_retry(
                "insert",
                self.table,
                {"project_id": project_id, "user_id": user_id, **record},
            )
            created = True

        logger.info("Saved brand voice", project_id=project_id, created=created)
        return (rows[0] if rows else {}), created

    async def delete(self, user_id: str, project_id: str) -> None:
        await self.supabase.execute_with_retry(
            "delete",
            self.table,
            filters={"project_id": project_id, "user_id": user_id},
        )
        logger.info("Deleted brand voice", project_id=project_id)
