"""Shared helpers for the Supabase-backed repositories."""

from typing import Any, Dict, Type, TypeVar

from pydantic import BaseModel, ValidationError

from ..exceptions import InvalidInput
from ..utils.supabase_utils import SupabaseManager

M = TypeVar("M", bound=BaseModel)


def validate_payload(model: Type[M], body: Dict[str, Any]) -> M:
    """Validate a write payload, raising ``InvalidInput`` with the first failure."""
    try:
        return model.model_validate(body)
    except ValidationError as e:
        first = e.errors()[0]
        if first["type"] == "value_error":
            # Validator messages are already user-facing
            raise InvalidInput(str(first["ctx"]["error"]))
        location = ".".join(str(part) for part in first["loc"])
        raise InvalidInput(f"{location}: {first['msg']}")


class Repository:
    """Base class for a repository over one table, scoped by ``user_id``."""

    table: str = ""

    def __init__(self, supabase: SupabaseManager):
        self.supabase = supabase
