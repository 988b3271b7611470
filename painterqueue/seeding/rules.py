"""
Rule records loaded from the seed blob.
"""

import uuid
from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class Rule(BaseModel):
    """A painting queue rule."""

    model_config = ConfigDict(populate_by_name=True)

    id: uuid.UUID
    name: str = Field(min_length=1, max_length=60)
    internal_description: str = Field(alias="internalDescription", min_length=1, max_length=1024)
    description: str = Field(min_length=1, max_length=8192)
    page: int = Field(default=0, ge=0, le=999)
    created: Optional[datetime] = None
    updated: Optional[datetime] = None

    @model_validator(mode="before")
    @classmethod
    def match_keys_ignoring_case(cls, data: Any) -> Any:
        """Accept "Page", "PAGE" or "page" alike, as seed files vary."""
        if not isinstance(data, dict):
            return data

        known: Dict[str, str] = {}
        for name, field_info in cls.model_fields.items():
            known[name.lower()] = field_info.alias or name
            known[name.replace("_", "").lower()] = field_info.alias or name

        return {known.get(key.replace("_", "").lower(), key): value for key, value in data.items()}
