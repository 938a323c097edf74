from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from app.domain.entities.interaction import Interaction, InteractionType


class InteractionEventDTO(BaseModel):
    model_config = ConfigDict(extra="ignore")

    type: int
    id: str | None = None
    application_id: str | None = None
    token: str | None = None
    data: dict[str, Any] = Field(default_factory=dict)
    member: dict[str, Any] | None = None
    user: dict[str, Any] | None = None

    def extract_values(self) -> dict[str, str]:
        values: dict[str, str] = {}
        rows = self.data.get("components") or []
        if not isinstance(rows, list):
            return values
        for row in rows:
            if not isinstance(row, dict) or not isinstance(row.get("components"), list):
                continue
            for component in row["components"]:
                if not isinstance(component, dict):
                    continue
                custom_id = component.get("custom_id")
                if not custom_id:
                    continue
                value = component.get("value")
                values[str(custom_id)] = "" if value is None else str(value)
        return values

    def user_id(self) -> str | None:
        user = self.user or (self.member or {}).get("user") or {}
        uid = user.get("id")
        return str(uid) if uid else None

    def to_interaction(self) -> Interaction:
        return Interaction(
            type=InteractionType(self.type),
            id=self.id,
            application_id=self.application_id,
            token=self.token,
            command_name=self.data.get("name"),
            custom_id=self.data.get("custom_id"),
            values=self.extract_values(),
            user_id=self.user_id(),
        )
