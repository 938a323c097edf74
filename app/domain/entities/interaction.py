from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any, Callable


class InteractionType(IntEnum):
    PING = 1
    COMMAND = 2
    BUTTON_CLICK = 3
    AUTOCOMPLETE = 4
    MODAL_SUBMIT = 5


@dataclass(frozen=True)
class Interaction:
    type: InteractionType
    id: str | None = None
    application_id: str | None = None
    token: str | None = None
    command_name: str | None = None
    custom_id: str | None = None
    values: dict[str, str] = field(default_factory=dict)
    user_id: str | None = None


@dataclass(frozen=True)
class InteractionReply:
    body: dict[str, Any]
    followup: Callable[[], None] | None = None
