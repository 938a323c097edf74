from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from app.domain.entities.invoice import FinalRecord, StageOneRecord


class FormPhase(str, Enum):
    AWAITING_STAGE_ONE = "awaiting_stage_one"
    AWAITING_STAGE_TWO = "awaiting_stage_two"
    MERGING = "merging"
    FORWARDING = "forwarding"
    SUCCESS = "success"
    FAILURE = "failure"

    @property
    def is_terminal(self) -> bool:
        return self in {FormPhase.SUCCESS, FormPhase.FAILURE}


@dataclass(frozen=True)
class FormResult:
    phase: FormPhase
    message: str | None = None
    stage_one: StageOneRecord | None = None
    record: FinalRecord | None = None
    token: str | None = None
