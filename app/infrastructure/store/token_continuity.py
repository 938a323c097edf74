from __future__ import annotations

from app.application.ports.stage_continuity import StageContinuityPort
from app.application.utils.stage_token import StageTokenCodec
from app.domain.entities.invoice import StageOneRecord


class TokenStageContinuity(StageContinuityPort):
    """Stateless: stage one lives entirely inside the token."""

    def __init__(self, codec: StageTokenCodec | None = None) -> None:
        self._codec = codec or StageTokenCodec()

    def issue(self, stage_one: StageOneRecord) -> str:
        return self._codec.encode(stage_one.as_fields())

    def resolve(self, token: str) -> StageOneRecord | None:
        fields = self._codec.decode(token)
        if fields is None:
            return None
        return StageOneRecord.from_fields(fields)

    def release(self, token: str) -> None:
        # Nothing is held server-side.
        return None
