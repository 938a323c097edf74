from abc import ABC, abstractmethod

from app.domain.entities.invoice import StageOneRecord


class StageContinuityPort(ABC):
    @abstractmethod
    def issue(self, stage_one: StageOneRecord) -> str:
        """Return a token that resolves back to stage_one on a later request."""
        raise NotImplementedError

    @abstractmethod
    def resolve(self, token: str) -> StageOneRecord | None:
        raise NotImplementedError

    @abstractmethod
    def release(self, token: str) -> None:
        """Forget the stage one behind token once stage two has been received."""
        raise NotImplementedError
