from abc import ABC, abstractmethod

from app.domain.entities.invoice import FinalRecord


class RecorderPort(ABC):
    @abstractmethod
    def record(self, record: FinalRecord) -> None:
        """Store the record. Raises UpstreamTimeout, UpstreamRejected or UpstreamError."""
        raise NotImplementedError
