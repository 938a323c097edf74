from abc import ABC, abstractmethod


class InteractionPlatformPort(ABC):
    @abstractmethod
    def send_followup(self, application_id: str, token: str, content: str, ephemeral: bool = False) -> None:
        raise NotImplementedError

    @abstractmethod
    def delete_original(self, application_id: str, token: str) -> None:
        raise NotImplementedError
