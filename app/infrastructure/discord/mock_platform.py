from __future__ import annotations

import logging

from app.application.ports.interaction_platform import InteractionPlatformPort


class MockDiscordPlatform(InteractionPlatformPort):
    def __init__(self) -> None:
        self.followups: list[tuple[str, bool]] = []
        self.deleted: list[str] = []
        self._logger = logging.getLogger(__name__)

    def send_followup(self, application_id: str, token: str, content: str, ephemeral: bool = False) -> None:
        self.followups.append((content, ephemeral))
        self._logger.info("Mock follow-up", extra={"reply_text": content})

    def delete_original(self, application_id: str, token: str) -> None:
        self.deleted.append(token)
        self._logger.info("Mock delete of original response")
