from __future__ import annotations

import logging

import httpx

from app.application.ports.interaction_platform import InteractionPlatformPort
from app.infrastructure.discord.discord_client import DiscordClient


class DiscordPlatform(InteractionPlatformPort):
    """Follow-up delivery is best effort: failures are logged, never raised."""

    def __init__(self, client: DiscordClient) -> None:
        self._client = client
        self._logger = logging.getLogger(__name__)

    def send_followup(self, application_id: str, token: str, content: str, ephemeral: bool = False) -> None:
        try:
            self._client.send_followup(application_id, token, content, ephemeral=ephemeral)
        except httpx.HTTPError as e:
            self._logger.error("Follow-up message not delivered", extra={"error": str(e)})

    def delete_original(self, application_id: str, token: str) -> None:
        try:
            self._client.delete_original(application_id, token)
        except httpx.HTTPError as e:
            self._logger.error("Intermediate message not deleted", extra={"error": str(e)})
