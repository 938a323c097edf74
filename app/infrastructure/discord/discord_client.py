from __future__ import annotations

import logging

import httpx


class DiscordClient:
    def __init__(self, api_base_url: str, timeout: float = 10.0, client: httpx.Client | None = None) -> None:
        self._api_base_url = api_base_url.rstrip("/")
        self._client = client or httpx.Client(timeout=timeout)
        self._logger = logging.getLogger(__name__)

    def _webhook_url(self, application_id: str, token: str) -> str:
        return f"{self._api_base_url}/webhooks/{application_id}/{token}"

    def send_followup(self, application_id: str, token: str, content: str, ephemeral: bool = False) -> None:
        payload: dict[str, object] = {"content": content}
        if ephemeral:
            payload["flags"] = 64
        resp = self._client.post(self._webhook_url(application_id, token), json=payload)
        if resp.status_code >= 400:
            self._logger.error(
                "Follow-up send failed",
                extra={"status": resp.status_code, "error": resp.text[:500]},
            )
            resp.raise_for_status()

    def delete_original(self, application_id: str, token: str) -> None:
        resp = self._client.delete(f"{self._webhook_url(application_id, token)}/messages/@original")
        if resp.status_code >= 400:
            self._logger.error(
                "Deleting original response failed",
                extra={"status": resp.status_code, "error": resp.text[:500]},
            )
            resp.raise_for_status()
