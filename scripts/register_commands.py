#!/usr/bin/env python3
from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Any

import httpx

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from app.application.use_cases.handle_interaction import INVOICE_COMMAND, QUICK_INVOICE_COMMAND
from app.core.config import settings

CHAT_INPUT = 1


def command_definitions() -> list[dict[str, Any]]:
    return [
        {"name": INVOICE_COMMAND, "type": CHAT_INPUT, "description": "Create an invoice in two steps"},
        {"name": QUICK_INVOICE_COMMAND, "type": CHAT_INPUT, "description": "Create an invoice in a single form"},
    ]


def main() -> None:
    parser = argparse.ArgumentParser(description="Register the invoice slash commands")
    parser.add_argument("--guild-id", default="", help="Register for one guild instead of globally")
    args = parser.parse_args()

    if not settings.DISCORD_APPLICATION_ID or not settings.DISCORD_BOT_TOKEN:
        print("DISCORD_APPLICATION_ID and DISCORD_BOT_TOKEN must be set (see .env)")
        sys.exit(1)

    base = f"{settings.DISCORD_API_BASE_URL.rstrip('/')}/applications/{settings.DISCORD_APPLICATION_ID}"
    url = f"{base}/guilds/{args.guild_id}/commands" if args.guild_id else f"{base}/commands"

    resp = httpx.put(
        url,
        json=command_definitions(),
        headers={"Authorization": f"Bot {settings.DISCORD_BOT_TOKEN}"},
        timeout=10.0,
    )
    print(resp.status_code)
    if resp.status_code >= 400:
        print(resp.text)
        sys.exit(1)

    for command in resp.json():
        print(f"registered /{command.get('name')} id={command.get('id')}")


if __name__ == "__main__":
    main()
