#!/usr/bin/env python3
from __future__ import annotations

import argparse
import json
import time
from typing import Any

import httpx
from httpx import ConnectError
from nacl.signing import SigningKey


def build_stage_one_payload(invoice_date: str, number: str, customer: str, subject: str) -> dict[str, Any]:
    now_ms = int(time.time() * 1000)
    values = {
        "invoice_date": invoice_date,
        "invoice_number": number,
        "customer_name": customer,
        "subject": subject,
    }
    return {
        "type": 5,
        "id": f"i_{now_ms}",
        "application_id": "local-app",
        "token": f"local-token-{now_ms}",
        "data": {
            "custom_id": "invoice_step1",
            "components": [
                {"type": 1, "components": [{"type": 4, "custom_id": key, "value": value}]}
                for key, value in values.items()
            ],
        },
        "user": {"id": "user_123"},
    }


def sign_body(private_key_hex: str, timestamp: str, body: bytes) -> str:
    signing_key = SigningKey(bytes.fromhex(private_key_hex))
    return signing_key.sign(timestamp.encode("utf-8") + body).signature.hex()


def main() -> None:
    parser = argparse.ArgumentParser(description="Send a test stage-one modal submission")
    parser.add_argument("--url", default="http://127.0.0.1:8001/interactions")
    parser.add_argument("--date", default="2025-07-16")
    parser.add_argument("--number", default="INV-001")
    parser.add_argument("--customer", default="Acme")
    parser.add_argument("--subject", default="July invoice")
    parser.add_argument("--private-key", default="", help="Ed25519 private key (hex) matching DISCORD_PUBLIC_KEY")
    args = parser.parse_args()

    payload = build_stage_one_payload(args.date, args.number, args.customer, args.subject)
    body = json.dumps(payload).encode("utf-8")

    headers = {"Content-Type": "application/json"}
    if args.private_key:
        timestamp = str(int(time.time()))
        headers["X-Signature-Timestamp"] = timestamp
        headers["X-Signature-Ed25519"] = sign_body(args.private_key, timestamp, body)

    try:
        resp = httpx.post(args.url, content=body, headers=headers, timeout=10.0)
    except ConnectError:
        print("Connection refused. Is the FastAPI server running?")
        print("Try: uvicorn app.main:app --reload --port 8001")
        return

    print(resp.status_code)
    if resp.text:
        print(resp.text)


if __name__ == "__main__":
    main()
