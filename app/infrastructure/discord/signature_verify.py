from __future__ import annotations

import logging

from nacl.exceptions import BadSignatureError
from nacl.signing import VerifyKey


logger = logging.getLogger(__name__)


def verify_request_signature(
    body: bytes,
    signature_header: str | None,
    timestamp_header: str | None,
    public_key: str | None,
    env: str,
) -> bool:
    if not signature_header or not timestamp_header:
        if env.lower() in {"dev", "local"}:
            logger.warning("Missing signature headers; accepting in dev mode")
            return True
        return False

    if not public_key:
        logger.error("Missing public key for signature verification")
        return False

    try:
        verify_key = VerifyKey(bytes.fromhex(public_key))
        verify_key.verify(timestamp_header.encode("utf-8") + body, bytes.fromhex(signature_header))
    except (BadSignatureError, ValueError) as e:
        logger.warning("Signature verification failed", extra={"reason": type(e).__name__})
        return False
    return True
