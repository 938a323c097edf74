from __future__ import annotations

import base64
import logging
from typing import Sequence

STAGE_TWO_PREFIX = "step2_"
FIELD_DELIMITER = "|"
STAGE_ONE_ARITY = 4


logger = logging.getLogger(__name__)


class StageTokenCodec:
    """
    Packs stage-one answers into a transport-safe identifier and back.

    Payload layout: each value with the delimiter stripped, joined by the
    delimiter and terminated by one more delimiter, then URL-safe base64
    without padding. The terminator makes any appended characters show up
    as an extra, non-empty field on decode.
    """

    def __init__(
        self,
        prefix: str = STAGE_TWO_PREFIX,
        delimiter: str = FIELD_DELIMITER,
        arity: int = STAGE_ONE_ARITY,
    ) -> None:
        if len(delimiter) != 1:
            raise ValueError("delimiter must be a single character")
        self.prefix = prefix
        self.delimiter = delimiter
        self.arity = arity

    def sanitize(self, fields: Sequence[str]) -> tuple[str, ...]:
        return tuple(value.replace(self.delimiter, "") for value in fields)

    def encode(self, fields: Sequence[str]) -> str:
        if len(fields) != self.arity:
            raise ValueError(f"expected {self.arity} fields, got {len(fields)}")

        joined = self.delimiter.join(self.sanitize(fields)) + self.delimiter
        payload = base64.urlsafe_b64encode(joined.encode("utf-8")).decode("ascii").rstrip("=")
        return f"{self.prefix}{payload}"

    def decode(self, token: object) -> tuple[str, ...] | None:
        if not isinstance(token, str) or not token.startswith(self.prefix):
            return None

        payload = token[len(self.prefix) :]
        padded = payload + "=" * (-len(payload) % 4)
        try:
            text = base64.b64decode(padded, altchars=b"-_", validate=True).decode("utf-8")
        except ValueError as e:
            logger.debug("Stage token decode failed", extra={"reason": str(e)})
            return None

        if not text.endswith(self.delimiter):
            return None

        parts = text[: -len(self.delimiter)].split(self.delimiter)
        if len(parts) != self.arity:
            return None
        return tuple(parts)

    def size_of(self, fields: Sequence[str]) -> int:
        return len(self.encode(fields).encode("utf-8"))
