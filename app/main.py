import logging

from fastapi import FastAPI

from app.api.interactions import router as interactions_router
from app.core.config import settings

CONTEXT_KEYS = ("interaction_type", "custom_id", "invoice_number", "year", "status", "reason", "error", "reply_text")


class ContextFormatter(logging.Formatter):
    """Appends the known `extra=` context keys to each line as key=value pairs."""

    def format(self, record: logging.LogRecord) -> str:
        base = super().format(record)
        extras = [
            f"{key}={getattr(record, key)}" for key in CONTEXT_KEYS if getattr(record, key, None) not in (None, "")
        ]
        if not extras:
            return base
        return f"{base} | " + " ".join(extras)


def configure_logging(level: str) -> logging.Handler:
    """Replace root handlers with a single context-aware stream handler."""
    handler = logging.StreamHandler()
    handler.setFormatter(ContextFormatter("%(levelname)s:%(name)s:%(message)s"))

    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    root.handlers.clear()
    root.addHandler(handler)
    return handler


configure_logging(settings.LOG_LEVEL)

app = FastAPI(title="Invoice Form Bot", version="1.0.0")

app.include_router(interactions_router, tags=["interactions"])


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}
