from __future__ import annotations

import json
import logging

from fastapi import APIRouter, BackgroundTasks, Depends, Request, Response
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from starlette.concurrency import run_in_threadpool

from app.application.dto.interaction_event import InteractionEventDTO
from app.application.exceptions import UnsupportedInteraction
from app.application.use_cases.handle_interaction import HandleInteractionUseCase
from app.infrastructure.discord.signature_verify import verify_request_signature
from app.wiring.dependencies import get_handle_interaction_use_case
from app.core.config import settings


router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/interactions")
async def discord_interactions(
    request: Request,
    background_tasks: BackgroundTasks,
    use_case: HandleInteractionUseCase = Depends(get_handle_interaction_use_case),
) -> Response:
    body = await request.body()
    signature = request.headers.get("X-Signature-Ed25519")
    timestamp = request.headers.get("X-Signature-Timestamp")
    if not verify_request_signature(body, signature, timestamp, settings.DISCORD_PUBLIC_KEY, settings.ENV):
        return Response(content="Invalid request signature", status_code=401)

    try:
        payload = json.loads(body.decode("utf-8")) if body else {}
        interaction = InteractionEventDTO.model_validate(payload).to_interaction()
    except (ValueError, ValidationError):
        logger.exception("Failed to parse interaction body")
        return Response(status_code=400)

    try:
        reply = await run_in_threadpool(use_case.handle, interaction)
    except UnsupportedInteraction as e:
        logger.warning("Unsupported interaction", extra={"reason": str(e)})
        return JSONResponse({"error": "Unknown interaction"}, status_code=400)
    except Exception as e:
        logger.exception("Error handling interaction", extra={"error": str(e)})
        return Response(status_code=500)

    if reply.followup is not None:
        background_tasks.add_task(reply.followup)
    return JSONResponse(reply.body)
