from functools import lru_cache
import logging
from zoneinfo import ZoneInfo

from app.core.config import Settings, settings
from app.application.ports.holiday_source import HolidaySourcePort
from app.application.ports.interaction_platform import InteractionPlatformPort
from app.application.ports.recorder import RecorderPort
from app.application.ports.stage_continuity import StageContinuityPort
from app.application.use_cases.handle_interaction import HandleInteractionUseCase
from app.application.use_cases.invoice_form import FormFlowConfig, InvoiceFormUseCase
from app.application.utils.business_days import BusinessDayCalculator, HolidayCache
from app.infrastructure.discord.discord_client import DiscordClient
from app.infrastructure.discord.discord_platform import DiscordPlatform
from app.infrastructure.discord.mock_platform import MockDiscordPlatform
from app.infrastructure.holidays.holidays_jp_source import HolidaysJpSource
from app.infrastructure.holidays.static_source import StaticHolidaySource
from app.infrastructure.recorder.mock_recorder import MockRecorder
from app.infrastructure.recorder.webhook_recorder import WebhookRecorder
from app.infrastructure.store.memory_store import MemoryStageContinuity
from app.infrastructure.store.token_continuity import TokenStageContinuity


logger = logging.getLogger(__name__)


def build_form_flow_config(cfg: Settings) -> FormFlowConfig:
    """Tier defaults: dev/local answers inline; other tiers defer and clean up."""
    if cfg.is_dev:
        timeout, skip_cleanup, deferred = 2.0, True, False
    else:
        timeout, skip_cleanup, deferred = 5.0, False, True

    return FormFlowConfig(
        recorder_timeout_seconds=cfg.RECORDER_TIMEOUT_SECONDS if cfg.RECORDER_TIMEOUT_SECONDS is not None else timeout,
        skip_intermediate_cleanup=(
            cfg.SKIP_INTERMEDIATE_CLEANUP if cfg.SKIP_INTERMEDIATE_CLEANUP is not None else skip_cleanup
        ),
        deferred_forwarding=cfg.DEFERRED_FORWARDING if cfg.DEFERRED_FORWARDING is not None else deferred,
    )


@lru_cache
def get_form_flow_config() -> FormFlowConfig:
    config = build_form_flow_config(settings)
    logger.info(
        "ENV=%s recorder_timeout=%ss skip_cleanup=%s deferred=%s",
        settings.ENV,
        config.recorder_timeout_seconds,
        config.skip_intermediate_cleanup,
        config.deferred_forwarding,
    )
    return config


def get_holiday_source() -> HolidaySourcePort:
    if not settings.HOLIDAY_API_URL_TEMPLATE:
        logger.info("Using StaticHolidaySource (HOLIDAY_API_URL_TEMPLATE empty)")
        return StaticHolidaySource()
    return HolidaysJpSource()


@lru_cache
def get_business_day_calculator() -> BusinessDayCalculator:
    # One cache per process.
    return BusinessDayCalculator(HolidayCache(get_holiday_source()))


@lru_cache
def get_recorder() -> RecorderPort:
    config = get_form_flow_config()
    if not settings.RECORDER_WEBHOOK_URL:
        if settings.is_dev:
            logger.info("Using MockRecorder (RECORDER_WEBHOOK_URL missing, ENV=dev/local)")
            return MockRecorder()
        raise ValueError("RECORDER_WEBHOOK_URL is required to record invoices.")
    return WebhookRecorder(url=settings.RECORDER_WEBHOOK_URL, timeout=config.recorder_timeout_seconds)


@lru_cache
def get_stage_continuity() -> StageContinuityPort:
    if settings.STAGE_STORE.lower() == "memory":
        logger.info("Using MemoryStageContinuity (ttl=%ss)", settings.STAGE_TTL_SECONDS)
        return MemoryStageContinuity(ttl_seconds=settings.STAGE_TTL_SECONDS)
    return TokenStageContinuity()


@lru_cache
def get_interaction_platform() -> InteractionPlatformPort:
    if settings.is_dev and not get_form_flow_config().deferred_forwarding:
        logger.info("Using MockDiscordPlatform (ENV=dev/local, inline replies)")
        return MockDiscordPlatform()
    return DiscordPlatform(client=DiscordClient(api_base_url=settings.DISCORD_API_BASE_URL))


def get_invoice_form_use_case() -> InvoiceFormUseCase:
    return InvoiceFormUseCase(
        calculator=get_business_day_calculator(),
        recorder=get_recorder(),
        continuity=get_stage_continuity(),
        config=get_form_flow_config(),
        timezone=ZoneInfo(settings.BUSINESS_TIMEZONE),
    )


def get_handle_interaction_use_case() -> HandleInteractionUseCase:
    return HandleInteractionUseCase(
        form=get_invoice_form_use_case(),
        platform=get_interaction_platform(),
    )
