import logging
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic_settings import BaseSettings
from pydantic import ConfigDict
from typing import Optional

class Settings(BaseSettings):
    # Environment
    ENV: str = "development"
    CONFIG_STRICT: bool = False
    LOG_LEVEL: str = "INFO"

    # Business calendar (plan tenure and withdrawal window are counted here)
    BUSINESS_TIMEZONE: str = "America/Sao_Paulo"

    # Withdrawal window: 24h starting at 00:00 on this day of every month
    WITHDRAWAL_WINDOW_ENFORCED: bool = False
    WITHDRAWAL_WINDOW_DAY: int = 3

    # Token purchases (R$ 1,00 = 720 tokens)
    TOKENS_PER_BRL: int = 720

    model_config = ConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )
settings = Settings()


def validate_config(strict: Optional[bool] = None, settings_obj: Optional[Settings] = None, logger: Optional[logging.Logger] = None) -> bool:
    """Validate engine configuration.

    In strict mode raise RuntimeError; otherwise emit warnings only.
    """
    cfg = settings_obj or settings
    log = logger or logging.getLogger("orbitrum")
    strict_mode = strict if strict is not None else getattr(cfg, "CONFIG_STRICT", False)

    problems = []
    try:
        ZoneInfo(cfg.BUSINESS_TIMEZONE)
    except (ZoneInfoNotFoundError, ValueError):
        problems.append(f"BUSINESS_TIMEZONE is not a known time zone: {cfg.BUSINESS_TIMEZONE}")

    # Day 29+ does not exist in every month
    if not 1 <= cfg.WITHDRAWAL_WINDOW_DAY <= 28:
        problems.append("WITHDRAWAL_WINDOW_DAY must be between 1 and 28")

    if cfg.TOKENS_PER_BRL <= 0:
        problems.append("TOKENS_PER_BRL must be positive")

    if problems:
        message = f"Invalid configuration: {'; '.join(problems)}"
        if strict_mode:
            raise RuntimeError(message)
        log.warning(message)
        return False

    return True
