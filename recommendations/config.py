from dataclasses import dataclass
import os

from recovery import STACK, STRATEGIES

from .exceptions import ConfigurationError


def _flag(value: str) -> bool:
    return value.strip().lower() in {"1", "true", "yes", "on"}


@dataclass
class RecommendationsConfig:
    api_key: str = ""
    base_url: str = "https://api.studio.nebius.com/v1"
    model: str = "mistralai/Devstral-Small-2505"
    max_tokens: int = 8000
    temperature: float = 0.2
    timeout: float = 120.0
    max_retries: int = 3
    retry_delay: float = 1.0
    plan_days: int = 3
    backfill_week: bool = True
    repair_strategy: str = STACK
    normalize_quotes: bool = False

    @classmethod
    def from_env(cls) -> "RecommendationsConfig":
        def _int(name: str, default: int) -> int:
            value = os.environ.get(name)
            return int(value) if value else default

        def _float(name: str, default: float) -> float:
            value = os.environ.get(name)
            return float(value) if value else default

        def _bool(name: str, default: bool) -> bool:
            value = os.environ.get(name)
            return _flag(value) if value else default

        repair_strategy = os.environ.get("RECOMMENDATIONS_REPAIR_STRATEGY", cls.repair_strategy)
        if repair_strategy not in STRATEGIES:
            raise ConfigurationError(
                f"Server configuration error: unknown repair strategy {repair_strategy!r}"
                f" (expected one of: {', '.join(STRATEGIES)})"
            )

        return cls(
            api_key=os.environ.get("NEBIUS_API_KEY", cls.api_key),
            base_url=os.environ.get("NEBIUS_BASE_URL", cls.base_url),
            model=os.environ.get("NEBIUS_MODEL", cls.model),
            max_tokens=_int("RECOMMENDATIONS_MAX_TOKENS", cls.max_tokens),
            temperature=_float("RECOMMENDATIONS_TEMPERATURE", cls.temperature),
            timeout=_float("RECOMMENDATIONS_TIMEOUT", cls.timeout),
            max_retries=_int("RECOMMENDATIONS_MAX_RETRIES", cls.max_retries),
            plan_days=_int("RECOMMENDATIONS_PLAN_DAYS", cls.plan_days),
            backfill_week=_bool("RECOMMENDATIONS_BACKFILL_WEEK", cls.backfill_week),
            repair_strategy=repair_strategy,
            normalize_quotes=_bool("RECOMMENDATIONS_NORMALIZE_QUOTES", cls.normalize_quotes),
        )
