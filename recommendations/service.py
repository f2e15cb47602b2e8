from __future__ import annotations

import logging
from typing import Any

from recovery import backfill_weekly_plan, recover_json

from .completion_client import CompletionClient
from .config import RecommendationsConfig
from .exceptions import InvalidPlanError
from .models import (
    ConnectionStatus,
    ModelInfo,
    ModelListResponse,
    RecommendationRequest,
    RecommendationResponse,
)
from .prompts import SYSTEM_PROMPT, build_user_prompt


logger = logging.getLogger(__name__)


class RecommendationService:
    def __init__(
        self,
        config: RecommendationsConfig | None = None,
        client: CompletionClient | None = None,
    ):
        self.config = config or RecommendationsConfig.from_env()
        self._client = client

    @property
    def client(self) -> CompletionClient:
        # Created lazily so the app can start (and report) without an API key.
        if self._client is None:
            self._client = CompletionClient(self.config)
        return self._client

    def generate(self, request: RecommendationRequest) -> RecommendationResponse:
        logger.info(f"Received meal plan request for {len(request.family_members)} family members")

        user_prompt = build_user_prompt(request, days=self.config.plan_days)
        completion = self.client.complete(system_prompt=SYSTEM_PROMPT, user_prompt=user_prompt)
        logger.debug(f"Raw AI response length: {len(completion.content)}")

        result = recover_json(
            completion.content,
            strategy=self.config.repair_strategy,
            normalize_quotes=self.config.normalize_quotes,
        )
        if not result.ok or not isinstance(result.value, dict):
            raise InvalidPlanError(result)

        plan: dict[str, Any] = result.value
        days_returned = _count_days(plan)
        if self.config.backfill_week:
            plan = backfill_weekly_plan(plan)

        return RecommendationResponse(
            recommendations=plan,
            repaired=result.was_repaired,
            metadata={
                "model": completion.model,
                "finish_reason": completion.finish_reason,
                "recovery_status": result.status.value,
                "days_requested": self.config.plan_days,
                "days_returned": days_returned,
                "days_total": _count_days(plan),
                "input_tokens": completion.input_tokens,
                "output_tokens": completion.output_tokens,
            },
        )

    def list_models(self) -> ModelListResponse:
        models = self.client.list_models()
        logger.info(f"Available models: {len(models)}")
        return ModelListResponse(
            models=[
                ModelInfo(id=model.id, owned_by=getattr(model, "owned_by", "") or "")
                for model in models
            ]
        )

    def check_connection(self) -> ConnectionStatus:
        models = self.client.list_models()
        return ConnectionStatus(
            status="API key works!",
            key_prefix=f"{self.config.api_key[:10]}...",
            models_count=len(models),
        )


def _count_days(plan: dict[str, Any]) -> int:
    week = plan.get("weeklyPlan")
    return len(week) if isinstance(week, dict) else 0
