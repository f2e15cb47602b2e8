import logging

from fastapi import FastAPI, HTTPException

from .config import RecommendationsConfig
from .exceptions import (
    CompletionAuthError,
    CompletionError,
    ConfigurationError,
    InvalidPlanError,
)
from .models import (
    ConnectionStatus,
    ModelListResponse,
    RecommendationRequest,
    RecommendationResponse,
)
from .service import RecommendationService


logger = logging.getLogger(__name__)


def _to_http_error(exc: Exception) -> HTTPException:
    if isinstance(exc, ConfigurationError):
        return HTTPException(status_code=500, detail=exc.message)
    if isinstance(exc, CompletionAuthError):
        return HTTPException(status_code=401, detail=exc.message)
    if isinstance(exc, CompletionError):
        return HTTPException(status_code=exc.status_code or 502, detail=str(exc))
    if isinstance(exc, InvalidPlanError):
        return HTTPException(status_code=500, detail=exc.message)
    return HTTPException(status_code=500, detail=f"Failed to generate meal recommendations: {exc}")


def create_app(
    config: RecommendationsConfig | None = None,
    service: RecommendationService | None = None,
) -> FastAPI:
    service = service or RecommendationService(config=config)
    app = FastAPI(
        title="Meal Recommendation Service",
        version="1.0.0",
        description="AI-assisted family meal plans with truncation-tolerant JSON recovery.",
    )

    @app.get("/health")
    def health() -> dict:
        return {"status": "ok"}

    @app.post("/recommendations", response_model=RecommendationResponse)
    def recommendations(request: RecommendationRequest) -> RecommendationResponse:
        try:
            return service.generate(request)
        except InvalidPlanError as exc:
            logger.error(f"Error cleaning up JSON response: {exc.details}")
            logger.info(f"Problematic response: {exc.result.raw[:500]}...")
            raise _to_http_error(exc) from exc
        except Exception as exc:
            logger.error(f"Recommendations route error: {exc}")
            raise _to_http_error(exc) from exc

    @app.get("/models", response_model=ModelListResponse)
    def models() -> ModelListResponse:
        try:
            return service.list_models()
        except Exception as exc:
            logger.error(f"Error fetching models: {exc}")
            raise _to_http_error(exc) from exc

    @app.get("/test-connection", response_model=ConnectionStatus)
    def test_connection() -> ConnectionStatus:
        try:
            return service.check_connection()
        except Exception as exc:
            logger.error(f"Connection test failed: {exc}")
            raise _to_http_error(exc) from exc

    return app


app = create_app()
