"""FastAPI application factory."""

import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from fitcoach_advice.api.advice_models import AdviceRequestPayload
from fitcoach_advice.app_logging import configure_logging
from fitcoach_advice.config import parse_origins
from fitcoach_advice.containers import AppContainer


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    app = FastAPI(title="FitCoach Advice")
    app.state.container = container
    app.add_middleware(
        CORSMiddleware,
        allow_origins=parse_origins(container.settings.cors_allow_origins),
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/health")
    async def health(request: Request) -> dict[str, object]:
        """Liveness check with process uptime in seconds."""
        state_container: AppContainer = request.app.state.container
        return {"ok": True, "uptime": state_container.uptime_seconds()}

    @app.post("/warmup")
    async def warmup() -> dict[str, bool]:
        """Reserved for expensive initialization; currently a no-op."""
        return {"ok": True, "warmed": True}

    @app.post("/advice", response_model=None)
    async def advice(request: Request) -> dict[str, object] | JSONResponse:
        """Generate coaching text for the submitted totals and goals."""
        state_container: AppContainer = request.app.state.container
        raw = await request.body()
        try:
            body = await request.json() if raw.strip() else {}
        except (ValueError, RecursionError):
            return JSONResponse(status_code=400, content={"error": "invalid-json"})

        try:
            payload = AdviceRequestPayload.model_validate(body)
            result = state_container.advice_service.generate(payload.to_domain())
        except Exception:
            logger.exception("Advice generation failed")
            return JSONResponse(status_code=500, content={"error": "advice-failed"})
        return {"advice": result.text, "topicsUsed": result.topics_used}

    return app
