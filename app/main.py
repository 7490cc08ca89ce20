"""FastAPI application entry point for the NeuralPay Gateway."""

import logging

from fastapi import FastAPI, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app import __version__
from app.config import Settings, get_settings
from app.middleware import RequestIDMiddleware
from app.schemas import ErrorResponse, HealthResponse
from neuralpay_gateway.core.config import GatewayConfig
from neuralpay_gateway.core.logging import setup_logging
from neuralpay_gateway.core.provider import GeminiProvider, Provider
from neuralpay_gateway.core.routing import TaskRouter

logger = logging.getLogger(__name__)

DEFAULT_PROXY_PATH = "/api/gemini"

MAX_LOGGED_BODY_CHARS = 2000


def _load_settings_safe() -> Settings | None:
    """Load settings, returning None when config is unavailable (e.g. tests)."""
    try:
        return get_settings()
    except ValueError as e:
        logger.warning(f"Falling back to default configuration: {e}")
        return None


def create_app(provider: Provider | None = None, settings: Settings | None = None) -> FastAPI:
    """Build the FastAPI application around a task router.

    Args:
        provider: AI provider handle; defaults to a GeminiProvider built from settings.
        settings: Service settings; defaults to the environment-loaded singleton.
    """
    if settings is None:
        settings = _load_settings_safe()

    if settings is not None:
        setup_logging(settings.log_level)

    if provider is None:
        config = settings.to_gateway_config() if settings else GatewayConfig()
        provider = GeminiProvider(config)

    router = TaskRouter(provider)
    proxy_path = settings.proxy_path if settings else DEFAULT_PROXY_PATH
    log_bodies = settings.log_request_bodies_bool if settings else False

    application = FastAPI(
        title="NeuralPay Gateway",
        description="Task envelope proxy for chat, image editing, data analysis, translation, "
        "audio transcription and code generation",
        version=__version__,
    )
    application.state.router = router

    # CORS only when origins are configured; otherwise preflights get the 405 like any other OPTIONS
    allow_origins = settings.allow_origins_list if settings else []
    if allow_origins:
        application.add_middleware(
            CORSMiddleware,
            allow_origins=allow_origins,
            allow_credentials=False,
            allow_methods=["POST"],
            allow_headers=["*"],
        )

    # Added last so it wraps everything, including CORS responses
    application.add_middleware(RequestIDMiddleware)

    @application.get("/health")
    async def health() -> HealthResponse:
        """Health check endpoint."""
        return HealthResponse(ok=True, version=__version__)

    @application.exception_handler(StarletteHTTPException)
    async def envelope_method_not_allowed(request: Request, exc: StarletteHTTPException):
        """Answer any non-POST verb on the envelope path with the JSON 405 body."""
        if exc.status_code == 405 and request.url.path == proxy_path:
            return JSONResponse(
                status_code=405,
                content=ErrorResponse(error="Method Not Allowed").model_dump(exclude_none=True),
                headers=exc.headers,
            )
        return await http_exception_handler(request, exc)

    @application.post(proxy_path)
    async def task_envelope(request: Request) -> JSONResponse:
        """
        Task envelope endpoint.

        Accepts a ``{task, payload}`` JSON body, runs the matching task against
        the AI provider and returns its JSON result.
        """
        body = await request.body()
        if log_bodies:
            logger.debug("Envelope body: %s", body[:MAX_LOGGED_BODY_CHARS].decode("utf-8", errors="replace"))

        result = await router.handle(body)
        request.state.task = result.task.value if result.task else None
        return JSONResponse(status_code=result.status_code, content=result.body)

    return application


app = create_app()
