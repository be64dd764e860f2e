import time

from fastapi import FastAPI, Request
from loguru import logger

from mealwise.api.meal_plans import router as meal_plans_router
from mealwise.config.settings import settings
from mealwise.core.logger import setup_logger

# Initialize logger
setup_logger(level=settings.log_level, log_file=settings.log_file)

app = FastAPI(title="Mealwise")

app.include_router(meal_plans_router)

logger.bind(context="http").info("FastAPI application initialized")


@app.get("/health")
def health():
    return {"status": "ok", "service": "mealwise"}


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Tag every record emitted while serving a request with its method and path."""
    started = time.perf_counter()
    with logger.contextualize(context="http", method=request.method, path=request.url.path):
        response = await call_next(request)
        elapsed_ms = round((time.perf_counter() - started) * 1000, 1)
        logger.bind(status=response.status_code, elapsed_ms=elapsed_ms).debug(
            f"{request.method} {request.url.path} -> {response.status_code} ({elapsed_ms} ms)"
        )
    return response
