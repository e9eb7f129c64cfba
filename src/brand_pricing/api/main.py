import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from ..config.settings import get_settings
from ..engine.exceptions import BackendFailureError, DuplicateBrandError, NotFoundError, PricingError
from .pricing_api import router as pricing_router
from .state import close_service

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Pricing API starting (backend=%s)", get_settings().backend)
    yield
    close_service()
    logger.info("Pricing API stopped")


app = FastAPI(
    title="Brand Pricing API",
    description="Resolves the sale price of a brand's product at a point in time",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(pricing_router)


def error_response(status_code: int, exc: PricingError) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"detail": {"code": exc.code, "message": exc.message}},
    )


@app.exception_handler(NotFoundError)
async def not_found_handler(request: Request, exc: NotFoundError):
    return error_response(404, exc)


@app.exception_handler(DuplicateBrandError)
async def duplicate_brand_handler(request: Request, exc: DuplicateBrandError):
    return error_response(409, exc)


@app.exception_handler(BackendFailureError)
async def backend_failure_handler(request: Request, exc: BackendFailureError):
    logger.error("Backend failure on %s: %s", request.url.path, exc.message)
    return error_response(503, exc)


@app.get("/")
async def root():
    return {"status": "online", "backend": get_settings().backend}
