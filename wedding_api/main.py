import logging
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, Request
from fastapi.responses import Response

from wedding_api.config import settings
from wedding_api.database import create_tables
from wedding_api.dependencies import Bindings, get_bindings
from wedding_api.seed import seed_suggestions
from wedding_api.routers.admin import router as admin_router
from wedding_api.routers.photos import router as photos_router
from wedding_api.routers.suggestions import router as suggestions_router
from wedding_api.utils.exceptions import register_exception_handlers
from wedding_api.utils.response import UTF8JSONResponse, add_cors_headers, success_response

logging.basicConfig(level=settings.log_level.upper())
logger = logging.getLogger(__name__)

VERSION = "0.1.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    for url in {settings.kv_database_url, settings.blob_database_url} - {""}:
        await create_tables(url)

    bindings = get_bindings()
    if settings.seed_default_suggestions and bindings.kv is not None:
        await seed_suggestions(bindings.kv)
    yield


app = FastAPI(
    title="Wedding Site API",
    description="Guest photo uploads and the things-to-do list for the wedding site",
    version=VERSION,
    lifespan=lifespan,
    default_response_class=UTF8JSONResponse,
)


@app.middleware("http")
async def cors_headers(request: Request, call_next):
    if request.method == "OPTIONS":
        response = Response(status_code=204)
    else:
        response = await call_next(request)
    return add_cors_headers(response)


register_exception_handlers(app)

app.include_router(photos_router, prefix="/api")
app.include_router(suggestions_router, prefix="/api")
app.include_router(admin_router, prefix="/api")


@app.get("/health")
async def health_check(bindings: Bindings = Depends(get_bindings)):
    return success_response(data={
        "service": "wedding-api",
        "version": VERSION,
        "kv": bindings.kv is not None,
        "blobs": bindings.blobs is not None,
    })
