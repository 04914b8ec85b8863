import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from . import seed
from .auth import router as auth_router
from .core import config, db, schema
from .houses import router as houses_router
from .newsletter import router as newsletter_router
from .pages import router as pages_router
from .reels import router as reels_router
from .settings import router as settings_router
from .uploads import router as uploads_router

logging.basicConfig(
    level=config.log_level(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logging.getLogger("httpx").setLevel(logging.WARNING)
logging.getLogger("httpcore").setLevel(logging.WARNING)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_: FastAPI):
    # Initialize the DB pool once per process, then make sure the schema
    # and default rows exist before serving requests.
    await db.init_pool()
    try:
        await schema.init_schema()
        await seed.seed_defaults()
        yield
    finally:
        await db.close_pool()


app = FastAPI(title="DIGI Homes API", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[config.frontend_url()],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(Exception)
async def unhandled_exception(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("unhandled_error method=%s path=%s", request.method, request.url.path)
    body = {"detail": "Something went wrong!"}
    if config.is_development():
        body["message"] = str(exc)
    return JSONResponse(status_code=500, content=body)


app.include_router(auth_router.router, tags=["auth"])
app.include_router(houses_router.router, tags=["houses"])
app.include_router(newsletter_router.router, tags=["newsletter"])
app.include_router(uploads_router.router, tags=["upload"])
app.include_router(settings_router.router, tags=["settings"])
app.include_router(pages_router.router, tags=["pages"])
app.include_router(reels_router.router, tags=["reels"])

# Locally stored images; bucket-hosted images carry absolute URLs instead.
_uploads_dir = config.uploads_dir()
_uploads_dir.mkdir(parents=True, exist_ok=True)
app.mount("/uploads", StaticFiles(directory=_uploads_dir), name="uploads")


@app.get("/health")
@app.get("/api/health")
def health() -> dict:
    return {"status": "ok", "message": "DIGI Homes API is running"}


@app.get("/")
def root() -> dict:
    return {"message": "digihomes api"}
