import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from splitbook.api.v1.api import api_router
from splitbook.core.config import settings
from splitbook.core.logging import configure_logging
from splitbook.db.mongo import close_mongo_connection, connect_to_mongo
from splitbook.utils.ledger_validation import LedgerIntegrityError

configure_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    await connect_to_mongo()
    yield
    await close_mongo_connection()


app = FastAPI(
    lifespan=lifespan,
    title=settings.PROJECT_NAME,
    version=settings.PROJECT_VERSION,
    description=settings.DESCRIPTION,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.exception_handler(LedgerIntegrityError)
async def ledger_integrity_handler(request: Request, exc: LedgerIntegrityError):
    logger.error("Ledger integrity error on %s: %s", request.url.path, exc)
    return JSONResponse(
        status_code=422,
        content={"detail": str(exc)},
    )

@app.get("/")
async def root():
    return {"message": "Welcome to Splitbook API"}

@app.get("/health")
async def health():
    return {"status": "ok"}

app.include_router(api_router, prefix=settings.API_V1_STR)
