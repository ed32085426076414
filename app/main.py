from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from .db import Base, engine
from app.core.config import settings
from app import models  # noqa: F401  registers every table on Base.metadata
from app.api.companies import router as companies_router
from app.api.clay_webhooks import router as webhooks_router
from app.api.send import router as send_router
from app.api.clay_ingest import router as clay_ingest_router
import logging
from dotenv import load_dotenv

logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

load_dotenv()

app = FastAPI(
    title=settings.PROJECT_NAME,
    description="API for distributing company records across Clay webhooks",
    version="1.0.0"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"]
)


def create_tables():
    """Create the tables the API reads and writes"""
    Base.metadata.create_all(bind=engine)
    logger.info("Tables ready")

@app.on_event("startup")
async def startup_event():
    """Initialize database on startup"""
    create_tables()

@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request, exc):
    logger.warning(f"Rejected request on {request.url.path}: {exc.errors()}")
    return JSONResponse(
        status_code=400,
        content={"detail": jsonable_encoder(exc.errors())},
    )

@app.exception_handler(Exception)
async def global_exception_handler(request, exc):
    logger.exception(f"Unhandled error on {request.url.path}")
    return JSONResponse(
        status_code=500,
        content={"detail": f"Server error: {exc}"},
    )

@app.get("/")
def root():
    return {"message": settings.PROJECT_NAME}

app.include_router(companies_router, prefix=settings.API_PREFIX)
app.include_router(webhooks_router, prefix=settings.API_PREFIX)
app.include_router(send_router, prefix=settings.API_PREFIX)
app.include_router(clay_ingest_router, prefix=settings.API_PREFIX)

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
