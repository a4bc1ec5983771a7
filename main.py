import logging

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import uvicorn

from attendai import config
from attendai.dependencies import create_db_and_tables
from attendai.exceptions import ScheduleExtractionError, StorageError, ValidationError
from attendai.routers import router

# Configure logging
logging.basicConfig(
    level=config.LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

# Create FastAPI app
app = FastAPI(
    title="AttendAI API",
    description="Class attendance tracking from timetable photos, with FastAPI, SQLModel, and SQLite",
    version="1.0.0",
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=[
        "GET",
        "POST",
        "PUT",
        "DELETE",
        "OPTIONS",
    ],
    allow_headers=[
        "Content-Type",
        "Authorization",
    ],
)

# Status code per extraction failure reason
EXTRACTION_STATUS = {
    "config": status.HTTP_500_INTERNAL_SERVER_ERROR,
    "empty": status.HTTP_422_UNPROCESSABLE_ENTITY,
    "upstream": status.HTTP_502_BAD_GATEWAY,
}


@app.exception_handler(ValidationError)
async def validation_error_handler(request: Request, exc: ValidationError):
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST, content={"detail": str(exc)}
    )


@app.exception_handler(ScheduleExtractionError)
async def extraction_error_handler(request: Request, exc: ScheduleExtractionError):
    return JSONResponse(
        status_code=EXTRACTION_STATUS.get(exc.reason, status.HTTP_502_BAD_GATEWAY),
        content={"detail": exc.message},
    )


@app.exception_handler(StorageError)
async def storage_error_handler(request: Request, exc: StorageError):
    logger.error(f"{request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": str(exc)},
    )


# Event handler to create database and tables on startup
@app.on_event("startup")
def on_startup():
    create_db_and_tables()


@app.get("/")
async def root():
    return {
        "message": "Welcome to the AttendAI API. Visit /docs for API documentation."
    }


app.include_router(router)


if __name__ == "__main__":
    uvicorn.run("main:app", host="127.0.0.1", port=8000, reload=True)
