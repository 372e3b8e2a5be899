from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from journey.core.config import settings
from journey.core.database import SessionLocal
from journey.core.exceptions import (
    AlreadyConfirmedError,
    NotFoundError,
    StorageError,
    ValidationError,
)
from journey.core.init_db import init_db
from journey.core.logger import logger
from journey.core.redis_lifecyle import init_redis_client, close_redis
from journey.repositories.trip_repository import TripRepository
from journey.routes import api_router
from journey.services.email_service import EmailNotifier
from journey.services.notifications.dispatcher import NotificationDispatcher

app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.PROJECT_VERSION,
    description=settings.PROJECT_DESCRIPTION,
    openapi_url=f"/openapi.json"
)

# Set all CORS enabled origins
app.add_middleware(
    CORSMiddleware,
    allow_origin_regex=r"^(http:\/\/localhost(:\d{1,5})?|http:\/\/127\.0\.0\.1(:\d{1,5})?)$",
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(ValidationError)
async def validation_error_handler(request: Request, exc: ValidationError):
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"message": exc.message})


@app.exception_handler(NotFoundError)
async def not_found_handler(request: Request, exc: NotFoundError):
    return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"message": exc.message})


@app.exception_handler(AlreadyConfirmedError)
async def already_confirmed_handler(request: Request, exc: AlreadyConfirmedError):
    return JSONResponse(status_code=status.HTTP_409_CONFLICT, content={"message": exc.message})


@app.exception_handler(StorageError)
async def storage_error_handler(request: Request, exc: StorageError):
    # already logged with context by the repository
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"message": "Something went wrong, try again"},
    )


# Include all API routes
app.include_router(api_router)


@app.get("/")
async def root():
    return {"message": "Welcome to Journey API"}


@app.get("/health")
async def health_check():
    return {"status": "healthy"}


@app.on_event("startup")
async def startup_event():
    if settings.DB_AUTO_CREATE:
        await init_db()
    await init_redis_client()

    repository = TripRepository(SessionLocal)
    dispatcher = NotificationDispatcher(
        EmailNotifier(repository),
        max_queue_size=settings.NOTIFICATION_QUEUE_SIZE,
    )
    dispatcher.start()

    app.state.repository = repository
    app.state.dispatcher = dispatcher
    logger.info(f"{settings.PROJECT_NAME} started")


@app.on_event("shutdown")
async def shutdown_event():
    await app.state.dispatcher.stop(drain_timeout=settings.NOTIFICATION_DRAIN_TIMEOUT)
    await close_redis()
