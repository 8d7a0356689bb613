"""
FastAPI entrypoint for the Messenger backend application.
"""
import logging
from fastapi import FastAPI, Request, Response, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from messenger.core.config import settings
from messenger.core.logging_config import configure_logging
from messenger.core.token_registry import TokenRegistry
from messenger.api.router import api_router

configure_logging()
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Messenger API",
    description="Backend API for direct messaging and user administration",
    version="1.0.0"
)

# Tokens currently logged in; shared by every request of this process
app.state.token_registry = TokenRegistry()

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Malformed query parameters or bodies are plain bad requests."""
    logger.debug(f"Rejected request to {request.url.path}: {exc.errors()}")
    return Response(status_code=status.HTTP_400_BAD_REQUEST)


# Include API routes
app.include_router(api_router, prefix="/api")


@app.get("/")
async def root():
    """Health check endpoint."""
    return {"message": "Messenger API is running"}


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "healthy"}
