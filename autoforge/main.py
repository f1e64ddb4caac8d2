import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from autoforge.config import settings
from autoforge.routers import commands, projects, health
from autoforge.domain.errors import (
    ArchiveError,
    ConflictError,
    FilesystemError,
    NotFoundError,
    OperationTimeoutError,
    TemplateRenderError,
    ValidationError,
)
from autoforge.application.event_handlers import register_event_handlers

logger = logging.getLogger(__name__)

app = FastAPI(
    title="Autoforge API",
    description="Generates starter projects from natural-language commands",
    version=settings.VERSION,
)

# Configure logging and register domain event handlers on startup
@app.on_event("startup")
async def startup_event():
    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    register_event_handlers()
    logger.info("Autoforge API %s started (%s)", settings.VERSION, settings.ENVIRONMENT)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Allows all origins
    allow_credentials=True,
    allow_methods=["*"],  # Allows all methods
    allow_headers=["*"],  # Allows all headers
)


# Domain error handlers
@app.exception_handler(NotFoundError)
async def not_found_handler(request: Request, exc: NotFoundError):
    return JSONResponse(status_code=404, content={"error": str(exc)})


@app.exception_handler(ValidationError)
async def validation_error_handler(request: Request, exc: ValidationError):
    return JSONResponse(status_code=400, content={"error": str(exc)})


@app.exception_handler(ConflictError)
async def conflict_error_handler(request: Request, exc: ConflictError):
    return JSONResponse(status_code=409, content={"error": str(exc)})


@app.exception_handler(OperationTimeoutError)
async def timeout_error_handler(request: Request, exc: OperationTimeoutError):
    return JSONResponse(
        status_code=503,
        headers={"Retry-After": "1"},
        content={"error": str(exc), "retryable": True},
    )


@app.exception_handler(FilesystemError)
@app.exception_handler(ArchiveError)
@app.exception_handler(TemplateRenderError)
async def server_error_handler(request: Request, exc: Exception):
    logger.error("%s while handling %s: %s", type(exc).__name__, request.url.path, exc)
    return JSONResponse(status_code=500, content={"error": str(exc)})

# Include routers
app.include_router(health.router, tags=["Health"])  # Health check endpoints first
app.include_router(commands.router, tags=["Commands"])
app.include_router(projects.router, tags=["Projects"])

@app.get("/")
async def root():
    return {"message": "Welcome to Autoforge API. See /docs for API documentation"}
