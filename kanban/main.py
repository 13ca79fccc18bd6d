import logging
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from kanban.core.config import settings
from kanban.core.database import engine, Base
from kanban.core.errors import AppError
from kanban.routers import health, auth, boards, lists, tasks, activities, realtime
from kanban.services.broadcast_service import Broadcaster

logging.basicConfig(level=settings.LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger(__name__)

# Init DB
Base.metadata.create_all(bind=engine)

app = FastAPI(
    title="Kanban Board API",
    version="1.0.0"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Un seul broadcaster pour tout le process
app.state.broadcaster = Broadcaster()


@app.exception_handler(AppError)
def app_error_handler(request, exc: AppError):
    return JSONResponse(status_code=exc.status_code, content={"status": "error", "message": exc.message})


@app.exception_handler(RequestValidationError)
def validation_error_handler(request, exc: RequestValidationError):
    messages = ", ".join(error["msg"] for error in exc.errors())
    return JSONResponse(status_code=400, content={"status": "error", "message": messages or "Invalid request"})


@app.exception_handler(StarletteHTTPException)
def http_error_handler(request, exc: StarletteHTTPException):
    return JSONResponse(status_code=exc.status_code, content={"status": "error", "message": str(exc.detail)})


@app.exception_handler(Exception)
def unexpected_error_handler(request, exc: Exception):
    logger.exception("Unexpected error", exc_info=exc)
    return JSONResponse(status_code=500, content={"status": "error", "message": "Internal server error"})


# Routes
app.include_router(health.router, prefix="/api")
app.include_router(auth.router, prefix="/api")
app.include_router(boards.router, prefix="/api")
app.include_router(lists.router, prefix="/api")
app.include_router(tasks.router, prefix="/api")
app.include_router(activities.router, prefix="/api")
app.include_router(realtime.router, prefix="/api")
