# taskbridge/main.py
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import logging

from taskbridge.config import SecurityConfig, WorkflowConfig
from taskbridge.database import Base, engine
from taskbridge.routers import auth, user, task, notification, message, admin, dashboard
from taskbridge.services.errors import TaskBridgeError
import taskbridge.models  # noqa: F401  (registers every table on Base.metadata)

logger = logging.getLogger(__name__)

app = FastAPI(title="TaskBridge API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=SecurityConfig.get_cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(TaskBridgeError)
async def taskbridge_error_handler(request: Request, exc: TaskBridgeError):
    if exc.status_code >= 409:
        logger.info("%s %s rejected: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


# Route registration
app.include_router(auth.router, prefix="/auth", tags=["Authentication"])
app.include_router(user.router, prefix="/users", tags=["Users"])
app.include_router(task.router, prefix="/tasks", tags=["Tasks"])
app.include_router(notification.router, prefix="/notifications", tags=["Notifications"])
app.include_router(message.router, prefix="/messages", tags=["Messages"])
app.include_router(admin.router, prefix="/admin", tags=["Admin"])
app.include_router(dashboard.router, prefix="/dashboard", tags=["Dashboard"])


@app.on_event("startup")
def startup_event():
    """Create any missing tables so a fresh SQLite file is usable"""
    Base.metadata.create_all(bind=engine)
    logger.info("TaskBridge API started")


# Root route
@app.get("/")
def read_root():
    return {"message": "TaskBridge API"}


@app.get("/health")
def health():
    return {"status": "ok"}


@app.get("/config/client")
def client_config():
    """Polling cadence and display constants for the web client"""
    return WorkflowConfig.client_config()
