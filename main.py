import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.middleware.cors import CORSMiddleware
from core.config_loader import settings
from core.logging_config import setup_logging

from auth.routes.auth_router import auth_router
from employee.router import employee_router
from department.router import department_router
from category.router import category_router
from question.router import question_router
from reviewcycle.router import reviewcycle_router
from assignment.router import assignment_router
from feedback.router import feedback_router
from report.router import report_router
import models_bootstrap

setup_logging()
logger = logging.getLogger(__name__)

openapi_tags = [
    {
        "name": "Review Cycles",
        "description": "Review cycles and assignment generation",
    },
    {
        "name": "Health Checks",
        "description": "Application health checks",
    }
]

app = FastAPI(title=settings.PROJECT_NAME, openapi_tags=openapi_tags)

if settings.cors_origins:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[
            str(origin).strip("/") for origin in settings.cors_origins
        ],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

for router in (
    auth_router,
    employee_router,
    department_router,
    category_router,
    question_router,
    reviewcycle_router,
    assignment_router,
    feedback_router,
    report_router,
):
    app.include_router(router, prefix=settings.API_PREFIX)


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("unhandled error", extra={"path": request.url.path, "method": request.method})
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


@app.get("/health", tags=['Health Checks'])
def read_root():
    return {"health": "true"}
