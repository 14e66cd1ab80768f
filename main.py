import logging
from pathlib import Path

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.staticfiles import StaticFiles

from coursehub.core.config import settings
from coursehub.core.database import SessionLocal
from coursehub.core.exceptions import AppError
from coursehub.core.logging import configure_logging
from coursehub.endpoints import assessment, auth, certificate, content, course, enrollment, forum, module, progress, user, utility
from coursehub.middleware.exceptions import app_error_handler, global_exception_handler, validation_exception_handler
from coursehub.middleware.logging import RequestLoggingMiddleware
from coursehub.services.user import user_service

configure_logging()
logger = logging.getLogger("coursehub")

app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.VERSION,
    openapi_url=f"{settings.API_V1_STR}/openapi.json"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["*"],
)

app.add_middleware(GZipMiddleware, minimum_size=1000)
app.add_middleware(RequestLoggingMiddleware)

app.add_exception_handler(AppError, app_error_handler)
app.add_exception_handler(Exception, global_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)

app.include_router(utility.router, tags=["Utility"])
app.include_router(auth.router, tags=["Auth"])
app.include_router(user.router, prefix="/users", tags=["Users"])
app.include_router(course.router, prefix="/courses", tags=["Courses"])
app.include_router(module.router, prefix="/modulos", tags=["Modules"])
app.include_router(content.router)
app.include_router(forum.router, prefix="/foruns", tags=["Forums"])
app.include_router(assessment.router)
app.include_router(enrollment.router, prefix="/enrollments", tags=["Enrollments"])
app.include_router(progress.router, prefix="/progress", tags=["Progress"])
app.include_router(certificate.router, prefix="/certificates", tags=["Certificates"])

Path(settings.UPLOAD_DIR).mkdir(parents=True, exist_ok=True)
app.mount(settings.UPLOAD_URL_PREFIX, StaticFiles(directory=settings.UPLOAD_DIR), name="uploads")

@app.on_event("startup")
def startup_event():
    if not (settings.FIRST_ADMIN_EMAIL and settings.FIRST_ADMIN_PASSWORD):
        return
    db = SessionLocal()
    try:
        user_service.ensure_first_admin(db)
    finally:
        db.close()

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
