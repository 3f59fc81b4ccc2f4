from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from coursedesk.core.config import settings
from coursedesk.core.database import Base, engine
from coursedesk.core.exceptions import CatalogError
from coursedesk.core.logging import configure_logging
from coursedesk.endpoints import course, instructor, tag, cache_admin
from coursedesk.middleware.exceptions import (
    catalog_exception_handler,
    global_exception_handler,
    http_exception_handler,
    validation_exception_handler,
)
from coursedesk.middleware.logging import RequestLoggingMiddleware
from coursedesk.utils.service_registry import ServiceRegistry
import coursedesk.models  # noqa: F401  registers every table on Base.metadata
import logging

logger = logging.getLogger("coursedesk.main")

app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.VERSION,
)

app.state.services = ServiceRegistry()

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=["*"],
)

app.add_middleware(GZipMiddleware, minimum_size=1000)
app.add_middleware(RequestLoggingMiddleware)

app.add_exception_handler(CatalogError, catalog_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(StarletteHTTPException, http_exception_handler)
app.add_exception_handler(Exception, global_exception_handler)

app.include_router(course.router, prefix="/courses", tags=["Courses"])
app.include_router(instructor.router, prefix="/instructors", tags=["Instructors"])
app.include_router(tag.router, prefix="/tags", tags=["Tags"])
app.include_router(cache_admin.router, prefix="/cache", tags=["Cache"])

@app.on_event("startup")
async def startup_event():
    configure_logging()
    if settings.AUTO_CREATE_TABLES:
        Base.metadata.create_all(bind=engine)
        logger.info("Database tables ensured")

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
