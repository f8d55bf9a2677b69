import logging
from fastapi import FastAPI
from coursepages.core.config import settings
from coursepages.core.database import engine, Base
from coursepages.models import author, course, page  # noqa: F401 (tables)
from coursepages.routers import health, auth, courses, pages, search

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s"
)

# Init DB
Base.metadata.create_all(bind=engine)

app = FastAPI(
    title="Course Pages API",
    version="0.1.0"
)

# Routes
app.include_router(health.router, prefix="/health")
app.include_router(auth.router)
app.include_router(courses.router)
app.include_router(pages.router)
app.include_router(search.router)
