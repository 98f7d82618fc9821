from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from core import db, middleware, settings
from core.log_config import configure_logging
from education import router as education_router
from tags import router as tags_router
from technologies import router as technologies_router
from work_history import router as work_history_router

configure_logging()


@asynccontextmanager
async def lifespan(_: FastAPI):
    # Initialize the DB pool once per process.
    await db.init_pool()
    try:
        yield
    finally:
        await db.close_pool()


app = FastAPI(lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.middleware("http")(middleware.log_requests)

app.include_router(tags_router.router, tags=["tags"])
app.include_router(technologies_router.router, tags=["technologies"])
app.include_router(education_router.router, tags=["education"])
app.include_router(work_history_router.router, tags=["work-history"])


@app.get("/health")
def health() -> dict:
    return {"status": "ok"}


@app.get("/")
def root() -> dict:
    return {"message": "cv backend api"}
