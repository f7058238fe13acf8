import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from tablemaster.config import get_settings
from tablemaster.core.redis import close_redis
from tablemaster.errors import TableMasterError
from tablemaster.routers import (
    admin,
    auth,
    change_requests,
    guests,
    menu,
    orders,
    prefixed_menus,
    request_access,
    tables,
    users,
)

settings = get_settings()

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    try:
        yield
    finally:
        close_redis()


app = FastAPI(title="TableMaster API", version="1.0.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[settings.frontend_url],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(TableMasterError)
async def tablemaster_exception_handler(request: Request, exc: TableMasterError):
    """Workflow and Record Store errors as {"detail": message}; 5xx are logged as errors."""
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message, exc_info=exc)
    else:
        logger.warning("%s %s -> %s: %s", request.method, request.url.path, exc.status_code, exc.message)
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


app.include_router(auth.router)
app.include_router(users.router)
app.include_router(request_access.router)
app.include_router(change_requests.router)
app.include_router(admin.router)
app.include_router(tables.router)
app.include_router(guests.router)
app.include_router(menu.router)
app.include_router(prefixed_menus.router)
app.include_router(orders.router)


@app.get("/")
def root():
    return {"message": "TableMaster API", "docs": "/docs"}
