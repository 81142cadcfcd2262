from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from app.config import settings
from app.db import create_schema, ping
from app.errors import register_error_handlers
from app.logging_config import configure_logging
from app.routers import owners
from app.routers import properties
from structlog import get_logger

configure_logging()
logger = get_logger()

app = FastAPI(title="Real Estate Listing Service")
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
register_error_handlers(app)

SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "X-XSS-Protection": "1; mode=block",
    "Referrer-Policy": "strict-origin-when-cross-origin",
}

@app.middleware("http")
async def security_headers(request: Request, call_next):
    response = await call_next(request)
    for name, value in SECURITY_HEADERS.items():
        response.headers[name] = value
    return response

@app.on_event("startup")
async def startup_event():
    if settings.AUTO_CREATE_SCHEMA:
        await create_schema()
    logger.info("Service started", database=settings.DATABASE_URL.split("://")[0])

app.include_router(properties.router)
app.include_router(owners.router)

@app.get("/health")
async def root_health():
    database = "ok" if await ping() else "error"
    return {"status": "ok", "database": database}
