import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from propdoc.config import settings
from propdoc.database import Base, engine, SessionLocal
# routers
from propdoc.routers import auth
from propdoc.routers import templates
from propdoc.routers import documents
from propdoc.routers import logs
from propdoc.routers import webhook
# models, registered on Base.metadata for create_all
from propdoc.models.user import User
from propdoc.models.template import Template
from propdoc.models.document import Document
from propdoc.models.audit_log import AuditLog
from propdoc.models.transaction import Transaction
from propdoc.services.seed_service import seed_database

logging.basicConfig(level=settings.LOG_LEVEL)

@asynccontextmanager
async def lifespan(app: FastAPI):
    # Tables are created on startup; there is no migration tooling
    Base.metadata.create_all(bind=engine)
    if settings.SEED_DATABASE:
        db = SessionLocal()
        try:
            seed_database(db)
        finally:
            db.close()
    yield

app = FastAPI(title="PropDoc", lifespan=lifespan)

app.include_router(auth.router)
app.include_router(templates.router)
app.include_router(documents.router)
app.include_router(logs.router)
app.include_router(webhook.router)

@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(status_code=exc.status_code, content={"message": exc.detail}, headers=exc.headers)

@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    # Only the first violation is reported
    first = exc.errors()[0] if exc.errors() else {}
    field = ".".join(str(part) for part in first.get("loc", ())[1:]) or None
    return JSONResponse(status_code=400, content={"message": first.get("msg", "Invalid request"), "field": field})

@app.exception_handler(Exception)
async def internal_error_handler(request: Request, exc: Exception):
    logging.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(status_code=500, content={"message": "Internal server error"})

@app.get("/")
def home():
    return {"message": "PropDoc API running"}
