import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from .core.settings import settings
from .db import Base, engine
from .errors import LedgerError
from .routers import dashboard, drivers, orders, routes

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

Base.metadata.create_all(bind=engine)

app = FastAPI(title="Delivery Ledger")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.BACKEND_CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.exception_handler(LedgerError)
def ledger_error_handler(request: Request, exc: LedgerError):
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail, "error": type(exc).__name__},
    )

@app.get("/health")
def health():
    return {"status":"ok"}

app.include_router(drivers.router, prefix="/drivers", tags=["drivers"])
app.include_router(orders.router, prefix="/orders", tags=["orders"])
app.include_router(routes.router, prefix="/routes", tags=["routes"])
app.include_router(dashboard.router, prefix="/dashboard", tags=["dashboard"])
