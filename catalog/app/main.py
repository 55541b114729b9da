import os
import time
from typing import List
from fastapi import FastAPI, APIRouter, Depends, Path, Request, Response, status
from fastapi.responses import PlainTextResponse
from prometheus_client import Counter, Histogram, generate_latest, CONTENT_TYPE_LATEST
from sqlalchemy.orm import Session

from .db import get_session, init_db
from .logging_config import setup_logging
from .repository import ProductRepository
from .schemas import ProductIn, ProductOut
from .service import ProductService

APP_NAME = "catalog"
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_FILE = os.getenv("LOG_FILE", "").strip() or None

# Ids are signed 64-bit (BIGINT); anything outside is rejected with 422 before any query.
ID_MIN = -(2**63)
ID_MAX = 2**63 - 1

def normalize_prefix(raw: str) -> str:
    """'api/catalog/' -> '/api/catalog'; blank stays blank."""
    prefix = (raw or "").strip()
    if prefix and not prefix.startswith("/"):
        prefix = "/" + prefix
    return prefix.rstrip("/")

# Optional prefix for routes. Leave empty ("") if your Gateway strips it.
API_PREFIX = normalize_prefix(os.getenv("API_PREFIX", ""))

setup_logging(LOG_LEVEL, LOG_FILE)

app = FastAPI(title=APP_NAME)
router = APIRouter(prefix=f"{API_PREFIX}/api/v1/products", tags=["products"])

# ---- Startup: ensure schema + tables exist (idempotent) ----
@app.on_event("startup")
def on_startup():
    init_db()

# ---- Prometheus metrics ----
REQS = Counter("http_requests_total", "Total HTTP requests", ["service", "path", "method", "status"])
LAT  = Histogram("http_request_duration_seconds", "Request latency", ["service", "path", "method"])
WRITES = Counter("catalog_product_writes_total", "Successful product writes", ["op"])

@app.middleware("http")
async def metrics_middleware(request: Request, call_next):
    start = time.time()
    response = await call_next(request)
    # Label by route template (/api/v1/products/{pid}) so ids don't become series.
    route = request.scope.get("route")
    path = route.path if route is not None else "unmatched"
    REQS.labels(APP_NAME, path, request.method, response.status_code).inc()
    LAT.labels(APP_NAME, path, request.method).observe(time.time() - start)
    return response

# ---- Wiring: session -> repository -> service ----
def get_product_repository(session: Session = Depends(get_session)) -> ProductRepository:
    return ProductRepository(session)

def get_product_service(repo: ProductRepository = Depends(get_product_repository)) -> ProductService:
    return ProductService(repo)

@app.get("/health", response_class=PlainTextResponse)
def health():
    return "ok"

@app.get("/metrics")
def metrics():
    return Response(generate_latest(), media_type=CONTENT_TYPE_LATEST)

@router.get("", response_model=List[ProductOut])
def list_products(service: ProductService = Depends(get_product_service)):
    return service.list_all()

@router.get("/{pid}", response_model=ProductOut)
def get_product(
    pid: int = Path(ge=ID_MIN, le=ID_MAX),
    service: ProductService = Depends(get_product_service),
):
    p = service.get_by_id(pid)
    if p is None:
        return Response(status_code=status.HTTP_404_NOT_FOUND)
    return p

@router.post("", response_model=ProductOut, status_code=status.HTTP_201_CREATED)
def create_product(payload: ProductIn, service: ProductService = Depends(get_product_service)):
    p = service.create(payload)
    WRITES.labels(op="create").inc()
    return p

@router.put("/{pid}", response_model=ProductOut)
def update_product(
    payload: ProductIn,
    pid: int = Path(ge=ID_MIN, le=ID_MAX),
    service: ProductService = Depends(get_product_service),
):
    p = service.update(pid, payload)
    if p is None:
        return Response(status_code=status.HTTP_404_NOT_FOUND)
    WRITES.labels(op="update").inc()
    return p

@router.delete("/{pid}", status_code=status.HTTP_204_NO_CONTENT)
def delete_product(
    pid: int = Path(ge=ID_MIN, le=ID_MAX),
    service: ProductService = Depends(get_product_service),
):
    if not service.delete(pid):
        return Response(status_code=status.HTTP_404_NOT_FOUND)
    WRITES.labels(op="delete").inc()
    return Response(status_code=status.HTTP_204_NO_CONTENT)

app.include_router(router)
