import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, Path
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException
from dotenv import load_dotenv
import uvicorn

from database import check_connection, init_db
from routers import units_router, rentals_router, treasury_router
from schemas.unit import InterfaceResponse
from services.errors import RegistryError
from services.interface_service import supports_interface

# Load .env
load_dotenv()

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    if os.getenv("AUTO_CREATE_TABLES", "false").lower() == "true":
        init_db()
        logger.info("Registry tables created")
    yield


# App instance
app = FastAPI(title="Rental Registry", lifespan=lifespan)

# CORS
origins = [o for o in os.getenv("CORS_ORIGINS", "").split(",") if o]
app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(RegistryError)
async def registry_error_handler(request: Request, exc: RegistryError):
    logger.info("%s %s rejected: %s", request.method, request.url.path, exc.kind)
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.kind, "detail": exc.message},
    )


@app.get("/health", tags=["health"])
def health():
    database_ok = check_connection()
    return {"status": "ok" if database_ok else "degraded", "database": database_ok}


@app.get("/api/interfaces/{interface_id}", response_model=InterfaceResponse, tags=["interfaces"])
def get_interface_support(interface_id: str = Path(..., pattern=r"^0x[0-9a-fA-F]{8}$")):
    return InterfaceResponse(interface_id=interface_id.lower(), supported=supports_interface(interface_id))


app.include_router(units_router)
app.include_router(rentals_router)
app.include_router(treasury_router)


# 404 fallback for unknown routes; NotMinted keeps its own body
@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code == 404 and exc.detail == "Not Found":
        return JSONResponse(status_code=404, content={"error": "Route not found"})
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail},
        headers=getattr(exc, "headers", None),
    )


if __name__ == "__main__":
    port = int(os.getenv("PORT", 10000))
    uvicorn.run("main:app", host="0.0.0.0", port=port, reload=True)
