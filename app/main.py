import logging
from contextlib import asynccontextmanager
from datetime import datetime

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from app.config.database import SessionLocal, init_db
from app.config.settings import settings
from app.routes import (
    auth,
    coupons,
    categories,
    sales,
    inventory,
    carts,
    orders,
    reviews,
    inquiries,
    deposits,
    favorites,
    users,
    analytics,
)

# ============= LOGGING =============
logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.DB_AUTO_CREATE:
        init_db()
    logger.info("%s %s iniciada", settings.API_TITLE, settings.API_VERSION)
    yield


app = FastAPI(
    title=settings.API_TITLE,
    description="API de Base de Datos para Shopping Mall",
    version=settings.API_VERSION,
    lifespan=lifespan,
)

# ============= CORS =============
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ============= ERRORES DE BD =============
@app.exception_handler(SQLAlchemyError)
def database_error_handler(request: Request, exc: SQLAlchemyError):
    logger.error("Error en base de datos en %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(
        status_code=500,
        content={"detail": f"Error en base de datos: {exc.__class__.__name__}"},
    )


# ============= ROUTERS =============
app.include_router(auth.router)
app.include_router(coupons.router)
app.include_router(categories.router)
app.include_router(sales.router)
app.include_router(inventory.router)
app.include_router(carts.router)
app.include_router(orders.router)
app.include_router(reviews.router)
app.include_router(inquiries.router)
app.include_router(deposits.router)
app.include_router(favorites.router)
app.include_router(users.router)
app.include_router(analytics.router)


@app.get("/")
def root():
    return {"message": "API funcionando correctamente"}

@app.get("/health")
def health_check():
    """Endpoint para verificar estado de la API y BD"""
    db = SessionLocal()
    try:
        db.execute(text("SELECT 1"))
        return {
            "status": "healthy",
            "database": "connected",
            "timestamp": datetime.now().isoformat(),
        }
    except SQLAlchemyError as e:
        logger.error("Health check sin conexión a BD: %s", e)
        return {
            "status": "unhealthy",
            "database": "disconnected",
            "error": str(e),
            "timestamp": datetime.now().isoformat(),
        }
    finally:
        db.close()


if __name__ == "__main__":
    import uvicorn
    logger.info("Documentación: http://localhost:%s/docs", settings.API_PORT)
    uvicorn.run("app.main:app", host=settings.API_HOST, port=settings.API_PORT, reload=settings.DEBUG)
