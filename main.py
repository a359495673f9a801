"""
Zaiko - Multi-warehouse Stock Ledger
FastAPI Application Entry Point
"""
import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
import logging

from zaiko import __version__
from zaiko.core import settings, engine, Base, SessionLocal
from zaiko.core.locks import StockLockRegistry
from zaiko.core.logging_config import configure_logging
from zaiko.api.router import api_router
from zaiko.api.errors import register_error_handlers
from zaiko.services import seed_default_data

configure_logging(settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

# Lifespan for startup/shutdown
@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup: Create tables if not exist
    Base.metadata.create_all(bind=engine)
    
    if settings.SEED_DEFAULT_DATA:
        db = SessionLocal()
        try:
            seed_default_data(db)
        finally:
            db.close()
    
    logger.info(f"{settings.APP_NAME} starting on port {settings.APP_PORT}")
    yield
    
    engine.dispose()
    logger.info(f"{settings.APP_NAME} shutting down")

def create_app() -> FastAPI:
    app = FastAPI(
        title=settings.APP_NAME,
        description="Multi-warehouse Stock & Movement Ledger",
        version=__version__,
        lifespan=lifespan
    )
    
    # Serializes movements per (product, warehouse) across request threads
    app.state.stock_locks = StockLockRegistry()
    
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    
    register_error_handlers(app)
    app.include_router(api_router, prefix="/api")
    
    # Health check
    @app.get("/health")
    async def health_check():
        return {"status": "healthy", "app": settings.APP_NAME}
    
    return app

# Create FastAPI app
app = create_app()

if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=settings.APP_PORT,
        reload=settings.DEBUG
    )
