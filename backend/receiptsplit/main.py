import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .config import get_settings
from .routers import breakdown, money, spending, splits

settings = get_settings()

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s  %(name)-30s  %(levelname)-5s  %(message)s",
)

# Create FastAPI app
app = FastAPI(
    title="Receipt Split API",
    description="Per-person receipt breakdowns with proportional tax and tip",
    version="1.0.0",
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(breakdown.router)
app.include_router(splits.router)
app.include_router(spending.router)
app.include_router(money.router)


@app.get("/health")
async def health_check() -> dict:
    """Health check endpoint."""
    return {"status": "healthy", "service": "receipt-split-api"}


@app.get("/")
async def root() -> dict:
    """Root endpoint with API information."""
    return {
        "name": "Receipt Split API",
        "version": "1.0.0",
        "docs": "/docs",
        "health": "/health",
    }
