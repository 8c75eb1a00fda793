"""
Judgment Interest API Application Factory
"""

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .. import __version__
from .rates import router as rates_router
from .interest import router as interest_router
from .judgments import router as judgments_router


def create_app() -> FastAPI:
    """Create and configure the FastAPI application"""
    app = FastAPI(
        title="Judgment Interest Calculator API",
        description="Court order interest on judgments with variable rate periods",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc"
    )

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],  # Configure appropriately for production
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Include routers
    app.include_router(rates_router, prefix="/rates", tags=["Rates"])
    app.include_router(interest_router, prefix="/interest", tags=["Interest"])
    app.include_router(judgments_router, prefix="/judgments", tags=["Judgments"])

    # Health check endpoint
    @app.get("/health")
    async def health_check():
        """Health check endpoint"""
        return {
            "status": "healthy",
            "service": "judgment_interest_api",
            "version": __version__
        }

    # Root endpoint
    @app.get("/")
    async def get_api_info():
        """Get API information"""
        return {
            "name": "Judgment Interest Calculator API",
            "version": __version__,
            "endpoints": {
                "docs": "/docs",
                "health": "/health",
                "rates": "/rates",
                "interest": "/interest",
                "judgments": "/judgments",
            }
        }

    return app


def run_server(host: str = "0.0.0.0", port: int = 8095, debug: bool = False):
    """Run the FastAPI server"""
    uvicorn.run(
        "judgment_interest.api:app",
        host=host,
        port=port,
        reload=debug,
        log_level="info"
    )


app = create_app()
