"""
FastAPI Application

Main application setup and configuration.

Usage:
    uvicorn api.app:app --reload

    # Or run directly
    python -m api.app
"""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.deps import get_runtime_config
from api.errors import APIError, api_error_handler, engine_error_handler, generic_error_handler
from api.routes import health, template, upload, results, proof
from core.schemas.errors import MerkleDropException


# Configure logging - respects MERKLEDROP_LOG_LEVEL env var and merkledrop.json log_level
logging.basicConfig(
    level=getattr(logging, get_runtime_config().log_level.upper(), logging.INFO),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""

    app = FastAPI(
        title="MerkleDrop API",
        description="""
HTTP API for building token allocation Merkle trees.

## Endpoints

- **POST /upload** - Upload an `address,amount` CSV and publish a new tree
- **GET /root** - Root, total allocated, count and timestamp
- **GET /results** - All entries with their proofs
- **GET /results/csv** - Entries as `merkle_root,address,amount,proof` CSV
- **GET /proof/{address}** - Amount and proof for one address
- **GET /merkle.json** - Complete snapshot
- **GET /template** - Sample CSV
- **GET /health** - Health check

## Amounts

- `1.5` (with a decimal point) is read in ether units and scaled by 10^18
- `1500` (no decimal point) is read as wei and used as-is
        """,
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=get_runtime_config().server.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Register exception handlers
    app.add_exception_handler(APIError, api_error_handler)
    app.add_exception_handler(MerkleDropException, engine_error_handler)
    app.add_exception_handler(Exception, generic_error_handler)

    # Include routers
    app.include_router(health.router)
    app.include_router(template.router)
    app.include_router(upload.router)
    app.include_router(results.router)
    app.include_router(proof.router)

    return app


# Create the application instance
app = create_app()


if __name__ == "__main__":
    import uvicorn
    server = get_runtime_config().server
    uvicorn.run(app, host=server.host, port=server.port)
