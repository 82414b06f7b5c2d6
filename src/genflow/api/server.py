"""
FastAPI HTTP adapter for genflow.

Every registered flow is served at POST /{flow_name}. The request body is
{"data": {...input fields...}} and the response body is the flow's output
model serialized as JSON.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator

import pydantic
from fastapi import FastAPI, HTTPException, Path as PathParam, Request
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from genflow.config import DEFAULT_HOST, DEFAULT_PORT
from genflow.core.models import FlowDescriptor
from genflow.core.registry import FlowRegistry
from genflow.errors import GenerationError, NotFoundError, ValidationError
from genflow.generation.base import GenerationClient

logger = logging.getLogger(__name__)


# =============================================================================
# Request Models
# =============================================================================


class FlowRequest(BaseModel):
    """Request envelope for running a flow."""
    data: dict[str, Any]


# =============================================================================
# Application Factory
# =============================================================================


def get_registry(request: Request) -> FlowRegistry:
    """Get the registry bound to the running application."""
    return request.app.state.registry


def create_app(
    registry: FlowRegistry,
    client: GenerationClient | None = None,
) -> FastAPI:
    """
    Build the HTTP application for a registry.

    Args:
        registry: Flows to serve
        client: Generation client to close on shutdown (defaults to the
            registry's client)
    """
    owned_client = client or registry.client

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        logger.info(f"Serving flows: {', '.join(registry.names()) or 'none'}")
        yield
        if owned_client is not None:
            await owned_client.aclose()

    app = FastAPI(
        title="genflow",
        description="Named prompt flows over a generation backend",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.registry = registry

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # =========================================================================
    # Health & Discovery
    # =========================================================================

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {"status": "healthy"}

    @app.get("/flows")
    async def list_flows(request: Request) -> list[FlowDescriptor]:
        """List registered flows with their schemas."""
        return get_registry(request).list()

    # =========================================================================
    # Flow Dispatch
    # =========================================================================

    @app.post("/{flow_name}")
    async def run_flow(
        request: Request,
        flow_name: str = PathParam(..., description="Flow name"),
    ) -> Any:
        """Run a flow with the input under the request's 'data' key."""
        try:
            flow = get_registry(request).get(flow_name)
        except NotFoundError as e:
            raise HTTPException(status_code=404, detail=str(e))

        try:
            body = FlowRequest.model_validate_json(await request.body())
        except pydantic.ValidationError as e:
            raise HTTPException(status_code=400, detail=f"Invalid request body: {e}")

        try:
            return await flow.run(body.data)
        except ValidationError as e:
            raise HTTPException(status_code=400, detail=str(e))
        except GenerationError as e:
            logger.exception(f"Flow {flow_name} failed")
            raise HTTPException(status_code=500, detail=str(e))

    return app


# =============================================================================
# Run Server
# =============================================================================


def run_server(app: FastAPI, host: str = DEFAULT_HOST, port: int = DEFAULT_PORT):
    """Run the API server."""
    import uvicorn
    uvicorn.run(app, host=host, port=port)
