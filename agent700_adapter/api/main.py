# agent700_adapter/api/main.py
"""HTTP host for the Agent700 batch adapter: batches, credential checks, catalog."""

import os

import uvicorn
from fastapi import FastAPI
from agent700_adapter.utils.logger import init_logger
from agent700_adapter.api.routes.execute import router as execute_router
from agent700_adapter.api.routes.credentials import router as credentials_router
from agent700_adapter.api.routes.operations import router as operations_router
from agent700_adapter.integrations.agent700_client import DEFAULT_BASE_URL


init_logger()

app = FastAPI(
    title="Agent700 Batch Adapter",
    version="1.0.0",
    openapi_url="/api/v1/openapi.json",
    docs_url="/api/v1/docs"
)

app.include_router(execute_router)      # /api/v1/execute
app.include_router(credentials_router)  # /api/v1/credentials/test
app.include_router(operations_router)   # /api/v1/operations


@app.get("/api/v1/health")
def health():
    """Liveness only; does not call Agent700."""
    return {"status": "ok", "agent700BaseUrl": DEFAULT_BASE_URL}


def run() -> None:
    """Serve the adapter with uvicorn (AGENT700_API_HOST / AGENT700_API_PORT)."""
    uvicorn.run(
        "agent700_adapter.api.main:app",
        host=os.getenv("AGENT700_API_HOST", "127.0.0.1"),
        port=int(os.getenv("AGENT700_API_PORT", "8000")),
        log_config=None,  # keep init_logger's handlers
    )
