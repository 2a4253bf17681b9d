"""Batch builder API (FastAPI)."""

import logging

from fastapi import FastAPI

from .builder import build_create_order_transaction, tx_builder_json
from .config import Config
from .types import BatchRequest

logger = logging.getLogger(__name__)


def create_app(config: Config | None = None) -> FastAPI:
    """Create the FastAPI application."""
    app = FastAPI(title="CoW AMM Batch Builder", version="0.1.0")

    @app.post("/batch")
    def build_batch(request: BatchRequest):
        batch = tx_builder_json(request.to_tx_data())
        logger.info(f"Served batch for {request.amm_address} (chain {request.chain_id})")
        return batch.to_dict()

    @app.get("/batch/method")
    def get_method():
        method = build_create_order_transaction().contract_method
        return {
            **method.to_dict(),
            "signature": method.signature,
            "selector": method.selector,
        }

    @app.get("/config")
    def get_config():
        if config is None:
            return {"error": "Config not available"}
        return {
            "output_path": config.output_path,
            "json_indent": config.json_indent,
            "api_host": config.api_host,
            "api_port": config.api_port,
            "log_level": config.log_level,
        }

    return app
