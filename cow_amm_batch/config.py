"""Configuration for the batch builder entry points."""

import os
from dataclasses import dataclass, field


@dataclass
class Config:
    """Entry point configuration. The batch contents are not configurable."""

    # Output
    output_path: str = field(default_factory=lambda: os.getenv("BATCH_OUTPUT", ""))
    json_indent: int = field(default_factory=lambda: int(os.getenv("BATCH_JSON_INDENT", "2")))

    # API
    api_host: str = field(default_factory=lambda: os.getenv("BATCH_API_HOST", "0.0.0.0"))
    api_port: int = field(default_factory=lambda: int(os.getenv("BATCH_API_PORT", "8000")))

    log_level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO"))
