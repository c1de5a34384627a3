from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

HTTP_METHODS = ("GET", "POST", "PUT", "PATCH", "DELETE")
DEFAULT_METHOD = "GET"
DEFAULT_PATH = "/"
JSON_INDENT = 2

FIELD_HEADERS = "Headers"
FIELD_QUERY = "Query params"
FIELD_BODY = "Body"
FIELD_BASE_URL = "Base URL"
FIELD_PATH = "Endpoint"
FIELD_METHOD = "Method"

EMPTY_BODY_PLACEHOLDER = "No body"
MISSING_VALUE = "--"
TIMESTAMP_FORMAT = "%d/%m/%Y %H:%M:%S"

DEFAULT_LOG_FILENAME = "benchlab.log"


@dataclass
class Settings:
    verify_tls: bool = True
    catalog_path: Path | None = None
    debug: bool = False
    log_path: Path | None = None

    def log_file(self) -> Path:
        """Absolute debug log path; relative paths resolve against the working directory."""
        return Path(os.path.abspath(Path(self.log_path or DEFAULT_LOG_FILENAME).expanduser()))
