from __future__ import annotations

import os

API_BASE_URL = os.getenv("FORMATOS_API_BASE_URL", "http://localhost:8080/api")
API_TOKEN = os.getenv("FORMATOS_API_TOKEN", "")
USER_ROLE = os.getenv("FORMATOS_USER_ROLE", "")
SQLITE_PATH = os.getenv("SQLITE_PATH", "./formatos.db")
REQUEST_TIMEOUT_SECONDS = float(os.getenv("REQUEST_TIMEOUT_SECONDS", "30"))
NOTIFICATION_TTL_SECONDS = float(os.getenv("NOTIFICATION_TTL_SECONDS", "5"))
MAX_UPLOAD_MB = int(os.getenv("MAX_UPLOAD_MB", "100"))
MAX_UPLOAD_BYTES = MAX_UPLOAD_MB * 1024 * 1024
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

ROLE_ADMIN = "ADMINISTRADOR"
ROLE_READER = "CONSULTA"
LAST_PATH_KEY = "last_file_manager_path"
