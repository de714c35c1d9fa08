from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from console.audit_log import AuditStore, JsonFileAuditStore, MemoryAuditStore, MongoAuditStore

PROJECT_ROOT = Path(__file__).resolve().parent
DOTENV_PATH = PROJECT_ROOT / ".env"

AUDIT_BACKENDS = {"file", "memory", "mongo"}


def _optional_float(value: Optional[str]) -> Optional[float]:
    if value is None or not value.strip():
        return None
    return float(value)


@dataclass(frozen=True)
class ConsoleSettings:
    api_base_url: str = "http://127.0.0.1:5000"
    page_size: int = 5
    current_user_login: str = "admin"
    audit_backend: str = "file"
    audit_log_path: str = str(PROJECT_ROOT / "employee_status_history.json")
    audit_mongo_uri: Optional[str] = None
    audit_mongo_db: str = "access_console"
    failure_probability: float = 0.02
    demo_roster_size: int = 30
    demo_seed: int = 42
    toggle_timeout: Optional[float] = None
    reload_delay: float = 0.9

    @classmethod
    def from_env(cls, load_env_file: bool = True) -> "ConsoleSettings":
        if load_env_file and DOTENV_PATH.exists():
            load_dotenv(DOTENV_PATH)

        defaults = cls()
        backend = os.getenv("AUDIT_BACKEND", defaults.audit_backend).lower()
        if backend not in AUDIT_BACKENDS:
            raise ValueError(f"AUDIT_BACKEND must be one of {sorted(AUDIT_BACKENDS)}, got {backend!r}.")

        return cls(
            api_base_url=os.getenv("CONSOLE_API_URL", defaults.api_base_url),
            page_size=int(os.getenv("CONSOLE_PAGE_SIZE", defaults.page_size)),
            current_user_login=os.getenv("CONSOLE_USER_LOGIN", defaults.current_user_login),
            audit_backend=backend,
            audit_log_path=os.getenv("AUDIT_LOG_PATH", defaults.audit_log_path),
            audit_mongo_uri=os.getenv("AUDIT_MONGO_URI") or None,
            audit_mongo_db=os.getenv("AUDIT_MONGO_DB", defaults.audit_mongo_db),
            failure_probability=float(os.getenv("DEMO_FAILURE_PROBABILITY", defaults.failure_probability)),
            demo_roster_size=int(os.getenv("DEMO_ROSTER_SIZE", defaults.demo_roster_size)),
            demo_seed=int(os.getenv("DEMO_SEED", defaults.demo_seed)),
            toggle_timeout=_optional_float(os.getenv("TOGGLE_TIMEOUT_SECONDS")),
            reload_delay=float(os.getenv("RELOAD_DELAY_SECONDS", defaults.reload_delay)),
        )


def build_audit_store(settings: ConsoleSettings) -> AuditStore:
    if settings.audit_backend == "memory":
        return MemoryAuditStore()
    if settings.audit_backend == "mongo":
        return MongoAuditStore(settings.audit_mongo_uri, db_name=settings.audit_mongo_db)
    return JsonFileAuditStore(settings.audit_log_path)
