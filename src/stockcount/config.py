from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
import os
import sys


@dataclass(frozen=True)
class AppPaths:
    base_dir: Path
    db_path: Path
    logs_dir: Path


@dataclass(frozen=True)
class Settings:
    erp_provider: str
    persist: bool
    user_id: str
    user_name: str


def _windows_appdata() -> Path:
    return Path(os.environ.get("APPDATA", str(Path.home() / "AppData" / "Roaming")))


def _mac_app_support() -> Path:
    return Path.home() / "Library" / "Application Support"


def get_app_paths(app_name: str = "StockCount") -> AppPaths:
    if sys.platform.startswith("win"):
        base = _windows_appdata() / app_name
    elif sys.platform == "darwin":
        base = _mac_app_support() / app_name
    else:
        base = Path.home() / f".{app_name.lower()}"

    logs = base / "logs"
    db = base / "stockcount.db"

    base.mkdir(parents=True, exist_ok=True)
    logs.mkdir(parents=True, exist_ok=True)

    return AppPaths(base_dir=base, db_path=db, logs_dir=logs)


def get_settings() -> Settings:
    return Settings(
        erp_provider=os.environ.get("STOCKCOUNT_ERP_PROVIDER", "mock").strip().lower() or "mock",
        persist=os.environ.get("STOCKCOUNT_PERSIST", "").strip() in {"1", "true", "yes"},
        user_id=os.environ.get("STOCKCOUNT_USER_ID", "").strip() or "mock-user-1",
        user_name=os.environ.get("STOCKCOUNT_USER_NAME", "").strip() or "Usuário Mock",
    )
