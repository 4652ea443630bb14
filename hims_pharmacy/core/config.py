# hims_pharmacy/core/config.py
import os
from typing import List
from pydantic import BaseModel
from dotenv import load_dotenv

load_dotenv()


def _split_csv(value: str) -> List[str]:
    return [v.strip() for v in (value or "").split(",") if v.strip()]


def _flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).lower() in {"1", "true", "yes"}


class Settings(BaseModel):
    PROJECT_NAME: str = os.getenv("PROJECT_NAME", "HIMS Pharmacy Dispensing")
    API_V1_STR: str = os.getenv("API_V1_STR", "/api")

    # CORS (env takes priority)
    BACKEND_CORS_ORIGINS: List[str] = _split_csv(
        os.getenv(
            "CORS_ORIGINS",
            "http://localhost:5173,http://127.0.0.1:5173",
        ))

    # ---------- Database (read-only stock catalog) ----------
    DATABASE_URI: str = os.getenv("DATABASE_URI", "sqlite:///./pharmacy.db")

    # ---------- Logging ----------
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

    # ---------- Pharmacy flags ----------
    # Hide batches whose expiry date is already in the past from the catalog
    PHARMACY_SKIP_EXPIRED: bool = _flag("PHARMACY_SKIP_EXPIRED")
    DEFAULT_LOCATION_ID: int | None = (int(os.getenv("DEFAULT_LOCATION_ID"))
                                       if os.getenv("DEFAULT_LOCATION_ID")
                                       else None)


settings = Settings()
