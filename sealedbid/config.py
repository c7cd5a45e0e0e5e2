import os
from dataclasses import dataclass
from typing import Tuple

from dotenv import load_dotenv

from .cipher import Variant

load_dotenv()


@dataclass(frozen=True)
class Settings:
    variant: Variant
    log_level: str
    cors_origins: Tuple[str, ...]
    allow_fixed_ephemeral: bool = False


def _flag(name: str) -> bool:
    return os.getenv(name, "").strip().lower() in ("1", "true", "yes", "on")


def get_settings() -> Settings:
    # not cached; env changes apply from the next call
    origins = os.getenv("SEALEDBID_CORS_ORIGINS", "http://localhost:5173")
    return Settings(
        variant=Variant.parse(os.getenv("SEALEDBID_VARIANT", Variant.MASKED.value)),
        log_level=os.getenv("SEALEDBID_LOG_LEVEL", "WARNING").upper(),
        cors_origins=tuple(o.strip() for o in origins.split(",") if o.strip()),
        allow_fixed_ephemeral=_flag("SEALEDBID_ALLOW_FIXED_EPHEMERAL"),
    )
