"""Centralised settings for the uniform resources supplier.

All runtime configuration is resolved here in one place.  Values can be
overridden via environment variables or a `.env` file in the project root
(loaded automatically when this module is imported).
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

# Load .env from the project root (one level up from this package)
_env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(_env_path, override=False)

_DEFAULT_TRACKING_PARAMS = (
    "fbclid,gclid,dclid,msclkid,mc_cid,mc_eid,_ga,_gl,_hsenc,_hsmi,"
    "mkt_tok,yclid,igshid,vero_id,oly_anon_id,oly_enc_id"
)


def _csv(value: str) -> tuple[str, ...]:
    """Split a comma separated env value, dropping blanks."""
    return tuple(part.strip() for part in value.split(",") if part.strip())


@dataclass
class Settings:
    # ------------------------------------------------------------------
    # HTTP (page fetching and redirect following)
    # ------------------------------------------------------------------
    request_timeout: float = field(
        default_factory=lambda: float(os.environ.get("URS_REQUEST_TIMEOUT", "30.0"))
    )
    max_redirects: int = field(
        default_factory=lambda: int(os.environ.get("URS_MAX_REDIRECTS", "10"))
    )
    user_agent: str = field(
        default_factory=lambda: os.environ.get(
            "URS_USER_AGENT",
            "Mozilla/5.0 (compatible; UniformResources/1.0)",
        )
    )

    # ------------------------------------------------------------------
    # Transformation
    # ------------------------------------------------------------------
    tracking_params: tuple[str, ...] = field(
        default_factory=lambda: _csv(
            os.environ.get("URS_TRACKING_PARAMS", _DEFAULT_TRACKING_PARAMS)
        )
    )

    # ------------------------------------------------------------------
    # Filtering
    # ------------------------------------------------------------------
    non_traversible_schemes: tuple[str, ...] = field(
        default_factory=lambda: _csv(
            os.environ.get("URS_NON_TRAVERSIBLE_SCHEMES", "mailto:")
        )
    )

    @property
    def default_headers(self) -> dict[str, str]:
        """Headers sent with every outgoing request."""
        return {"User-Agent": self.user_agent}


# Module-level singleton: import this everywhere:
#   from uniform_resources.config import settings
settings = Settings()
