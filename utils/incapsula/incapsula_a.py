# utils/incapsula/incapsula_a.py
"""
Incapsula API aggregator.

Single entry point that wires the HTTP transport to the domain clients and
owns the transport's lifetime (async context manager).
"""

import logging
from typing import Any, Dict, Optional

from .incapsula_request import IncapsulaHTTPClient
from .incapsula_subaccount import SubAccountClient

logger = logging.getLogger(__name__)


class IncapsulaAPI:
    """Incapsula API aggregator."""

    def __init__(self, http: IncapsulaHTTPClient) -> None:
        self.http = http
        self.subaccount = SubAccountClient(http)

    @classmethod
    def from_config(cls, config: Any, session: Optional[Any] = None) -> "IncapsulaAPI":
        """Build the transport from an IncapsulaConfig."""
        http = IncapsulaHTTPClient(
            api_id=config.API_ID,
            api_key=config.API_KEY,
            base_url=config.BASE_URL,
            config={"timeout": config.REQUEST_TIMEOUT},
            session=session,
        )
        return cls(http)

    def get_metrics(self) -> Dict[str, Any]:
        return self.http.metrics.get_metrics()

    async def close(self) -> None:
        await self.http.close()
        logger.info("🛑 IncapsulaAPI closed")

    async def __aenter__(self) -> "IncapsulaAPI":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()
