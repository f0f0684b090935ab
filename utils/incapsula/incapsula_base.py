# utils/incapsula/incapsula_base.py
"""
Common base for the Incapsula domain clients.
Holds the http client and the credential check.
"""
import json
import logging
from typing import Any

from .incapsula_request import IncapsulaHTTPClient
from .incapsula_exceptions import IncapsulaAuthenticationError
from .incapsula_types import IncapsulaResponse

logger = logging.getLogger(__name__)


class IncapsulaClientBase:
    """
    Base class for Incapsula domain clients.

    Attributes:
        http: IncapsulaHTTPClient instance
    """

    def __init__(self, http_client: IncapsulaHTTPClient) -> None:
        self.http = http_client

    def _require_keys(self) -> None:
        """Require API id and key before any request goes out."""
        if not getattr(self.http, "api_id", None) or not getattr(self.http, "api_key", None):
            logger.error("Incapsula API id/key not found on http client")
            raise IncapsulaAuthenticationError("API id and API key required for Incapsula endpoints")

    @staticmethod
    def _decode(response: IncapsulaResponse) -> Any:
        """Parse the response body as JSON. Raises ValueError on malformed JSON."""
        return json.loads(response.text)
