"""
utils/incapsula/incapsula_request.py
HTTP client for Incapsula API requests.
"""
import aiohttp
import asyncio
import time
import logging
import platform
from typing import Any, Dict, Mapping, Optional

from .incapsula_constants import BASE_URL, DEFAULT_CONFIG
from .incapsula_exceptions import IncapsulaRequestError, IncapsulaTimeoutError
from .incapsula_metrics import RequestMetrics
from .incapsula_types import IncapsulaResponse

logger = logging.getLogger(__name__)


class IncapsulaHTTPClient:
    """
    Async HTTP client for the Incapsula provisioning API.

    Every call is a form-encoded POST tagged with an operation identifier.
    Failures are raised once; nothing is retried here.
    """

    def __init__(
        self,
        api_id: Optional[str] = None,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        config: Optional[Dict[str, Any]] = None,
        session: Optional[aiohttp.ClientSession] = None
    ):
        """
        Initialize HTTP client.

        Args:
            api_id: Incapsula API id
            api_key: Incapsula API key
            base_url: API base URL (optional)
            config: Configuration dictionary
            session: Existing aiohttp session (optional)
        """
        self.api_id = api_id
        self.api_key = api_key
        self.base_url = (base_url or BASE_URL).rstrip("/")
        self.config = {**DEFAULT_CONFIG, **(config or {})}

        self._session_provided_externally = session is not None
        self._session = session
        self.metrics = RequestMetrics()

        logger.info(f"✅ IncapsulaHTTPClient initialized - Base URL: {self.base_url}")

    async def _get_session(self) -> aiohttp.ClientSession:
        """Get or create aiohttp session with connection pooling."""
        if self._session is None or self._session.closed:
            timeout = aiohttp.ClientTimeout(total=self.config["timeout"])
            connector = aiohttp.TCPConnector(
                limit=self.config.get("connector_limit", 100),
                limit_per_host=self.config.get("connector_limit_per_host", 20),
                enable_cleanup_closed=True
            )
            self._session = aiohttp.ClientSession(timeout=timeout, connector=connector)
            self._session_provided_externally = False
        return self._session

    async def close(self) -> None:
        """Close HTTP session if we own it."""
        if (self._session and
                not self._session.closed and
                not self._session_provided_externally):
            await self._session.close()
            logger.info("✅ IncapsulaHTTPClient session closed")

    def _build_headers(self) -> Dict[str, str]:
        """Form content type plus the API id/key authentication headers."""
        headers = {
            'Content-Type': 'application/x-www-form-urlencoded',
            'User-Agent': f'IncapsulaPythonClient/1.0 (Python {platform.python_version()})'
        }
        if self.api_id:
            headers['x-API-Id'] = self.api_id
        if self.api_key:
            headers['x-API-Key'] = self.api_key
        return headers

    async def post_form(
        self,
        endpoint: str,
        values: Mapping[str, str],
        operation: str
    ) -> IncapsulaResponse:
        """
        POST a form-encoded body to {base_url}/{endpoint}.

        Args:
            endpoint: Endpoint path relative to the base URL
            values: Form fields
            operation: Operation tag, used for logging and metrics

        Returns:
            IncapsulaResponse with HTTP status and body text. The provider
            reports failures through the 'res' field, so non-200 statuses
            are handed back instead of raised.

        Raises:
            IncapsulaTimeoutError: The request timed out
            IncapsulaRequestError: Connection or other client-side failure
        """
        url = f"{self.base_url}/{endpoint}"
        headers = self._build_headers()
        logger.debug(f"{operation}: POST {url}")

        start_time = time.time()
        try:
            session = await self._get_session()
            async with session.post(url, data=dict(values), headers=headers) as response:
                # undecodable bytes surface later as a parse error carrying the body
                text = await response.text(errors="replace")
                response_time = time.time() - start_time

        except asyncio.TimeoutError as e:
            self.metrics.record_request(operation, False, time.time() - start_time, "timeout")
            logger.error(f"❌ {operation}: request to {url} timed out after {self.config['timeout']}s")
            raise IncapsulaTimeoutError(f"Request timeout after {self.config['timeout']}s") from e

        except aiohttp.ClientError as e:
            self.metrics.record_request(operation, False, time.time() - start_time, "connection_error")
            logger.error(f"❌ {operation}: HTTP client error for {url}: {e}")
            raise IncapsulaRequestError(f"HTTP client error: {e}") from e

        self.metrics.record_request(operation, True, response_time)
        if response.status != 200:
            logger.warning(f"⚠️ {operation}: HTTP {response.status} from {url}")

        return IncapsulaResponse(status=response.status, text=text, operation=operation)

    async def __aenter__(self) -> "IncapsulaHTTPClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()
