"""utils/incapsula/__init__.py - Public exports."""

from .incapsula_a import IncapsulaAPI
from .incapsula_request import IncapsulaHTTPClient
from .incapsula_subaccount import SubAccountClient
from .incapsula_types import (
    SubAccount, SubAccountPayload, SubAccountAddResponse,
    SubAccountListResponse, SubAccountDeleteResponse, IncapsulaResponse
)
from .incapsula_exceptions import (
    IncapsulaAPIError, IncapsulaRequestError, IncapsulaTimeoutError,
    IncapsulaAuthenticationError, IncapsulaParseError, IncapsulaServiceError
)
from .incapsula_metrics import RequestMetrics

__all__ = [
    'IncapsulaAPI', 'IncapsulaHTTPClient', 'SubAccountClient',
    'SubAccount', 'SubAccountPayload', 'SubAccountAddResponse',
    'SubAccountListResponse', 'SubAccountDeleteResponse', 'IncapsulaResponse',
    'IncapsulaAPIError', 'IncapsulaRequestError', 'IncapsulaTimeoutError',
    'IncapsulaAuthenticationError', 'IncapsulaParseError', 'IncapsulaServiceError',
    'RequestMetrics',
]
