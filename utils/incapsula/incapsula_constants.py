"""Incapsula API constants: endpoints, operation tags and transport defaults."""

# API base
BASE_URL = "https://my.incapsula.com/api/prov/v1"

# SubAccount endpoints (relative to BASE_URL)
ENDPOINT_SUBACCOUNT_ADD = "subaccounts/add"
ENDPOINT_SUBACCOUNT_LIST = "accounts/listSubAccounts"
ENDPOINT_SUBACCOUNT_DELETE = "subaccounts/delete"

# Fixed page size of accounts/listSubAccounts
PAGE_SIZE = 50

# Operation tags passed to the transport with every call
CREATE_SUBACCOUNT = "CreateSubAccount"
READ_SUBACCOUNT = "ReadSubAccount"
DELETE_SUBACCOUNT = "DeleteSubAccount"

# Result code of a successful call
RES_SUCCESS = 0

DEFAULT_CONFIG = {
    "timeout": 30,
    "connector_limit": 100,
    "connector_limit_per_host": 20,
}
