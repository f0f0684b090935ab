# utils/incapsula/incapsula_subaccount.py
"""
SubAccountClient: subaccount management endpoints.

subaccounts/add, accounts/listSubAccounts, subaccounts/delete.
Every response carries a 'res' result code; anything but 0 is an error and the
raw body is the only detail reported back.
"""
from typing import Dict, List, Optional
import logging

from .incapsula_base import IncapsulaClientBase
from .incapsula_constants import (
    CREATE_SUBACCOUNT, DELETE_SUBACCOUNT, READ_SUBACCOUNT,
    ENDPOINT_SUBACCOUNT_ADD, ENDPOINT_SUBACCOUNT_DELETE, ENDPOINT_SUBACCOUNT_LIST,
    PAGE_SIZE, RES_SUCCESS,
)
from .incapsula_exceptions import IncapsulaParseError, IncapsulaRequestError, IncapsulaServiceError
from .incapsula_types import (
    SubAccount, SubAccountAddResponse, SubAccountDeleteResponse,
    SubAccountListResponse, SubAccountPayload,
)

logger = logging.getLogger(__name__)


class SubAccountClient(IncapsulaClientBase):
    """Subaccount operations."""

    async def add_sub_account(self, payload: SubAccountPayload) -> SubAccount:
        """POST subaccounts/add and return the created subaccount with its new id."""
        if not payload.sub_account_name:
            raise ValueError("sub_account_name is required")

        self._require_keys()
        name = payload.sub_account_name
        logger.info(f"Adding Incapsula subaccount: {name}")

        values: Dict[str, str] = {"sub_account_name": name}
        if payload.ref_id:
            values["ref_id"] = payload.ref_id
        if payload.parent_id:
            values["parent_id"] = str(payload.parent_id)
        if payload.logs_account_id:
            values["logs_account_id"] = str(payload.logs_account_id)
        if payload.log_level:
            values["log_level"] = payload.log_level
        logger.debug(f"Add subaccount form values: {values}")

        try:
            response = await self.http.post_form(ENDPOINT_SUBACCOUNT_ADD, values, CREATE_SUBACCOUNT)
        except IncapsulaRequestError as e:
            logger.exception(f"🚨 Error adding subaccount {name}")
            raise IncapsulaRequestError(f"Error adding subaccount {name}: {e}") from e

        logger.debug(f"Incapsula add subaccount JSON response: {response.text}")

        try:
            add_response = SubAccountAddResponse.from_dict(self._decode(response))
        except (ValueError, TypeError) as e:
            raise IncapsulaParseError(
                f"Error parsing add subaccount JSON response for subaccount {name}: {e}\n"
                f"response: {response.text}",
                body=response.text,
            ) from e

        if add_response.res != RES_SUCCESS:
            raise IncapsulaServiceError(
                f"Error from Incapsula service when adding subaccount {name}: {response.text}",
                res=add_response.res,
                body=response.text,
            )

        logger.info(f"✅ Added Incapsula subaccount {name} with id {add_response.sub_account.sub_account_id}")
        return add_response.sub_account

    async def get_sub_account(self, parent_account_id: int, sub_account_id: int) -> Optional[SubAccount]:
        """
        Find a subaccount by id, scanning the parent's subaccount pages in order.

        Returns None when every page was scanned without a match. A page shorter
        than PAGE_SIZE is the last one.
        """
        logger.info(f"Reading Incapsula subaccounts for id: {sub_account_id}")

        page_num = 0
        while True:
            logger.debug(f"Looking for subaccount {sub_account_id}, fetching page: {page_num}")
            sub_accounts = await self.get_sub_accounts_page(parent_account_id, page_num)
            for sub_account in sub_accounts:
                if sub_account.sub_account_id == sub_account_id:
                    logger.info(f"✅ Found subaccount: {sub_account}")
                    return sub_account
            if len(sub_accounts) != PAGE_SIZE:
                break
            page_num += 1

        logger.debug(f"Didn't find subaccount {sub_account_id}, returning None")
        return None

    async def list_sub_accounts(self, parent_account_id: int = 0) -> List[SubAccount]:
        """Every subaccount under parent_account_id (0 = no filter), in page order."""
        logger.info(f"Listing Incapsula subaccounts for account: {parent_account_id}")

        result: List[SubAccount] = []
        page_num = 0
        while True:
            sub_accounts = await self.get_sub_accounts_page(parent_account_id, page_num)
            result.extend(sub_accounts)
            if len(sub_accounts) != PAGE_SIZE:
                break
            page_num += 1

        logger.info(f"✅ Listed {len(result)} subaccounts in {page_num + 1} pages")
        return result

    async def get_sub_accounts_page(self, account_id: int, page_num: int) -> List[SubAccount]:
        """POST accounts/listSubAccounts for one page of PAGE_SIZE entries."""
        self._require_keys()

        values: Dict[str, str] = {}
        if account_id:
            values["account_id"] = str(account_id)
        values["page_num"] = str(page_num)
        values["page_size"] = str(PAGE_SIZE)

        logger.debug(f"Pagination loop, page: {page_num}")

        try:
            response = await self.http.post_form(ENDPOINT_SUBACCOUNT_LIST, values, READ_SUBACCOUNT)
        except IncapsulaRequestError as e:
            logger.exception(f"🚨 Error getting subaccounts for account {account_id}, page {page_num}")
            raise IncapsulaRequestError(
                f"Error getting subaccounts for account {account_id}, page {page_num}: {e}"
            ) from e

        logger.debug(f"Incapsula subaccounts JSON response: {response.text}")

        try:
            list_response = SubAccountListResponse.from_dict(self._decode(response))
        except (ValueError, TypeError) as e:
            raise IncapsulaParseError(
                f"Error parsing subaccounts list JSON response for account {account_id}, "
                f"page {page_num}: {e}\nresponse: {response.text}",
                body=response.text,
            ) from e

        if list_response.res != RES_SUCCESS:
            raise IncapsulaServiceError(
                f"Error from Incapsula service when listing subaccounts for account {account_id}, "
                f"page {page_num}: {response.text}",
                res=list_response.res,
                body=response.text,
            )

        return list_response.sub_accounts

    async def delete_sub_account(self, sub_account_id: int) -> None:
        """POST subaccounts/delete. Returning without an exception means it was deleted."""
        self._require_keys()
        logger.info(f"Deleting Incapsula subaccount id: {sub_account_id}")

        try:
            response = await self.http.post_form(
                ENDPOINT_SUBACCOUNT_DELETE, {"sub_account_id": str(sub_account_id)}, DELETE_SUBACCOUNT
            )
        except IncapsulaRequestError as e:
            logger.exception(f"🚨 Error deleting subaccount id {sub_account_id}")
            raise IncapsulaRequestError(f"Error deleting subaccount id: {sub_account_id}: {e}") from e

        logger.debug(f"Incapsula delete subaccount JSON response: {response.text}")

        try:
            delete_response = SubAccountDeleteResponse.from_dict(self._decode(response))
        except (ValueError, TypeError) as e:
            raise IncapsulaParseError(
                f"Error parsing delete subaccount JSON response for subaccount id: {sub_account_id}: {e}\n"
                f"response: {response.text}",
                body=response.text,
            ) from e

        if delete_response.res != RES_SUCCESS:
            raise IncapsulaServiceError(
                f"Error from Incapsula service when deleting subaccount id: {sub_account_id}: {response.text}",
                res=delete_response.res,
                body=response.text,
            )

        logger.info(f"✅ Deleted Incapsula subaccount id: {sub_account_id}")
