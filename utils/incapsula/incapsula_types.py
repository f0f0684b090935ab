"""
Incapsula API data structures.

Decoding is tolerant the way the provider's JSON is: unknown keys are ignored
and missing or null keys fall back to zero/empty. A key present with the wrong
JSON type raises TypeError, which the clients report as a parse error.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List


def _int_field(data: Dict[str, Any], key: str) -> int:
    value = data.get(key)
    if value is None:
        return 0
    # bool is an int subclass but never a valid id or result code
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"field '{key}' must be an integer, got {type(value).__name__}")
    return value


def _str_field(data: Dict[str, Any], key: str) -> str:
    value = data.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise TypeError(f"field '{key}' must be a string, got {type(value).__name__}")
    return value


def _require_object(data: Any, what: str) -> Dict[str, Any]:
    if not isinstance(data, dict):
        raise TypeError(f"{what} must be a JSON object, got {type(data).__name__}")
    return data


@dataclass
class SubAccountPayload:
    """Input for subaccount creation. Zero/empty optionals mean "not set"."""
    sub_account_name: str
    ref_id: str = ""
    log_level: str = ""
    parent_id: int = 0
    logs_account_id: int = 0

    def to_dict(self) -> Dict[str, Any]:
        """JSON form with unset optional fields omitted."""
        result: Dict[str, Any] = {"sub_account_name": self.sub_account_name}
        if self.ref_id:
            result["ref_id"] = self.ref_id
        if self.log_level:
            result["log_level"] = self.log_level
        if self.parent_id:
            result["parent_id"] = self.parent_id
        if self.logs_account_id:
            result["logs_account_id"] = self.logs_account_id
        return result


@dataclass
class SubAccount:
    """A subaccount as known by Incapsula: provider-assigned id plus payload fields."""
    sub_account_id: int
    sub_account_name: str = ""
    ref_id: str = ""
    log_level: str = ""
    parent_id: int = 0
    logs_account_id: int = 0

    @property
    def payload(self) -> SubAccountPayload:
        return SubAccountPayload(
            sub_account_name=self.sub_account_name,
            ref_id=self.ref_id,
            log_level=self.log_level,
            parent_id=self.parent_id,
            logs_account_id=self.logs_account_id,
        )

    @classmethod
    def from_dict(cls, data: Any) -> "SubAccount":
        data = _require_object(data, "sub account")
        return cls(
            sub_account_id=_int_field(data, "sub_account_id"),
            sub_account_name=_str_field(data, "sub_account_name"),
            ref_id=_str_field(data, "ref_id"),
            log_level=_str_field(data, "log_level"),
            parent_id=_int_field(data, "parent_id"),
            logs_account_id=_int_field(data, "logs_account_id"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {"sub_account_id": self.sub_account_id, **self.payload.to_dict()}


@dataclass
class SubAccountAddResponse:
    """Response of subaccounts/add."""
    sub_account: SubAccount
    res: int = 0

    @classmethod
    def from_dict(cls, data: Any) -> "SubAccountAddResponse":
        data = _require_object(data, "add response")
        raw = data.get("sub_account")
        sub_account = SubAccount.from_dict(raw) if raw is not None else SubAccount(sub_account_id=0)
        return cls(sub_account=sub_account, res=_int_field(data, "res"))


@dataclass
class SubAccountListResponse:
    """Response of accounts/listSubAccounts, one page."""
    sub_accounts: List[SubAccount] = field(default_factory=list)
    res: int = 0

    @classmethod
    def from_dict(cls, data: Any) -> "SubAccountListResponse":
        data = _require_object(data, "list response")
        raw = data.get("resultList")
        if raw is None:
            raw = []
        if not isinstance(raw, list):
            raise TypeError(f"field 'resultList' must be an array, got {type(raw).__name__}")
        return cls(
            sub_accounts=[SubAccount.from_dict(item) for item in raw],
            res=_int_field(data, "res"),
        )


@dataclass
class SubAccountDeleteResponse:
    """Response of subaccounts/delete. Only the result code matters."""
    res: int = 0
    res_message: str = ""

    @classmethod
    def from_dict(cls, data: Any) -> "SubAccountDeleteResponse":
        data = _require_object(data, "delete response")
        return cls(res=_int_field(data, "res"), res_message=_str_field(data, "res_message"))


@dataclass(frozen=True)
class IncapsulaResponse:
    """Raw transport result handed back to the domain clients."""
    status: int
    text: str
    operation: str = ""


def subaccounts_to_list(sub_accounts: List[SubAccount]) -> List[Dict[str, Any]]:
    """Serialize a list of subaccounts for JSON output."""
    return [sub_account.to_dict() for sub_account in sub_accounts]
