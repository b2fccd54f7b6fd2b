"""NEAR account identifiers and balance lookups over JSON-RPC."""

from __future__ import annotations

import re
from dataclasses import asdict, dataclass
from typing import Any

import httpx

MAINNET_RPC_URL = "https://rpc.mainnet.near.org"

_ACCOUNT_ID_RE = re.compile(r"(?:(?:[a-z\d]+[\-_])*[a-z\d]+\.)*(?:[a-z\d]+[\-_])*[a-z\d]+")


def is_valid_account_id(value: str) -> bool:
    """Tell whether ``value`` is a well-formed NEAR account id."""
    return 2 <= len(value) <= 64 and _ACCOUNT_ID_RE.fullmatch(value) is not None


@dataclass(frozen=True)
class NearAccountId:
    """A NEAR account id as supplied by a caller, not yet validated."""

    value: str

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class NearAccountBalance:
    """Balances of a NEAR account in yoctoNEAR, as decimal strings."""

    total: str
    state_staked: str
    staked: str
    available: str

    def to_dict(self) -> dict[str, str]:
        return asdict(self)


def _rpc_call(client: httpx.Client, url: str, method: str, params: Any) -> Any:
    payload = {"jsonrpc": "2.0", "id": "dontcare", "method": method, "params": params}
    response = client.post(url, json=payload)
    response.raise_for_status()
    result = response.json()["result"]
    if isinstance(result, dict) and "error" in result:
        raise ValueError(result["error"])
    return result


def _fetch_balance(client: httpx.Client, url: str, account_id: str) -> NearAccountBalance:
    config = _rpc_call(client, url, "EXPERIMENTAL_protocol_config", {"finality": "final"})
    account = _rpc_call(
        client,
        url,
        "query",
        {"request_type": "view_account", "finality": "final", "account_id": account_id},
    )
    state_staked = int(account["storage_usage"]) * int(
        config["runtime_config"]["storage_amount_per_byte"]
    )
    staked = int(account["locked"])
    total = int(account["amount"]) + staked
    return NearAccountBalance(
        total=str(total),
        state_staked=str(state_staked),
        staked=str(staked),
        available=str(total - max(staked, state_staked)),
    )


def get_balance(
    account_id: NearAccountId | str,
    rpc_url: str = MAINNET_RPC_URL,
    client: httpx.Client | None = None,
) -> NearAccountBalance | None:
    """Look up an account's balance; ``None`` if the id is invalid or the lookup fails."""
    raw_id = str(account_id)
    if not is_valid_account_id(raw_id):
        return None
    try:
        if client is not None:
            return _fetch_balance(client, rpc_url, raw_id)
        with httpx.Client(timeout=10.0) as own_client:
            return _fetch_balance(own_client, rpc_url, raw_id)
    except (httpx.HTTPError, KeyError, TypeError, ValueError):
        return None