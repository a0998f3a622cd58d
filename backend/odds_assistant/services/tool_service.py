"""Payload builders for the assistant's auxiliary tools."""

from __future__ import annotations

import json
import random
from decimal import Decimal, InvalidOperation, localcontext
from typing import Optional
from urllib.parse import urlencode

YOCTO_PER_NEAR = Decimal(10) ** 24
TWITTER_INTENT_URL = "https://twitter.com/intent/tweet"

SUPPORTED_BLOCKCHAINS = (
    "Bitcoin",
    "Ethereum",
    "NEAR",
    "Solana",
    "Polygon",
    "Arbitrum",
    "Base",
    "Optimism",
)


def list_blockchains() -> str:
    return ", ".join(SUPPORTED_BLOCKCHAINS)


def near_to_yocto(amount: str) -> str:
    """Convert a decimal NEAR amount to an integer yoctoNEAR string.

    Raises ValueError for malformed, non-positive or sub-yocto amounts.
    """
    try:
        value = Decimal(amount.strip())
    except (InvalidOperation, AttributeError) as exc:
        raise ValueError(f"Invalid NEAR amount: {amount!r}") from exc
    if not value.is_finite() or value <= 0:
        raise ValueError(f"NEAR amount must be positive: {amount!r}")

    with localcontext() as ctx:
        ctx.prec = 64
        yocto = value * YOCTO_PER_NEAR
    if yocto != yocto.to_integral_value():
        raise ValueError(f"NEAR amount has more than 24 decimals: {amount!r}")
    return str(int(yocto))


def build_transfer_payload(receiver_id: str, amount: str) -> dict:
    return {
        "receiverId": receiver_id,
        "actions": [
            {"type": "Transfer", "params": {"deposit": near_to_yocto(amount)}},
        ],
    }


def build_twitter_intent_url(
    text: str,
    url: Optional[str] = None,
    hashtags: Optional[str] = None,
    via: Optional[str] = None,
) -> str:
    query = {"text": text}
    if url:
        query["url"] = url
    if hashtags:
        query["hashtags"] = hashtags
    if via:
        query["via"] = via
    return f"{TWITTER_INTENT_URL}?{urlencode(query)}"


def flip_coin(rng: Optional[random.Random] = None) -> str:
    return (rng or random).choice(("heads", "tails"))


def account_from_metadata(header_value: Optional[str]) -> Optional[str]:
    """Pull ``accountData.accountId`` out of the host's ``mb-metadata`` header."""
    if not header_value:
        return None
    try:
        metadata = json.loads(header_value)
    except ValueError:
        return None
    if not isinstance(metadata, dict):
        return None
    account_data = metadata.get("accountData")
    if not isinstance(account_data, dict):
        return None
    return account_data.get("accountId") or None
