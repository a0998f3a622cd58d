"""
backend/odds_assistant/routers/tools.py

Purpose:
    Auxiliary assistant tools advertised in the plugin manifest: blockchain
    list, caller account, Reddit front page, Twitter share intents, NEAR
    transfer payloads and a coin flip.

Dependencies:
    - odds_assistant.services.tool_service
    - odds_assistant.providers.reddit
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Header, Query, Request
from fastapi.responses import JSONResponse

from odds_assistant.config import settings
from odds_assistant.middleware.logging import request_id_of
from odds_assistant.models.tools import (
    BlockchainsResponse,
    CoinFlipResponse,
    ErrorResponse,
    RedditResponse,
    TransactionResponse,
    TwitterIntentResponse,
    UserResponse,
)
from odds_assistant.providers.reddit import RedditProvider, reddit_provider
from odds_assistant.services import tool_service

logger = logging.getLogger("odds_assistant.tools")

router = APIRouter(prefix="/api/tools", tags=["tools"])

_ERROR_500 = {500: {"model": ErrorResponse, "description": "Error response"}}
_ERROR_400_500 = {
    400: {"model": ErrorResponse, "description": "Bad request"},
    **_ERROR_500,
}

# Fallback when neither the host nor the deployment names an account.
DEFAULT_ACCOUNT_ID = "near"


def get_reddit_provider() -> RedditProvider:
    return reddit_provider


@router.get(
    "/get-blockchains",
    operation_id="get-blockchains",
    summary="get blockchain information",
    description="Respond with a list of blockchains",
    response_model=BlockchainsResponse,
)
async def get_blockchains():
    return BlockchainsResponse(message=tool_service.list_blockchains())


@router.get(
    "/get-user",
    operation_id="get-user",
    summary="get user information",
    description="Respond with user account ID",
    response_model=UserResponse,
)
async def get_user(mb_metadata: Optional[str] = Header(None, include_in_schema=False)):
    account_id = (
        tool_service.account_from_metadata(mb_metadata)
        or settings.account_id
        or DEFAULT_ACCOUNT_ID
    )
    return UserResponse(accountId=account_id)


@router.get(
    "/reddit",
    operation_id="get-reddit-posts",
    summary="get Reddit frontpage posts",
    description="Fetch and return a list of posts from the Reddit frontpage",
    response_model=RedditResponse,
    responses=_ERROR_500,
)
async def get_reddit_posts(
    request: Request, provider: RedditProvider = Depends(get_reddit_provider)
):
    try:
        posts = await provider.get_frontpage()
        return RedditResponse(posts=posts)
    except Exception:
        logger.exception("Error fetching Reddit posts [request_id=%s]", request_id_of(request))
        return JSONResponse(status_code=500, content={"error": "Failed to fetch Reddit posts"})


@router.get(
    "/twitter",
    operation_id="get-twitter-share-intent",
    summary="Generate a Twitter share intent URL",
    description="Creates a Twitter share intent URL based on provided parameters",
    response_model=TwitterIntentResponse,
    responses=_ERROR_400_500,
)
async def get_twitter_share_intent(
    text: str = Query(..., description="The text content of the tweet"),
    url: Optional[str] = Query(None, description="The URL to be shared in the tweet"),
    hashtags: Optional[str] = Query(None, description="Comma-separated hashtags for the tweet"),
    via: Optional[str] = Query(None, description="The Twitter username to attribute the tweet to"),
):
    if not text.strip():
        return JSONResponse(status_code=400, content={"error": "Text parameter is required"})
    intent_url = tool_service.build_twitter_intent_url(text, url=url, hashtags=hashtags, via=via)
    return TwitterIntentResponse(twitterIntentUrl=intent_url)


@router.get(
    "/create-transaction",
    operation_id="create-near-transaction",
    summary="Create a NEAR transaction payload",
    description="Generates a NEAR transaction payload for transferring tokens",
    response_model=TransactionResponse,
    responses=_ERROR_400_500,
)
async def create_near_transaction(
    receiver_id: str = Query(..., alias="receiverId", description="The NEAR account ID of the receiver"),
    amount: str = Query(..., description="The amount of NEAR tokens to transfer"),
):
    if not receiver_id.strip() or not amount.strip():
        return JSONResponse(
            status_code=400, content={"error": "receiverId and amount are required parameters"}
        )
    try:
        payload = tool_service.build_transfer_payload(receiver_id.strip(), amount)
    except ValueError as exc:
        logger.info("Rejected transfer payload for %s: %s", receiver_id, exc)
        return JSONResponse(status_code=400, content={"error": "Invalid amount"})
    return TransactionResponse(transactionPayload=payload)


@router.get(
    "/coinflip",
    operation_id="coin-flip",
    summary="Coin flip",
    description="Flip a coin and return the result (heads or tails)",
    response_model=CoinFlipResponse,
    responses=_ERROR_500,
)
async def coin_flip():
    return CoinFlipResponse(result=tool_service.flip_coin())
