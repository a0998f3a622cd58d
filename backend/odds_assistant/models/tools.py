from enum import Enum
from typing import List

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    error: str = Field(..., description="Error message")


class BlockchainsResponse(BaseModel):
    message: str = Field(..., description="The list of blockchains")


class UserResponse(BaseModel):
    accountId: str = Field(..., description="The user's account ID")


class RedditPost(BaseModel):
    title: str = Field(..., description="The title of the post")
    author: str = Field(..., description="The username of the post author")
    subreddit: str = Field(..., description="The subreddit where the post was made")
    score: int = Field(..., description="The score (upvotes) of the post")
    num_comments: int = Field(..., description="The number of comments on the post")
    url: str = Field(..., description="The URL of the post on Reddit")


class RedditResponse(BaseModel):
    posts: List[RedditPost] = Field(..., description="An array of Reddit posts")


class TwitterIntentResponse(BaseModel):
    twitterIntentUrl: str = Field(..., description="The generated Twitter share intent URL")


class TransferParams(BaseModel):
    deposit: str = Field(..., description="The amount to transfer in yoctoNEAR")


class TransactionAction(BaseModel):
    type: str = Field("Transfer", description="The type of action (e.g., 'Transfer')")
    params: TransferParams


class TransactionPayload(BaseModel):
    receiverId: str = Field(..., description="The receiver's NEAR account ID")
    actions: List[TransactionAction]


class TransactionResponse(BaseModel):
    transactionPayload: TransactionPayload


class CoinSide(str, Enum):
    heads = "heads"
    tails = "tails"


class CoinFlipResponse(BaseModel):
    result: CoinSide = Field(..., description="The result of the coin flip (heads or tails)")
