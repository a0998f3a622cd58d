from typing import List, Optional, Union

from pydantic import BaseModel, Field, StrictFloat, StrictInt

# Upstream shapes depend on the request: dateFormat=unix sends integer seconds,
# oddsFormat=american sends integer prices. Values must pass through untouched.
Timestamp = Optional[Union[str, StrictInt]]
Price = Optional[Union[StrictInt, StrictFloat]]
SourceId = Optional[Union[str, StrictInt]]

_TIMESTAMP_DOC = "ISO 8601 string, or unix seconds when dateFormat=unix"


class Outcome(BaseModel):
    """Single priced outcome inside a bookmaker market."""
    name: Optional[str] = None
    price: Price = None
    link: Optional[str] = None
    sid: SourceId = None
    bet_limit: Price = None               # null unless includeBetLimits and the book reports one


class Market(BaseModel):
    key: Optional[str] = None             # "h2h", "spreads", ...
    last_update: Timestamp = Field(None, description=_TIMESTAMP_DOC)
    outcomes: List[Outcome]


class Bookmaker(BaseModel):
    key: Optional[str] = None
    title: Optional[str] = None
    last_update: Timestamp = Field(None, description=_TIMESTAMP_DOC)
    link: Optional[str] = None
    sid: SourceId = None
    markets: List[Market]


class GameRecord(BaseModel):
    """Simplified game as returned to the assistant.

    Built straight from the upstream event; fields outside this shape are
    dropped, values are copied unchanged.
    """
    id: Optional[str] = None
    sport_key: Optional[str] = None
    sport_title: Optional[str] = None
    commence_time: Timestamp = Field(None, description=_TIMESTAMP_DOC)
    home_team: Optional[str] = None
    away_team: Optional[str] = None
    bookmakers: List[Bookmaker]


class OddsResponse(BaseModel):
    data: List[GameRecord]
