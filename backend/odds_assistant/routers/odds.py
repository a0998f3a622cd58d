"""Odds proxy tool: The Odds API reshaped for the assistant."""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import JSONResponse

from odds_assistant.middleware.logging import request_id_of
from odds_assistant.models.odds import OddsResponse
from odds_assistant.models.tools import ErrorResponse
from odds_assistant.providers.odds_api import (
    OddsAPINotConfigured,
    TheOddsAPIProvider,
    odds_provider,
)
from odds_assistant.services import odds_service as svc

logger = logging.getLogger("odds_assistant.odds")

router = APIRouter(prefix="/api/tools", tags=["tools"])


def get_odds_provider() -> TheOddsAPIProvider:
    return odds_provider


@router.get(
    "/get-odds",
    operation_id="get-odds",
    summary="Get soccer odds information",
    description="Respond with a list of soccer games and their odds",
    response_model=OddsResponse,
    responses={500: {"model": ErrorResponse, "description": "API key missing or server error"}},
)
async def get_odds(
    request: Request,
    team: Optional[str] = Query(None, description="Filter the results by the specified team name"),
    sport: str = Query(svc.DEFAULT_SPORT, description="The sport key for which to return events and odds"),
    regions: str = Query(svc.DEFAULT_REGIONS, description="Specifies the region for bookmakers"),
    markets: str = Query(
        svc.DEFAULT_MARKETS, description="The odds market to return (e.g., head-to-head, spreads)"
    ),
    date_format: str = Query(
        svc.DEFAULT_DATE_FORMAT, alias="dateFormat",
        description="Format of returned timestamps (e.g., iso or unix)",
    ),
    odds_format: str = Query(
        svc.DEFAULT_ODDS_FORMAT, alias="oddsFormat",
        description="Format of returned odds (e.g., decimal or american)",
    ),
    commence_time_from: str = Query(
        svc.DEFAULT_COMMENCE_TIME_FROM, alias="commenceTimeFrom",
        description="Start time to filter events", json_schema_extra={"format": "date-time"},
    ),
    commence_time_to: str = Query(
        svc.DEFAULT_COMMENCE_TIME_TO, alias="commenceTimeTo",
        description="End time to filter events", json_schema_extra={"format": "date-time"},
    ),
    # Declared boolean for the assistant; whatever text is sent goes upstream verbatim.
    include_links: str = Query(
        True, alias="includeLinks", description="Include bookmaker links in the response",
        json_schema_extra={"type": "boolean"},
    ),
    include_sids: str = Query(
        True, alias="includeSids", description="Include source IDs (bookmaker IDs) in the response",
        json_schema_extra={"type": "boolean"},
    ),
    include_bet_limits: str = Query(
        True, alias="includeBetLimits", description="Include bet limits in the response",
        json_schema_extra={"type": "boolean"},
    ),
    event_ids: Optional[str] = Query(
        None, alias="eventIds", description="Comma-separated event ids to restrict the results to"
    ),
    bookmakers: Optional[str] = Query(
        None, description="Comma-separated bookmaker keys; takes priority over regions"
    ),
    provider: TheOddsAPIProvider = Depends(get_odds_provider),
):
    """Proxy The Odds API, optionally keeping only games involving ``team``."""
    params = svc.build_upstream_params(
        regions=regions,
        markets=markets,
        date_format=date_format,
        odds_format=odds_format,
        commence_time_from=commence_time_from,
        commence_time_to=commence_time_to,
        include_links=include_links,
        include_sids=include_sids,
        include_bet_limits=include_bet_limits,
        event_ids=event_ids,
        bookmakers=bookmakers,
    )

    try:
        games = await svc.fetch_odds(provider, sport, params, team=team)
    except OddsAPINotConfigured:
        logger.error(
            "ODD_KEY is not set; refusing odds request [request_id=%s]", request_id_of(request)
        )
        return JSONResponse(status_code=500, content={"error": "API key is not configured"})
    except Exception:
        logger.exception(
            "Error fetching odds data for sport=%s [request_id=%s]",
            sport or svc.DEFAULT_SPORT, request_id_of(request),
        )
        return JSONResponse(status_code=500, content={"error": "Failed to fetch odds data"})

    return OddsResponse(data=games)
