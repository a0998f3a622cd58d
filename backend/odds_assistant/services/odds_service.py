"""
backend/odds_assistant/services/odds_service.py

Purpose:
    Odds proxy logic: upstream query assembly with defaults, case-insensitive
    team filtering and reshaping of The Odds API events into GameRecords.

Dependencies:
    - odds_assistant.providers.odds_api
    - odds_assistant.models.odds
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, Optional, Union

from odds_assistant.models.odds import GameRecord
from odds_assistant.providers.odds_api import TheOddsAPIProvider

logger = logging.getLogger("odds_assistant.odds_service")

DEFAULT_SPORT = "soccer"
DEFAULT_REGIONS = "us"
DEFAULT_MARKETS = "h2h,spreads"
DEFAULT_DATE_FORMAT = "iso"
DEFAULT_ODDS_FORMAT = "decimal"
DEFAULT_COMMENCE_TIME_FROM = "2023-09-09T00:00:00Z"
DEFAULT_COMMENCE_TIME_TO = "2023-09-09T00:00:00Z"
DEFAULT_INCLUDE_FLAG = "true"


def _flag_text(value: Union[str, bool, None]) -> str:
    # An unset flag arrives as the declared default (a bool); sent flags stay verbatim.
    if isinstance(value, bool):
        return "true" if value else "false"
    return value or DEFAULT_INCLUDE_FLAG


def build_upstream_params(
    *,
    regions: Optional[str] = None,
    markets: Optional[str] = None,
    date_format: Optional[str] = None,
    odds_format: Optional[str] = None,
    commence_time_from: Optional[str] = None,
    commence_time_to: Optional[str] = None,
    include_links: Union[str, bool, None] = None,
    include_sids: Union[str, bool, None] = None,
    include_bet_limits: Union[str, bool, None] = None,
    event_ids: Optional[str] = None,
    bookmakers: Optional[str] = None,
) -> dict[str, str]:
    """Assemble the upstream query. Missing or empty values take the defaults;
    ``eventIds``/``bookmakers`` are only sent when given.

    Include flags sent by the caller are forwarded as the literal text they
    sent; upstream reads ``"true"``/``"false"`` itself.
    """
    params = {
        "regions": regions or DEFAULT_REGIONS,
        "markets": markets or DEFAULT_MARKETS,
        "dateFormat": date_format or DEFAULT_DATE_FORMAT,
        "oddsFormat": odds_format or DEFAULT_ODDS_FORMAT,
        "commenceTimeFrom": commence_time_from or DEFAULT_COMMENCE_TIME_FROM,
        "commenceTimeTo": commence_time_to or DEFAULT_COMMENCE_TIME_TO,
        "includeLinks": _flag_text(include_links),
        "includeSids": _flag_text(include_sids),
        "includeBetLimits": _flag_text(include_bet_limits),
    }
    if event_ids:
        params["eventIds"] = event_ids
    if bookmakers:
        params["bookmakers"] = bookmakers
    return params


def game_involves_team(game: dict[str, Any], team: str) -> bool:
    needle = team.lower()
    home = (game.get("home_team") or "").lower()
    away = (game.get("away_team") or "").lower()
    return needle in home or needle in away


def filter_games_by_team(games: Iterable[dict[str, Any]], team: Optional[str]) -> list[dict[str, Any]]:
    if not team:
        return list(games)
    return [game for game in games if game_involves_team(game, team)]


def reshape_games(games: Iterable[dict[str, Any]]) -> list[GameRecord]:
    return [GameRecord.model_validate(game) for game in games]


async def fetch_odds(
    provider: TheOddsAPIProvider,
    sport: Optional[str],
    params: dict[str, str],
    team: Optional[str] = None,
) -> list[GameRecord]:
    """Fetch, filter and reshape. Upstream and reshape errors propagate."""
    sport_key = sport or DEFAULT_SPORT
    games = await provider.get_odds(sport_key, params)
    matched = filter_games_by_team(games, team)
    if team:
        logger.debug("Team filter %r kept %d of %d games", team, len(matched), len(games))
    return reshape_games(matched)
