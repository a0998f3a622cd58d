"""
backend/tests/test_odds_service.py

Purpose:
    Upstream query defaults, case-insensitive team filtering and GameRecord
    reshaping for the odds proxy.
"""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from conftest import FakeResponse, install_fake_http, make_game
from odds_assistant.providers.odds_api import OddsAPINotConfigured, TheOddsAPIProvider
from odds_assistant.services import odds_service as svc


def test_build_upstream_params_applies_every_default():
    params = svc.build_upstream_params()

    assert params == {
        "regions": "us",
        "markets": "h2h,spreads",
        "dateFormat": "iso",
        "oddsFormat": "decimal",
        "commenceTimeFrom": "2023-09-09T00:00:00Z",
        "commenceTimeTo": "2023-09-09T00:00:00Z",
        "includeLinks": "true",
        "includeSids": "true",
        "includeBetLimits": "true",
    }


def test_build_upstream_params_forwards_overrides_and_optional_passthroughs():
    params = svc.build_upstream_params(
        regions="eu",
        markets="h2h",
        odds_format="american",
        include_bet_limits=False,
        event_ids="abc,def",
        bookmakers="pinnacle",
    )

    assert params["regions"] == "eu"
    assert params["markets"] == "h2h"
    assert params["oddsFormat"] == "american"
    assert params["includeBetLimits"] == "false"
    assert params["includeLinks"] == "true"
    assert params["eventIds"] == "abc,def"
    assert params["bookmakers"] == "pinnacle"


def test_build_upstream_params_treats_empty_strings_as_absent():
    params = svc.build_upstream_params(regions="", markets="", event_ids="", bookmakers="")

    assert params["regions"] == "us"
    assert params["markets"] == "h2h,spreads"
    assert "eventIds" not in params
    assert "bookmakers" not in params


def test_build_upstream_params_forwards_flag_text_verbatim():
    params = svc.build_upstream_params(include_links="yes", include_sids="1", include_bet_limits="false")

    assert params["includeLinks"] == "yes"
    assert params["includeSids"] == "1"
    assert params["includeBetLimits"] == "false"


def test_build_upstream_params_empty_flag_takes_default():
    params = svc.build_upstream_params(include_links="", include_sids=True)

    assert params["includeLinks"] == "true"
    assert params["includeSids"] == "true"


def test_filter_is_case_insensitive(sample_games):
    upper = svc.filter_games_by_team(sample_games, "Lakers")
    lower = svc.filter_games_by_team(sample_games, "lakers")

    assert [g["id"] for g in upper] == ["evt-1"]
    assert upper == lower


def test_filter_matches_substring_of_away_team():
    games = [make_game("Lakers", "Celtics")]

    assert svc.filter_games_by_team(games, "celtics") == games
    assert svc.filter_games_by_team(games, "elti") == games


def test_filter_matches_either_side(sample_games):
    kept = svc.filter_games_by_team(sample_games, "los angeles")

    assert [g["id"] for g in kept] == ["evt-1", "evt-3"]


def test_filter_without_team_keeps_everything(sample_games):
    assert svc.filter_games_by_team(sample_games, None) == sample_games
    assert svc.filter_games_by_team(sample_games, "") == sample_games


def test_filter_with_unknown_team_returns_empty(sample_games):
    assert svc.filter_games_by_team(sample_games, "Yankees") == []


def test_reshape_preserves_nested_structure_and_drops_unknown_fields():
    game = make_game("Lakers", "Celtics")

    (record,) = svc.reshape_games([game])
    dumped = record.model_dump()

    assert len(dumped["bookmakers"]) == 2
    for raw_book, book in zip(game["bookmakers"], dumped["bookmakers"]):
        assert "unused_book_field" not in book
        assert len(book["markets"]) == 1
        market = book["markets"][0]
        assert "unused_market_field" not in market
        assert len(market["outcomes"]) == 2
        assert market["outcomes"] == raw_book["markets"][0]["outcomes"]
        assert book["link"] == raw_book["link"]
        assert book["sid"] == raw_book["sid"]
    assert "completed" not in dumped
    assert dumped["home_team"] == "Lakers"
    assert dumped["commence_time"] == "2023-09-09T19:30:00Z"


def test_reshape_copies_every_upstream_format_unchanged(format_variant):
    game = make_game("Lakers", "Celtics", **format_variant)

    (record,) = svc.reshape_games([game])
    dumped = record.model_dump()

    assert dumped["commence_time"] == game["commence_time"]
    assert type(dumped["commence_time"]) is type(game["commence_time"])
    for raw_book, book in zip(game["bookmakers"], dumped["bookmakers"]):
        assert book["last_update"] == raw_book["last_update"]
        assert book["sid"] == raw_book["sid"]
        raw_outcomes = raw_book["markets"][0]["outcomes"]
        outcomes = book["markets"][0]["outcomes"]
        assert outcomes == raw_outcomes
        assert [type(o["price"]) for o in outcomes] == [type(o["price"]) for o in raw_outcomes]
        assert [type(o["sid"]) for o in outcomes] == [type(o["sid"]) for o in raw_outcomes]


def test_reshape_keeps_american_prices_as_integers():
    game = make_game("Lakers", "Celtics", prices=(-110, 150), commence_time=1694287800)

    record = svc.reshape_games([game])[0]
    as_json = record.model_dump_json()

    assert '"price":-110,' in as_json
    assert "-110.0" not in as_json
    assert '"commence_time":1694287800' in as_json


def test_reshape_rejects_games_without_bookmakers():
    game = make_game("Lakers", "Celtics")
    del game["bookmakers"]

    with pytest.raises(ValidationError):
        svc.reshape_games([game])


@pytest.mark.asyncio
async def test_fetch_odds_defaults_sport_and_filters(monkeypatch, sample_games):
    provider = TheOddsAPIProvider(api_key="secret")
    fake = install_fake_http(monkeypatch, provider, [FakeResponse(sample_games)])

    records = await svc.fetch_odds(provider, None, svc.build_upstream_params(), team="HEAT")

    assert [r.id for r in records] == ["evt-2"]
    assert fake.calls[0]["url"] == "https://api.the-odds-api.com/v4/sports/soccer/odds"
    assert fake.calls[0]["params"]["apiKey"] == "secret"
    assert "team" not in fake.calls[0]["params"]


@pytest.mark.asyncio
async def test_fetch_odds_without_key_makes_no_call(monkeypatch):
    provider = TheOddsAPIProvider(api_key="")
    fake = install_fake_http(monkeypatch, provider, [])

    with pytest.raises(OddsAPINotConfigured):
        await svc.fetch_odds(provider, "soccer", svc.build_upstream_params())

    assert fake.calls == []
