"""
backend/tests/conftest.py

Purpose:
    Shared pytest bootstrap: import paths plus fake HTTP plumbing and sample
    upstream events for the odds proxy tests.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Any

import pytest

_THIS_FILE = Path(__file__).resolve()
_BACKEND_DIR = _THIS_FILE.parents[1]

if str(_BACKEND_DIR) not in sys.path:
    sys.path.insert(0, str(_BACKEND_DIR))

INVALID_JSON = object()


class FakeResponse:
    def __init__(self, payload: Any = None, status_code: int = 200) -> None:
        self._payload = payload
        self.status_code = status_code
        self.headers: dict[str, str] = {}

    @property
    def is_success(self) -> bool:
        return 200 <= self.status_code < 300

    def json(self):
        if self._payload is INVALID_JSON:
            raise ValueError("Expecting value: line 1 column 1 (char 0)")
        return self._payload


class FakeHttpClient:
    """Stands in for httpx.AsyncClient; records every GET."""

    def __init__(self, responses: list[FakeResponse] | None = None) -> None:
        self._responses = list(responses or [])
        self.calls: list[dict] = []

    async def get(self, url, **kwargs):
        self.calls.append({"url": url, **kwargs})
        return self._responses.pop(0)


def install_fake_http(monkeypatch, provider, responses: list[FakeResponse]) -> FakeHttpClient:
    fake = FakeHttpClient(responses)
    monkeypatch.setattr(provider._client, "_get_client", lambda: fake)
    return fake


def make_outcome(name: str, price, **extra) -> dict:
    outcome = {"name": name, "price": price, "link": f"https://book.example/{name}", "sid": f"sid-{name}", "bet_limit": None}
    outcome.update(extra)
    return outcome


def make_game(
    home: str,
    away: str,
    *,
    game_id: str = "evt-1",
    bookmaker_keys: tuple[str, ...] = ("draftkings", "fanduel"),
    commence_time: Any = "2023-09-09T19:30:00Z",
    last_update: Any = "2023-09-09T10:00:00Z",
    prices: tuple[Any, Any] = (1.85, 2.05),
    sid: Any = None,
) -> dict:
    bookmakers = []
    for key in bookmaker_keys:
        outcome_extra = {} if sid is None else {"sid": sid}
        bookmakers.append({
            "key": key,
            "title": key.title(),
            "last_update": last_update,
            "link": f"https://{key}.example",
            "sid": f"{key}-sid" if sid is None else sid,
            "markets": [
                {
                    "key": "h2h",
                    "last_update": last_update,
                    "outcomes": [
                        make_outcome(home, prices[0], **outcome_extra),
                        make_outcome(away, prices[1], bet_limit=500, **outcome_extra),
                    ],
                    "unused_market_field": True,
                },
            ],
            "unused_book_field": "x",
        })
    return {
        "id": game_id,
        "sport_key": "basketball_nba",
        "sport_title": "NBA",
        "commence_time": commence_time,
        "home_team": home,
        "away_team": away,
        "bookmakers": bookmakers,
        "completed": False,
    }


# Payload variants the upstream sends depending on dateFormat/oddsFormat.
UPSTREAM_FORMAT_VARIANTS = {
    "iso-decimal": {},
    "unix-decimal": {"commence_time": 1694287800, "last_update": 1694253600},
    "iso-american": {"prices": (-110, 150)},
    "unix-american": {
        "commence_time": 1694287800,
        "last_update": 1694253600,
        "prices": (-110, 150),
    },
    "integer-sids": {"sid": 48213},
}


@pytest.fixture(params=sorted(UPSTREAM_FORMAT_VARIANTS))
def format_variant(request) -> dict:
    return UPSTREAM_FORMAT_VARIANTS[request.param]


@pytest.fixture
def sample_games() -> list[dict]:
    return [
        make_game("Los Angeles Lakers", "Boston Celtics", game_id="evt-1"),
        make_game("Miami Heat", "Chicago Bulls", game_id="evt-2"),
        make_game("Golden State Warriors", "Los Angeles Clippers", game_id="evt-3"),
    ]
