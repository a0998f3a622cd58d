import logging
from typing import Any, Optional

from odds_assistant.config import settings
from odds_assistant.providers.http_client import UpstreamClient, UpstreamError

logger = logging.getLogger("odds_assistant.reddit")

REDDIT_BASE_URL = "https://www.reddit.com"


class RedditProvider:
    """Reads the public Reddit front page listing."""

    def __init__(self, frontpage_url: Optional[str] = None):
        self._frontpage_url = frontpage_url or settings.REDDIT_FRONTPAGE_URL
        self._client = UpstreamClient("reddit", timeout=settings.UPSTREAM_TIMEOUT_SECONDS)

    async def get_frontpage(self) -> list[dict[str, Any]]:
        raw = await self._client.get_json(self._frontpage_url)
        try:
            children = raw["data"]["children"]
        except (KeyError, TypeError) as exc:
            raise UpstreamError("reddit returned an unexpected listing") from exc
        return [self._parse_post(child["data"]) for child in children]

    @staticmethod
    def _parse_post(post: dict[str, Any]) -> dict[str, Any]:
        return {
            "title": post["title"],
            "author": post["author"],
            "subreddit": post["subreddit"],
            "score": post["score"],
            "num_comments": post["num_comments"],
            "url": f"{REDDIT_BASE_URL}{post['permalink']}",
        }

    async def aclose(self) -> None:
        await self._client.aclose()


reddit_provider = RedditProvider()
