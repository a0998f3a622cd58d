"""Plugin manifest consumed by the assistant host to discover the tools."""

from fastapi import APIRouter, Request

from odds_assistant.config import settings
from odds_assistant.services.manifest_service import ManifestCache

router = APIRouter(tags=["plugin"])


def _manifest_for(request: Request) -> dict:
    # One cache per application instance.
    cache = getattr(request.app.state, "manifest_cache", None)
    if cache is None:
        cache = ManifestCache()
        request.app.state.manifest_cache = cache
    return cache.get(request.app, settings)


@router.get("/api/ai-plugin", summary="Assistant plugin manifest")
async def get_plugin_manifest(request: Request) -> dict:
    return _manifest_for(request)


@router.get("/.well-known/ai-plugin.json", include_in_schema=False)
async def get_well_known_manifest(request: Request) -> dict:
    return _manifest_for(request)
