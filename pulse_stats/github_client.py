"""
GitHub fetchers for the four statistics sources.

The pulse endpoints are internal to github.com and only answer requests that
look like in-page XHR calls; without the X-Requested-With header they
return 400. Nothing here retries or sets a timeout beyond httpx's defaults.
"""
import asyncio
import logging
from typing import Dict, NamedTuple, Optional

import httpx

from .config import settings

logger = logging.getLogger(__name__)

PULSE_OVERVIEW = "pulse-overview-data"
PULSE_DIFFSTAT = "pulse-diffstat-summary"

# ── Helpers ────────────────────────────────────────────────────────────────


def _pulse_headers() -> Dict[str, str]:
    return {"X-Requested-With": "XMLHttpRequest"}


def _api_headers() -> Dict[str, str]:
    return {
        "Accept": "application/vnd.github+json",
        "X-GitHub-Api-Version": "2022-11-28",
    }


def repo_page_url() -> str:
    base = settings.github_web_base.rstrip("/")
    return f"{base}/{settings.github_owner}/{settings.github_repo}"


def pulse_url(kind: str, period: str = "monthly") -> str:
    return f"{repo_page_url()}/pulse-new/{kind}/{period}"


def repo_api_url() -> str:
    base = settings.github_api_base.rstrip("/")
    return f"{base}/repos/{settings.github_owner}/{settings.github_repo}"


class SourceResponses(NamedTuple):
    """Raw responses of the four sources; None where the request itself failed."""

    overview: Optional[httpx.Response]
    diffstat: Optional[httpx.Response]
    repo_api: Optional[httpx.Response]
    repo_page: Optional[httpx.Response]


# ── Core fetch helper ─────────────────────────────────────────────────────


async def _get(
    client: httpx.AsyncClient,
    url: str,
    headers: Optional[Dict[str, str]] = None,
) -> Optional[httpx.Response]:
    """
    Perform a GET request without raising on failure.

    Non-2xx responses are returned unchanged so the caller can judge them;
    transport errors are logged and turned into None.
    """
    try:
        resp = await client.get(url, headers=headers)
    except httpx.HTTPError as exc:
        logger.warning(f"Request to {url} failed: {exc!r}")
        return None

    if not resp.is_success:
        logger.warning(f"GET {url} returned {resp.status_code}")
    return resp


# ── Public functions ──────────────────────────────────────────────────────


async def fetch_sources(client: Optional[httpx.AsyncClient] = None) -> SourceResponses:
    """
    Fetch all four sources concurrently and wait for every one to settle.

    Args:
        client: Optional client to issue the requests with. When omitted a
            client is created for this call and closed afterwards.

    Returns:
        SourceResponses with one entry per source.
    """
    if client is None:
        async with httpx.AsyncClient(follow_redirects=True) as own_client:
            return await fetch_sources(own_client)

    overview, diffstat, repo_api, repo_page = await asyncio.gather(
        _get(client, pulse_url(PULSE_OVERVIEW), headers=_pulse_headers()),
        _get(client, pulse_url(PULSE_DIFFSTAT), headers=_pulse_headers()),
        _get(client, repo_api_url(), headers=_api_headers()),
        _get(client, repo_page_url()),
    )
    logger.debug(
        "Fetched sources for %s/%s", settings.github_owner, settings.github_repo
    )
    return SourceResponses(overview, diffstat, repo_api, repo_page)
