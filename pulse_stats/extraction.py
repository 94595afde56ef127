"""
Turns the raw source responses into a StatisticsRecord.

JSON sources are read field by field. The main page is parsed with
BeautifulSoup and each scraped value is located by an entry of SCRAPE_RULES,
so a change in GitHub's markup only means editing that table.
"""
import logging
import re
from typing import Any, Callable, Dict, List, NamedTuple, Optional

import httpx
from bs4 import BeautifulSoup, Tag

from .github_client import SourceResponses, fetch_sources
from .models import StatisticsRecord

logger = logging.getLogger(__name__)

_DIGITS = re.compile(r"[0-9]+")


def just_number(node: Optional[Tag]) -> Optional[int]:
    """
    Return the first run of digits in the node's text as an int.

    Only the first run counts, so "1,234" yields 1. A missing node or text
    without digits yields None and logs the offending markup.
    """
    text = node.get_text().strip() if node is not None else ""
    match = _DIGITS.search(text)
    if match:
        return int(match.group(0))

    markup = str(node) if node is not None else "<no matching element>"
    logger.error(f"Failed to extract number from: {markup}")
    return None


# ── Scrape rules for the main page ────────────────────────────────────────


class ScrapeRule(NamedTuple):
    field: str
    locate: Callable[[BeautifulSoup], Optional[Tag]]


def _next_to_label(label: str) -> Callable[[BeautifulSoup], Optional[Tag]]:
    """
    Locate the element right after the tab label with the given data-content.

    Only the first matching label is used; later duplicates are ignored.
    """
    def locate(soup: BeautifulSoup) -> Optional[Tag]:
        span = soup.select_one(f"span[data-content='{label}']")
        return span.find_next_sibling() if span is not None else None
    return locate


def _contributors_counter(soup: BeautifulSoup) -> Optional[Tag]:
    return soup.select_one("a[href$='/graphs/contributors'] .Counter")


SCRAPE_RULES: List[ScrapeRule] = [
    ScrapeRule("total_pull_requests", _next_to_label("Pull requests")),
    ScrapeRule("total_issues", _next_to_label("Issues")),
    ScrapeRule("total_contributors", _contributors_counter),
]


# ── Per-source extractors ─────────────────────────────────────────────────


def _ok(resp: Optional[httpx.Response]) -> bool:
    return resp is not None and resp.is_success


def _json_body(resp: httpx.Response, source: str) -> Optional[Dict[str, Any]]:
    try:
        data = resp.json()
    except ValueError as exc:
        logger.warning(f"{source} returned invalid JSON: {exc}")
        return None
    if not isinstance(data, dict):
        logger.warning(f"{source} returned {type(data).__name__}, expected an object")
        return None
    return data


def _count(data: Dict[str, Any], key: str, source: str) -> Optional[int]:
    items = data.get(key)
    if not isinstance(items, list):
        logger.warning(f"{source}: '{key}' is missing or not a list")
        return None
    return len(items)


def _integer(data: Dict[str, Any], key: str, source: str) -> Optional[int]:
    value = data.get(key)
    if isinstance(value, bool) or not isinstance(value, int):
        logger.warning(f"{source}: '{key}' is missing or not an integer")
        return None
    return value


def extract_overview(resp: Optional[httpx.Response]) -> Dict[str, Any]:
    """Monthly issue and pull request counts from the pulse overview."""
    if not _ok(resp):
        return {}
    data = _json_body(resp, "pulse overview")
    if data is None:
        return {}

    range_label = data.get("rangeLabel")
    if range_label is not None and not isinstance(range_label, str):
        logger.warning("pulse overview: 'rangeLabel' is not a string")
        range_label = None

    return {
        "range_label": range_label,
        "new_issues_last_month": _count(data, "newIssues", "pulse overview"),
        "closed_issues_last_month": _count(data, "closedIssues", "pulse overview"),
        "opened_pull_requests_last_month": _count(data, "newPulls", "pulse overview"),
        "merged_pull_requests_last_month": _count(data, "mergedPulls", "pulse overview"),
    }


def extract_diffstat(resp: Optional[httpx.Response]) -> Dict[str, Any]:
    """Number of authors with commits in the last month."""
    if not _ok(resp):
        return {}
    data = _json_body(resp, "pulse diffstat")
    if data is None:
        return {}
    return {"contributors_last_month": _integer(data, "authorsWithCommits", "pulse diffstat")}


def extract_repo_api(resp: Optional[httpx.Response]) -> Dict[str, Any]:
    """Star count from the public REST API."""
    if not _ok(resp):
        return {}
    data = _json_body(resp, "repository API")
    if data is None:
        return {}
    return {"total_starcount": _integer(data, "stargazers_count", "repository API")}


def extract_repo_page(
    resp: Optional[httpx.Response],
    rules: Optional[List[ScrapeRule]] = None,
) -> Dict[str, Any]:
    """Totals scraped from the project's main page."""
    if not _ok(resp):
        return {}
    soup = BeautifulSoup(resp.text, "html.parser")
    return {
        rule.field: just_number(rule.locate(soup))
        for rule in (rules if rules is not None else SCRAPE_RULES)
    }


# ── Aggregation ───────────────────────────────────────────────────────────


def aggregate(responses: SourceResponses) -> StatisticsRecord:
    """Merge the four sources into one record; a failed source only blanks its own fields."""
    fields: Dict[str, Any] = {}
    fields.update(extract_overview(responses.overview))
    fields.update(extract_diffstat(responses.diffstat))
    fields.update(extract_repo_api(responses.repo_api))
    fields.update(extract_repo_page(responses.repo_page))
    return StatisticsRecord(**fields)


async def collect_statistics(client: Optional[httpx.AsyncClient] = None) -> StatisticsRecord:
    """Fetch every source and build a fresh StatisticsRecord."""
    responses = await fetch_sources(client)
    return aggregate(responses)
