"""Shared fixtures."""

from __future__ import annotations

import pytest

from tests.fake_github import (
    DIFFSTAT_PATH,
    OVERVIEW_PATH,
    REPO_API_PATH,
    REPO_PAGE_PATH,
    failing,
    unreachable,
)


@pytest.fixture
def all_failing_overrides():
    return {
        OVERVIEW_PATH: failing(400),
        DIFFSTAT_PATH: failing(400),
        REPO_API_PATH: failing(403),
        REPO_PAGE_PATH: unreachable,
    }
