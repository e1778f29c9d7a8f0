"""Shared fixtures for the edge-journal test suite."""

from __future__ import annotations

from datetime import datetime

import pytest

from edge_journal.core.config import JournalConfig, Settings


@pytest.fixture
def base_time() -> datetime:
    return datetime(2025, 12, 2, 12, 0, 0)


@pytest.fixture
def settings() -> Settings:
    return Settings()


@pytest.fixture
def journal_config() -> JournalConfig:
    return JournalConfig(ta_levels=["Daily Open", "POC"], entry_types=["SFP"])
