"""Shared test fixtures for ifbsync tests."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from ifbsync.contracts.config import IfbSyncConfig
from ifbsync.contracts.dataset import LocalDataset
from tests.fakes.provider import FakeProvider


@pytest.fixture
def provider() -> FakeProvider:
    return FakeProvider()


@pytest.fixture
def sample_config() -> IfbSyncConfig:
    """A minimal valid config with static-token auth."""
    return IfbSyncConfig(server_name="acme", profile_id=42, auth="token", token="tok_123", page_size=2)


@pytest.fixture
def survey_dataset() -> LocalDataset:
    """Mixed-kind dataset keyed by Survey_ID."""
    return LocalDataset.from_records(
        [
            {
                "Survey_ID": 1,
                "surveyor": "Ana",
                "fish_count": 12,
                "start_point": 1.5,
                "survey_datetime": datetime(2024, 5, 1, 8, 30, tzinfo=timezone.utc),
                "survey_completed": True,
            },
            {
                "Survey_ID": 2,
                "surveyor": "Bo",
                "fish_count": 4,
                "start_point": 2.0,
                "survey_datetime": datetime(2024, 5, 2, 9, 0, tzinfo=timezone.utc),
                "survey_completed": False,
            },
        ]
    )
