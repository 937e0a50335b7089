from __future__ import annotations

import pytest

from ifbsync.contracts.dataset import LocalDataset
from ifbsync.contracts.exceptions import ProviderError
from ifbsync.contracts.page import ElementInput, ElementType
from ifbsync.engine.engine import SyncEngine
from ifbsync.providers.dry_run import DryRunProvider
from tests.fakes.provider import FakeProvider


def test_created_pages_get_placeholder_ids_and_are_listed() -> None:
    provider = DryRunProvider()

    page_id = provider.create_page("fish_survey", "Fish Survey")
    element_id = provider.create_element(page_id, ElementInput(name="uid", label="Uid", data_type=ElementType.NUMBER))

    assert page_id == 900_000_001
    assert element_id == 900_000_002
    assert [page.name for page in provider.list_pages()] == ["fish_survey"]
    assert provider.list_elements(page_id)[0]["name"] == "uid"
    assert provider.fetch_records(page_id, ["uid"], limit=10) == []


def test_reads_are_forwarded_to_source(provider: FakeProvider) -> None:
    page_id = provider.add_page("visits", {"visit_id": 2})
    provider.add_records(page_id, [{"visit_id": "1"}])
    dry = DryRunProvider(source=provider)

    assert [page.id for page in dry.list_pages()] == [page_id]
    assert dry.list_elements(page_id)[0]["name"] == "visit_id"
    assert dry.fetch_records(page_id, ["visit_id"], limit=10)[0]["visit_id"] == "1"
    assert dry.get_page(page_id)["name"] == "visits"


def test_writes_never_reach_source(provider: FakeProvider) -> None:
    page_id = provider.add_page("visits", {"visit_id": 2})
    ids = provider.add_records(page_id, [{"visit_id": "1"}])
    dry = DryRunProvider(source=provider)

    created = dry.create_records(page_id, [{"visit_id": "2"}, {"visit_id": "3"}])
    dry.update_records(page_id, [(ids[0], {"visit_id": "9"})])
    dry.delete_records(page_id, ids)

    assert len(created) == 2
    assert all(record_id > 900_000_000 for record_id in created)
    assert provider.create_records_calls == []
    assert provider.update_records_calls == []
    assert provider.delete_records_calls == []
    assert dry.writes == [
        ("create_records", page_id, 2),
        ("update_records", page_id, 1),
        ("delete_records", page_id, 1),
    ]


def test_cannot_add_elements_to_existing_page(provider: FakeProvider) -> None:
    page_id = provider.add_page("visits", {"visit_id": 2})

    with pytest.raises(ProviderError, match="dry-run"):
        DryRunProvider(source=provider).create_element(
            page_id, ElementInput(name="x", label="X", data_type=ElementType.TEXT)
        )


def test_without_source_missing_resources_raise() -> None:
    provider = DryRunProvider()

    with pytest.raises(ProviderError):
        provider.get_page(1)
    with pytest.raises(ProviderError):
        provider.list_elements(1)
    with pytest.raises(ProviderError):
        provider.get_option_list(1)


def test_dry_run_sync_reports_counts_without_writing(provider: FakeProvider) -> None:
    page_id = provider.add_page("visits", {"visit_id": 2, "site": 1})
    provider.add_records(page_id, [{"visit_id": "1", "site": "A"}, {"visit_id": "2", "site": "B"}])
    dataset = LocalDataset.from_records([{"visit_id": 1, "site": "Z"}, {"visit_id": 3, "site": "C"}])

    with DryRunProvider(source=provider) as dry:
        result = SyncEngine(dry, dry_run=True).sync(dataset, "visits", "visit_id", delete=True)

    assert (result.inserted, result.updated, result.deleted) == (1, 1, 1)
    assert result.dry_run is True
    assert provider.create_records_calls == []
    assert provider.update_records_calls == []
    assert provider.delete_records_calls == []


def test_dry_run_sync_of_new_page_creates_nothing(provider: FakeProvider) -> None:
    dataset = LocalDataset.from_records([{"visit_id": 1, "site": "A"}])

    with DryRunProvider(source=provider) as dry:
        result = SyncEngine(dry, dry_run=True).sync(dataset, "New Visits", "visit_id")

    assert result.page_created is True
    assert result.page_id > 900_000_000
    assert result.inserted == 1
    assert provider.create_page_calls == []
    assert provider.pages == {}
