from __future__ import annotations

from datetime import date

import pytest

from ifbsync.contracts.dataset import LocalDataset
from ifbsync.contracts.exceptions import InvariantViolation, PageCreationError, UnsupportedColumnType
from ifbsync.contracts.page import ElementType, PageSummary
from ifbsync.engine.normalize import column_kinds
from ifbsync.engine.pages import PageResolver
from tests.fakes.provider import FakeProvider


def resolve(provider: FakeProvider, dataset: LocalDataset, name: str = "My Survey!", **kwargs):
    return PageResolver(provider).resolve(name, dataset, column_kinds(dataset), **kwargs)


def test_resolve_creates_missing_page_with_one_element_per_column(
    provider: FakeProvider, survey_dataset: LocalDataset
) -> None:
    page, created = resolve(provider, survey_dataset)

    assert created is True
    assert provider.create_page_calls == [("my_survey", "My Survey")]
    assert page.name == "my_survey"
    assert page.label == "My Survey"
    assert page.field_names == [
        "survey_id",
        "surveyor",
        "fish_count",
        "start_point",
        "survey_datetime",
        "survey_completed",
    ]
    assert [field.data_type for field in page.fields] == [2, 1, 2, 2, 5, 6]


def test_resolve_uses_caller_label(provider: FakeProvider, survey_dataset: LocalDataset) -> None:
    page, _ = resolve(provider, survey_dataset, label="Fish Survey 2024")

    assert provider.create_page_calls == [("my_survey", "Fish Survey 2024")]
    assert page.label == "Fish Survey 2024"


def test_resolve_reuses_existing_page_and_schema(provider: FakeProvider, survey_dataset: LocalDataset) -> None:
    page_id = provider.add_page("my_survey", {"survey_id": ElementType.NUMBER, "notes": ElementType.TEXT})

    page, created = resolve(provider, survey_dataset, name="my_survey")

    assert created is False
    assert page.id == page_id
    assert page.field_names == ["survey_id", "notes"]
    assert provider.create_page_calls == []
    assert provider.create_element_calls == []


def test_resolve_is_idempotent_across_calls(provider: FakeProvider, survey_dataset: LocalDataset) -> None:
    first, first_created = resolve(provider, survey_dataset, name="My Survey")
    second, second_created = resolve(provider, survey_dataset, name="my_survey")

    assert (first_created, second_created) == (True, False)
    assert first.id == second.id
    assert len(provider.create_page_calls) == 1


def test_page_rejection_raises_page_creation_error(provider: FakeProvider, survey_dataset: LocalDataset) -> None:
    provider.fail_create_page = True

    with pytest.raises(PageCreationError):
        resolve(provider, survey_dataset)


def test_element_rejection_raises_page_creation_error(provider: FakeProvider, survey_dataset: LocalDataset) -> None:
    provider.fail_create_element = "fish_count"

    with pytest.raises(PageCreationError, match="fish_count"):
        resolve(provider, survey_dataset)


def test_unsupported_column_fails_before_any_remote_write(provider: FakeProvider) -> None:
    dataset = LocalDataset.from_records([{"id": 1, "day": date(2024, 1, 1)}])

    with pytest.raises(UnsupportedColumnType):
        resolve(provider, dataset)

    assert provider.create_page_calls == []


class _ZeroIdProvider(FakeProvider):
    def create_page(self, name: str, label: str) -> int:
        super().create_page(name, label)
        return 0


def test_non_positive_created_page_id_is_an_invariant_violation(survey_dataset: LocalDataset) -> None:
    with pytest.raises(InvariantViolation):
        resolve(_ZeroIdProvider(), survey_dataset)


class _NegativeListingProvider(FakeProvider):
    def list_pages(self) -> list[PageSummary]:
        return [PageSummary(id=-3, name="my_survey")]


def test_non_positive_listed_page_id_is_an_invariant_violation(survey_dataset: LocalDataset) -> None:
    with pytest.raises(InvariantViolation):
        resolve(_NegativeListingProvider(), survey_dataset)


def test_ambiguous_page_name_is_an_invariant_violation(provider: FakeProvider, survey_dataset: LocalDataset) -> None:
    provider.add_page("my_survey", {"survey_id": 2})
    provider.add_page("my_survey", {"survey_id": 2})

    with pytest.raises(InvariantViolation, match="several"):
        resolve(provider, survey_dataset)
