from __future__ import annotations

import logging

import pytest

from ifbsync.contracts.dataset import LocalDataset
from ifbsync.contracts.exceptions import DuplicateIdentifier
from ifbsync.contracts.page import RemoteRecord
from ifbsync.engine.reconcile import comparable, compute_field_intersection, plan_mutations


def local(rows: list[dict]) -> LocalDataset:
    return LocalDataset.from_records(rows)


def remote(*rows: tuple[int, dict]) -> list[RemoteRecord]:
    return [RemoteRecord(id=record_id, values=values) for record_id, values in rows]


def test_field_intersection_keeps_local_order_and_is_subset_of_both() -> None:
    local_columns = ["uid", "b", "a", "local_only"]
    remote_fields = ["a", "remote_only", "uid", "b"]

    fields = compute_field_intersection(local_columns, remote_fields)

    assert fields == ["uid", "b", "a"]
    assert set(fields) <= set(local_columns)
    assert set(fields) <= set(remote_fields)
    assert "uid" in fields


def test_insert_set_contains_only_rows_missing_remotely() -> None:
    dataset = local([{"uid": str(i), "name": f"n{i}"} for i in (2, 3, 4, 5)])
    snapshot = remote(*((100 + i, {"uid": str(i), "name": f"n{i}"}) for i in (1, 2, 3)))

    mutations = plan_mutations(dataset, snapshot, "uid", ["uid", "name"])

    assert [row["uid"] for row in mutations.to_insert] == ["4", "5"]


def test_uid_matching_is_type_insensitive() -> None:
    dataset = local([{"uid": "2"}, {"uid": "3"}])
    snapshot = remote((10, {"uid": 2}), (11, {"uid": 3.0}))

    assert plan_mutations(dataset, snapshot, "uid", ["uid"]).to_insert == []


def test_empty_remote_inserts_whole_projected_dataset() -> None:
    dataset = local([{"uid": "1", "name": "a", "extra": "x"}, {"uid": "2", "name": "b", "extra": "y"}])

    mutations = plan_mutations(dataset, [], "uid", ["uid", "name"], update=True, delete=True)

    assert mutations.to_insert == [{"uid": "1", "name": "a"}, {"uid": "2", "name": "b"}]
    assert mutations.to_update == []
    assert mutations.to_delete == []


def test_delete_set_contains_remote_rows_missing_locally() -> None:
    dataset = local([{"uid": "2"}, {"uid": "3"}])
    snapshot = remote((30, {"uid": "3"}), (10, {"uid": "1"}), (20, {"uid": "2"}))

    mutations = plan_mutations(dataset, snapshot, "uid", ["uid"], delete=True)

    assert [record.values["uid"] for record in mutations.to_delete] == ["1"]
    assert [record.id for record in mutations.to_delete] == [10]


def test_delete_set_is_not_computed_unless_requested() -> None:
    dataset = local([{"uid": "2"}])
    snapshot = remote((10, {"uid": "1"}))

    assert plan_mutations(dataset, snapshot, "uid", ["uid"], delete=False).to_delete == []


def test_update_compares_rows_with_the_same_uid() -> None:
    # Local row 1 equals remote row 2 field-for-field apart from the uid; it must
    # still be compared with remote row 1 only.
    dataset = local(
        [
            {"uid": "1", "name": "Bo", "count": "4"},
            {"uid": "2", "name": "Bo", "count": "4"},
        ]
    )
    snapshot = remote(
        (10, {"uid": "1", "name": "Ana", "count": "4"}),
        (20, {"uid": "2", "name": "Bo", "count": 4}),
    )

    mutations = plan_mutations(dataset, snapshot, "uid", ["uid", "name", "count"])

    assert len(mutations.to_update) == 1
    update = mutations.to_update[0]
    assert update.record_id == 10
    assert update.uid_value == "1"
    assert update.values == {"name": "Bo"}


def test_update_treats_none_and_empty_string_as_equal() -> None:
    dataset = local([{"uid": "1", "note": None}])
    snapshot = remote((10, {"uid": "1", "note": ""}))

    assert plan_mutations(dataset, snapshot, "uid", ["uid", "note"]).to_update == []


def test_update_set_is_not_computed_unless_requested() -> None:
    dataset = local([{"uid": "1", "name": "new"}])
    snapshot = remote((10, {"uid": "1", "name": "old"}))

    assert plan_mutations(dataset, snapshot, "uid", ["uid", "name"], update=False).to_update == []


def test_sets_are_disjoint_and_deterministic() -> None:
    dataset = local([{"uid": str(i), "v": str(i * 10)} for i in (5, 1, 3, 7)])
    snapshot = remote(
        (4, {"uid": "3", "v": "31"}),
        (2, {"uid": "9", "v": "0"}),
        (3, {"uid": "1", "v": "10"}),
        (1, {"uid": "8", "v": "0"}),
    )

    first = plan_mutations(dataset, snapshot, "uid", ["uid", "v"], update=True, delete=True)
    second = plan_mutations(dataset, list(reversed(snapshot)), "uid", ["uid", "v"], update=True, delete=True)

    assert first == second
    inserted = {row["uid"] for row in first.to_insert}
    updated = {update.uid_value for update in first.to_update}
    deleted = {record.values["uid"] for record in first.to_delete}
    assert inserted == {"5", "7"}
    assert updated == {"3"}
    assert deleted == {"8", "9"}
    assert [row["uid"] for row in first.to_insert] == ["5", "7"]
    assert [record.id for record in first.to_delete] == [1, 2]


def test_duplicate_local_uids_are_rejected() -> None:
    dataset = local([{"uid": "1"}, {"uid": "2"}, {"uid": "1"}])

    with pytest.raises(DuplicateIdentifier) as exc_info:
        plan_mutations(dataset, [], "uid", ["uid"])

    assert exc_info.value.values == ["1"]


def test_duplicate_remote_uids_use_lowest_record_id(caplog: pytest.LogCaptureFixture) -> None:
    dataset = local([{"uid": "1", "name": "new"}])
    snapshot = remote((20, {"uid": "1", "name": "new"}), (10, {"uid": "1", "name": "old"}))

    with caplog.at_level(logging.WARNING):
        mutations = plan_mutations(dataset, snapshot, "uid", ["uid", "name"])

    assert [update.record_id for update in mutations.to_update] == [10]
    assert "share" in caplog.text


def test_comparable() -> None:
    assert comparable(None) == ""
    assert comparable(4.0) == "4"
    assert comparable("4") == "4"
    assert comparable(1714552200) == "1714552200"
