"""Tests for the blob-backed group registry."""

import threading
import time
from unittest.mock import MagicMock

import pytest

from app.core.codes import generate_code
from app.core.exceptions import GroupNotFoundError
from app.modules.groups import service as group_service_module
from app.modules.groups.service import GROUP_BLOB_PREFIX, GroupService
from app.storage.memory_blob_store import InMemoryBlobStore


class FailingPutStore(InMemoryBlobStore):
    """Blob store whose writes can be switched off."""

    def __init__(self):
        super().__init__()
        self.fail_writes = False

    def put(self, key, data, content_type="application/json"):
        if self.fail_writes:
            raise OSError("storage unavailable")
        super().put(key, data, content_type)


def _sequence(monkeypatch, name, values):
    it = iter(values)
    monkeypatch.setattr(group_service_module, name, lambda: next(it))


def test_create_group_persists_document(group_service, blob_store):
    group = group_service.create_group("Thursday Hockey")

    assert group.name == "Thursday Hockey"
    assert len(group.admin_code) == 8
    assert group.members == []
    assert blob_store.list(GROUP_BLOB_PREFIX) == [f"{GROUP_BLOB_PREFIX}{group.id}.json"]

    raw = blob_store.get(f"{GROUP_BLOB_PREFIX}{group.id}.json").decode("utf-8")
    assert '"adminCode"' in raw
    assert '"createdAt"' in raw


def test_admin_codes_regenerate_on_collision(group_service, monkeypatch):
    _sequence(monkeypatch, "generate_admin_code", ["AAAAAAAA", "AAAAAAAA", "BBBBBBBB"])

    first = group_service.create_group("One")
    second = group_service.create_group("Two")

    assert first.admin_code == "AAAAAAAA"
    assert second.admin_code == "BBBBBBBB"


def test_member_codes_unique_across_groups(group_service, monkeypatch):
    _sequence(monkeypatch, "generate_member_code", ["aaaaaa", "aaaaaa", "bbbbbb"])
    first = group_service.create_group("One")
    second = group_service.create_group("Two")

    m1 = group_service.add_member(first.id, "Alex")
    m2 = group_service.add_member(second.id, "Sam")

    assert m1.code == "aaaaaa"
    assert m2.code == "bbbbbb"


def test_admin_code_lookup_is_case_insensitive(group_service):
    group = group_service.create_group("Foo")

    assert group_service.get_group_by_admin_code(group.admin_code.lower()).id == group.id
    assert group_service.get_group_by_admin_code(group.admin_code.upper()).id == group.id
    assert group_service.get_group_by_admin_code("ZZZZZZZZ") is None


def test_get_group_by_id_missing_returns_none(group_service):
    assert group_service.get_group_by_id("missing") is None


def test_member_code_lookup_scans_all_groups(group_service):
    group_service.create_group("Other")
    group = group_service.create_group("Target")
    member = group_service.add_member(group.id, "Alex")

    found = group_service.get_group_by_member_code(member.code.upper())
    assert found is not None
    found_group, found_member = found
    assert found_group.id == group.id
    assert found_member.label == "Alex"
    assert found_member.active is True


def test_add_member_to_missing_group_raises(group_service):
    with pytest.raises(GroupNotFoundError):
        group_service.add_member("missing", "Alex")


def test_revoke_member_is_soft_delete(group_service, blob_store):
    group = group_service.create_group("Foo")
    member = group_service.add_member(group.id, "Alex")

    assert group_service.revoke_member(group.id, member.code.upper()) is True

    stored = group_service.get_group_by_id(group.id)
    assert len(stored.members) == 1
    assert stored.members[0].active is False
    assert group_service.get_group_by_member_code(member.code) is None

    reloaded = GroupService(blob_store).get_group_by_id(group.id)
    assert reloaded.members[0].active is False


def test_revoke_member_missing_group_or_member(group_service):
    group = group_service.create_group("Foo")

    assert group_service.revoke_member("missing", "abcdef") is False
    assert group_service.revoke_member(group.id, "abcdef") is False


def test_lazy_load_lists_once_and_skips_corrupt_documents(blob_store):
    seed = GroupService(blob_store)
    first = seed.create_group("One")
    second = seed.create_group("Two")
    blob_store.put(f"{GROUP_BLOB_PREFIX}broken.json", b"{not json")
    blob_store.put(f"{GROUP_BLOB_PREFIX}partial.json", b'{"id": "x"}')

    spy = MagicMock(wraps=blob_store)
    service = GroupService(spy)

    assert service.get_group_by_id(first.id).name == "One"
    assert service.get_group_by_admin_code(second.admin_code).name == "Two"
    assert spy.list.call_count == 1
    assert len(service._groups) == 2


def test_round_trip_through_new_instance(group_service, blob_store):
    group = group_service.create_group("Foo")

    reloaded = GroupService(blob_store).get_group_by_id(group.id)

    assert reloaded.name == "Foo"
    assert reloaded.admin_code == group.admin_code
    assert reloaded.created_at == group.created_at


def test_failed_write_leaves_state_untouched():
    store = FailingPutStore()
    service = GroupService(store)
    group = service.create_group("Foo")

    store.fail_writes = True
    with pytest.raises(OSError):
        service.add_member(group.id, "Alex")
    with pytest.raises(OSError):
        service.create_group("Bar")

    assert service.get_group_by_id(group.id).members == []
    assert len(service._groups) == 1


def test_end_to_end_membership_flow(group_service):
    group = group_service.create_group("Thursday Hockey")
    member = group_service.add_member(group.id, "Alex")

    found_group, found_member = group_service.get_group_by_member_code(member.code.upper())
    assert found_group.id == group.id
    assert found_member.label == "Alex"

    assert group_service.revoke_member(group.id, member.code) is True
    assert group_service.get_group_by_member_code(member.code.upper()) is None


class SlowListStore(InMemoryBlobStore):
    """Blob store whose listing takes long enough for callers to pile up."""

    def list(self, prefix=""):
        time.sleep(0.05)
        return super().list(prefix)


def _run_threads(count, target):
    barrier = threading.Barrier(count)
    results = []
    errors = []

    def worker(i):
        barrier.wait()
        try:
            results.append(target(i))
        except Exception as e:
            errors.append(e)

    threads = [threading.Thread(target=worker, args=(i,)) for i in range(count)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert errors == []
    return results


def test_concurrent_first_access_loads_once():
    store = SlowListStore()
    group = GroupService(store).create_group("One")
    spy = MagicMock(wraps=store)
    service = GroupService(spy)

    results = _run_threads(16, lambda i: service.get_group_by_id(group.id))

    assert spy.list.call_count == 1
    assert all(g.name == "One" for g in results)


def test_concurrent_adds_produce_distinct_member_codes(group_service, monkeypatch):
    groups = [group_service.create_group(f"Group {i}") for i in range(4)]
    # A tiny alphabet makes collisions likely, so the uniqueness check has to hold under contention
    monkeypatch.setattr(
        group_service_module, "generate_member_code", lambda: generate_code("ab", 6)
    )

    members = _run_threads(32, lambda i: group_service.add_member(groups[i % 4].id, f"M{i}"))

    codes = [m.code for m in members]
    assert len(codes) == 32
    assert len(set(codes)) == 32
    stored = [m.code for g in groups for m in group_service.get_group_by_id(g.id).members]
    assert sorted(stored) == sorted(codes)
