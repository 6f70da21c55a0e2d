"""Tests for delegated storage URL issuance."""

from datetime import datetime, timedelta, timezone

import pytest

from app.core.exceptions import StorageConfigurationError
from app.modules.groups.service import GroupService
from app.storage.memory_blob_store import InMemoryBlobStore


def test_read_only_urls_have_no_write_url(group_service):
    tokens = group_service.generate_sas_urls(can_write=False)

    assert tokens.read_url
    assert "sp=rl" in tokens.read_url
    assert tokens.write_url is None


def test_write_urls_share_expiry_three_hours_ahead(group_service):
    before = datetime.now(timezone.utc)
    tokens = group_service.generate_sas_urls(can_write=True)

    assert "sp=rl" in tokens.read_url
    assert "sp=rwcl" in tokens.write_url
    assert abs(tokens.expires_at - (before + timedelta(hours=3))) < timedelta(minutes=1)


def test_tokens_are_fresh_on_every_call(group_service):
    first = group_service.generate_sas_urls(can_write=True)
    second = group_service.generate_sas_urls(can_write=True)

    assert second.expires_at >= first.expires_at


def test_custom_validity_window():
    service = GroupService(InMemoryBlobStore(), sas_validity=timedelta(minutes=30))
    tokens = service.generate_sas_urls(can_write=False)

    expected = datetime.now(timezone.utc) + timedelta(minutes=30)
    assert abs(tokens.expires_at - expected) < timedelta(minutes=1)


def test_store_without_signing_raises_configuration_error():
    service = GroupService(InMemoryBlobStore(can_sign=False))

    with pytest.raises(StorageConfigurationError):
        service.generate_sas_urls(can_write=False)
