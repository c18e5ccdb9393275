from __future__ import annotations

import json

import pytest

from codetutor.services.credentials import CredentialStore
from codetutor.services.storage import KeyValueStore, StorageError


@pytest.mark.asyncio
async def test_missing_file_reads_as_empty(store) -> None:
    assert await store.get_item("anything") is None
    assert await store.get_json("anything") is None


@pytest.mark.asyncio
async def test_values_survive_a_new_store_instance(store) -> None:
    await store.set_item("currentMode", "avancado")
    await store.set_json("userInfo", {"name": "Ana", "sessionId": "session-1"})

    reopened = KeyValueStore(store.path)

    assert await reopened.get_item("currentMode") == "avancado"
    assert await reopened.get_json("userInfo") == {"name": "Ana", "sessionId": "session-1"}
    assert json.loads(store.path.read_text(encoding="utf-8"))["currentMode"] == "avancado"


@pytest.mark.asyncio
async def test_remove_item(store) -> None:
    await store.set_item("a", "1")
    await store.set_item("b", "2")

    await store.remove_item("a")
    await store.remove_item("never-set")

    assert await store.get_item("a") is None
    assert await store.get_item("b") == "2"


@pytest.mark.asyncio
async def test_only_strings_are_stored(store) -> None:
    with pytest.raises(TypeError):
        await store.set_item("count", 3)


@pytest.mark.asyncio
async def test_corrupt_file_raises_storage_error(store) -> None:
    store.path.write_text("not json", encoding="utf-8")

    with pytest.raises(StorageError):
        await store.get_item("anything")


@pytest.mark.asyncio
async def test_non_json_value_raises_storage_error(store) -> None:
    await store.set_item("userInfo", "plain text")

    with pytest.raises(StorageError):
        await store.get_json("userInfo")


@pytest.mark.asyncio
async def test_credential_round_trip(credentials) -> None:
    assert await credentials.get() is None

    assert await credentials.set("AIza-test-key") is True
    assert await credentials.get() == "AIza-test-key"
    assert await credentials.is_configured() is True

    assert await credentials.clear() is True
    assert await credentials.get() is None
    assert await credentials.is_configured() is False


@pytest.mark.asyncio
async def test_credential_is_stripped_and_blank_rejected(credentials) -> None:
    await credentials.set("  padded  ")
    assert await credentials.get() == "padded"

    with pytest.raises(ValueError):
        await credentials.set("   ")


@pytest.mark.asyncio
async def test_credential_set_reports_storage_failure(tmp_path) -> None:
    blocker = tmp_path / "not-a-dir"
    blocker.write_text("", encoding="utf-8")
    credentials = CredentialStore(KeyValueStore(blocker / "storage.json"))

    assert await credentials.set("key") is False
