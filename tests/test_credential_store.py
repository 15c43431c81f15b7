import pytest

from deepl_sheets.credential_store import FileCredentialStore, MemoryCredentialStore
from deepl_sheets.errors import DeepLError, ErrorKind


def test_file_store_roundtrip(tmp_path):
    store = FileCredentialStore(tmp_path / "state" / "credentials.json")

    assert store.get() is None
    store.set(" abc:fx ")
    assert store.get() == "abc:fx"
    store.delete()
    assert store.get() is None


def test_delete_without_key_is_noop(tmp_path):
    path = tmp_path / "credentials.json"
    FileCredentialStore(path).delete()

    assert not path.exists()


def test_blank_key_is_rejected():
    store = MemoryCredentialStore()

    with pytest.raises(DeepLError) as excinfo:
        store.set("   ")

    assert excinfo.value.kind is ErrorKind.INVALID_INPUT
    assert store.get() is None


def test_corrupt_file_raises_typed_error(tmp_path):
    path = tmp_path / "credentials.json"
    path.write_text("{not json", encoding="utf-8")
    store = FileCredentialStore(path)

    with pytest.raises(DeepLError) as excinfo:
        store.get()

    assert excinfo.value.kind is ErrorKind.MISSING_CREDENTIAL


def test_set_replaces_corrupt_file(tmp_path):
    path = tmp_path / "credentials.json"
    path.write_text("{not json", encoding="utf-8")
    store = FileCredentialStore(path)

    store.set("abc:fx")

    assert store.get() == "abc:fx"
