"""
Backing-store load/save against files in a temporary directory.
"""
import pytest

from pwvault import storage


def test_missing_file_is_empty(tmp_path):
    assert storage.load(str(tmp_path / "nope")) == {}


def test_parse_line():
    assert storage.parse_line("example.com alice pw1\n") == ("example.com", "alice", "pw1")
    assert storage.parse_line("   a\tb   c  ") == ("a", "b", "c")
    assert storage.parse_line("") is None
    assert storage.parse_line("only two") is None
    assert storage.parse_line("one two three four") is None


def test_load_skips_malformed_lines(vault_file):
    vault_file.write_text(
        "example.com alice pw1\n"
        "garbage\n"
        "\n"
        "too many fields here now\n"
        "example.com bob pw2\n"
        "other.org carol pw3\n"
    )
    records = storage.load(str(vault_file))
    assert records == {
        "example.com": [("alice", "pw1"), ("bob", "pw2")],
        "other.org": [("carol", "pw3")],
    }


def test_load_accepts_padded_columns(vault_file):
    vault_file.write_text("%40s %20s %20s\n" % ("example.com", "alice", "pw1"))
    assert storage.load(str(vault_file)) == {"example.com": [("alice", "pw1")]}


def test_save_truncates_and_writes_single_spaces(vault_file):
    vault_file.write_text("stale stale stale\n" * 10)
    storage.save(str(vault_file), {"example.com": [("alice", "pw1"), ("bob", "pw2")]})
    assert vault_file.read_text() == "example.com alice pw1\nexample.com bob pw2\n"


def test_save_creates_parent_dir(tmp_path):
    target = tmp_path / "sub" / "dir" / "vault"
    storage.save(str(target), {"s": [("u", "p")]})
    assert target.read_text() == "s u p\n"


def test_save_empty_writes_empty_file(vault_file):
    storage.save(str(vault_file), {})
    assert vault_file.exists()
    assert vault_file.read_text() == ""


def test_load_error_other_than_missing(tmp_path):
    # a directory cannot be opened for reading as a file
    with pytest.raises(storage.VaultIOError):
        storage.load(str(tmp_path))


def test_save_error(tmp_path):
    with pytest.raises(storage.VaultIOError) as excinfo:
        storage.save(str(tmp_path), {"s": [("u", "p")]})
    assert isinstance(excinfo.value.__cause__, OSError)


def test_round_trip(vault_file):
    records = {
        "b.com": [("zed", "1"), ("amy", "2")],
        "a.com": [("bob", "3")],
    }
    storage.save(str(vault_file), records)
    loaded = storage.load(str(vault_file))
    assert loaded == records
    assert list(loaded["b.com"]) == [("zed", "1"), ("amy", "2")]


def test_non_utf8_bytes_load_and_survive_save(vault_file):
    raw = b"keep.com alice pw1\nsite u p\xe9\n"
    vault_file.write_bytes(raw)
    records = storage.load(str(vault_file))
    assert records["keep.com"] == [("alice", "pw1")]
    assert records["site"] == [("u", "p\udce9")]

    storage.save(str(vault_file), records)
    assert vault_file.read_bytes() == raw


def test_unencodable_field_keeps_old_file(vault_file):
    vault_file.write_text("a.com x y\nb.com keep me\n")
    records = storage.load(str(vault_file))
    records["a.com"].append(("u", "p\ud800"))
    with pytest.raises(storage.VaultIOError) as excinfo:
        storage.save(str(vault_file), records)
    assert isinstance(excinfo.value.__cause__, UnicodeError)
    assert vault_file.read_text() == "a.com x y\nb.com keep me\n"


class FailingFile:
    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def __iter__(self):
        yield "a.com x y\n"
        raise OSError("I/O error")


def test_read_error_is_not_reported_as_open_error(vault_file, monkeypatch):
    monkeypatch.setattr(storage, "open", lambda *a, **kw: FailingFile(), raising=False)
    with pytest.raises(storage.VaultIOError) as excinfo:
        storage.load(str(vault_file))
    assert str(excinfo.value) == "Error reading file: I/O error"


def test_open_error_message(tmp_path):
    with pytest.raises(storage.VaultIOError) as excinfo:
        storage.load(str(tmp_path))
    assert str(excinfo.value).startswith("Error opening file:")
