import os

import pytest

from hostsctl import Config, HostEntry, HostsEditor, HostsWriteError


@pytest.fixture
def editor(hosts_path):
    return HostsEditor(Config(hosts_file_path=str(hosts_path)), sleep=lambda seconds: None)


class TestHostsEditor:
    def test_invalid_config_rejected(self, hosts_path) -> None:
        with pytest.raises(ValueError):
            HostsEditor(Config(hosts_file_path=str(hosts_path), log_level="LOUD"))

    def test_missing_file_lists_nothing(self, editor) -> None:
        assert editor.list_host_entries() == []

    def test_add_is_additive(self, editor, hosts_path) -> None:
        hosts_path.write_text("# header\n127.0.0.1\tlocalhost\n")
        before = editor.list_host_entries()

        editor.add_host_entry("10.0.0.1", ["h1", "h2"])

        after = editor.list_host_entries()
        assert after[:-1] == before
        assert after[-1] == HostEntry("10.0.0.1", ["h1", "h2"])

    def test_remove_is_idempotent(self, editor, hosts_path) -> None:
        hosts_path.write_text("127.0.0.1\tlocalhost\n10.0.0.1\ta b\n")
        assert editor.remove_hostnames(["a"]) == 1
        once = hosts_path.read_text()
        assert editor.remove_hostnames(["a"]) == 0
        assert hosts_path.read_text() == once

    def test_remove_reduces_then_drops_entry(self, editor, hosts_path) -> None:
        hosts_path.write_text("127.0.0.1\tfoobar foo bar\n")
        editor.remove_hostnames(["foo", "bar"])
        assert editor.list_host_entries() == [HostEntry("127.0.0.1", ["foobar"])]

        hosts_path.write_text("127.0.0.1\tfoobar foo bar\n")
        editor.remove_hostnames(["foobar", "foo", "bar"])
        assert editor.list_host_entries() == []

    def test_remove_case_insensitive(self, editor) -> None:
        editor.add_host_entry("127.0.0.1", ["foobar"])
        assert editor.remove_hostnames(["FOOBAR"]) == 1
        assert editor.find_entries("foobar") == []

    def test_noop_remove_leaves_file_untouched(self, editor, hosts_path) -> None:
        hosts_path.write_text("127.0.0.1   localhost\n")
        os.utime(hosts_path, ns=(1_000_000_000, 1_000_000_000))

        assert editor.remove_hostnames(["doesnotexist"]) == 0

        assert os.stat(hosts_path).st_mtime_ns == 1_000_000_000
        assert hosts_path.read_text() == "127.0.0.1   localhost\n"

    def test_remove_keeps_header_comments(self, editor, hosts_path) -> None:
        hosts_path.write_text("# header\n#\n\n10.0.0.1\tgone # note\n127.0.0.1\tlocalhost\n")
        editor.remove_hostnames(["gone"])
        assert hosts_path.read_text() == "# header\n#\n\n127.0.0.1\tlocalhost\n"

    def test_find_entries(self, editor, hosts_path) -> None:
        hosts_path.write_text("10.0.0.1\tdb\n10.0.0.2\tweb DB\n")
        assert [e.address for e in editor.find_entries("db")] == ["10.0.0.1", "10.0.0.2"]

    def test_write_failure_propagates(self, editor, hosts_path, monkeypatch) -> None:
        def replace(src, dst):
            raise PermissionError("locked")

        monkeypatch.setattr(os, "replace", replace)
        with pytest.raises(HostsWriteError):
            editor.add_host_entry("10.0.0.1", ["db"])
        assert not hosts_path.exists()
