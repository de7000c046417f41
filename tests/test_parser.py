import pytest

from hostsctl.models import HostEntry
from hostsctl.parser import parse_line, parse_lines, serialize


class TestParseLine:
    def test_address_and_hostnames(self) -> None:
        assert parse_line("127.0.0.1\tfoobar foo bar") == HostEntry(
            "127.0.0.1", ["foobar", "foo", "bar"]
        )

    def test_whitespace_runs(self) -> None:
        assert parse_line("  10.0.0.1 \t  a\t\tb  ") == HostEntry("10.0.0.1", ["a", "b"])

    def test_blank_line(self) -> None:
        assert parse_line("") == HostEntry()
        assert parse_line("   \t ") == HostEntry()

    def test_lone_hash_is_empty_comment(self) -> None:
        entry = parse_line("#")
        assert entry.comment == ""
        assert entry.address is None
        assert entry.hostnames == []

    def test_comment_only(self) -> None:
        assert parse_line("# managed by ops") == HostEntry(comment=" managed by ops")

    def test_comment_splits_on_first_hash(self) -> None:
        entry = parse_line("10.0.0.1 a b # one # two")
        assert entry == HostEntry("10.0.0.1", ["a", "b"], " one # two")

    def test_comment_without_space(self) -> None:
        assert parse_line("10.0.0.1 a#b") == HostEntry("10.0.0.1", ["a"], "b")

    def test_address_only(self) -> None:
        assert parse_line("10.0.0.1") == HostEntry("10.0.0.1", [])

    def test_no_address_validation(self) -> None:
        assert parse_line("not-an-ip host") == HostEntry("not-an-ip", ["host"])

    def test_duplicates_kept(self) -> None:
        assert parse_line("10.0.0.1 a a A").hostnames == ["a", "a", "A"]

    def test_strips_line_terminators(self) -> None:
        assert parse_line("10.0.0.1 a # c\r\n") == HostEntry("10.0.0.1", ["a"], " c")


def test_parse_lines_keeps_order_and_blank_lines() -> None:
    entries = parse_lines(["# header", "", "127.0.0.1 localhost"])
    assert entries == [
        HostEntry(comment=" header"),
        HostEntry(),
        HostEntry("127.0.0.1", ["localhost"]),
    ]


class TestSerialize:
    def test_lines_in_order(self) -> None:
        entries = [
            HostEntry(comment=" header"),
            HostEntry(),
            HostEntry("127.0.0.1", ["localhost"]),
            HostEntry("10.0.0.1", ["db", "db.local"], " primary"),
        ]
        assert serialize(entries) == (
            "# header\n\n127.0.0.1\tlocalhost\n10.0.0.1\tdb db.local # primary"
        )

    def test_trims_surrounding_whitespace(self) -> None:
        entries = [HostEntry(), HostEntry("10.0.0.1", ["a"]), HostEntry(), HostEntry()]
        assert serialize(entries) == "10.0.0.1\ta"

    def test_empty(self) -> None:
        assert serialize([]) == ""

    @pytest.mark.parametrize("raw", [
        "127.0.0.1\tlocalhost",
        "10.0.0.1    a   b   # note",
        "# header",
        "#",
        "10.0.0.1 a #",
        "fe80::1%lo0 localhost",
        "10.0.0.1",
    ])
    def test_round_trip(self, raw: str) -> None:
        entry = parse_line(raw)
        assert parse_line(serialize([entry])) == entry
