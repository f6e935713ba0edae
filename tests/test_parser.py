"""Tests for diskutil and tmutil output parsing."""

from snapzap.parser import extract_mount_points, parse_disk, parse_snapshots


class TestParseDisk:
    def test_header(self, listing_text):
        assert parse_disk(listing_text) == "disk3s1"

    def test_singular_header(self):
        assert parse_disk("Snapshot for disk5s2 (1 found)\n") == "disk5s2"

    def test_missing_header(self):
        assert parse_disk("+-- A1B2C3D4-0000-0000-0000-000000000001\n") == ""


class TestParseSnapshots:
    def test_parses_all_blocks(self, listing_text):
        index = parse_snapshots(listing_text)
        assert list(index.keys()) == [1, 2, 3]
        assert [s.xid for s in index.values()] == ["42", "43", "44"]

    def test_fields(self, listing_text):
        snap = parse_snapshots(listing_text)[2]
        assert snap.disk == "disk3s1"
        assert snap.uuid == "A1B2C3D4-0000-0000-0000-000000000002"
        assert snap.name == "com.apple.TimeMachine.2024-01-02-120000.local"
        assert snap.purgeable is False
        assert snap.space_reserving is False

    def test_space_reserving_note(self, listing_text):
        index = parse_snapshots(listing_text)
        assert index[1].space_reserving is True
        assert index[2].space_reserving is False
        assert index[3].space_reserving is False

    def test_single_block_example(self):
        text = (
            "Snapshots for disk3s1 (1 found)\n"
            "|\n"
            "+-- A1B2C3D4-0000-0000-0000-000000000001\n"
            "    Name:        com.apple.TimeMachine.2024-01-01\n"
            "    XID:         42\n"
            "    Purgeable:   Yes\n"
            "    NOTE:        This snapshot limits the minimum size of APFS Container disk3\n"
        )
        index = parse_snapshots(text)
        assert list(index.keys()) == [1]
        snap = index[1]
        assert snap.disk == "disk3s1"
        assert snap.name == "com.apple.TimeMachine.2024-01-01"
        assert snap.xid == "42"
        assert snap.purgeable is True
        assert snap.space_reserving is True

    def test_empty_text(self):
        assert parse_snapshots("") == {}

    def test_no_snapshots_message(self):
        assert parse_snapshots("No snapshots for disk3s1\n") == {}

    def test_idempotent(self, listing_text):
        assert parse_snapshots(listing_text) == parse_snapshots(listing_text)

    def test_purgeable_case_insensitive(self):
        text = (
            "+-- A1B2C3D4-0000-0000-0000-000000000001\n"
            "|   Name: a\n"
            "|   XID: 1\n"
            "|   Purgeable: YES\n"
            "+-- A1B2C3D4-0000-0000-0000-000000000002\n"
            "|   Name: b\n"
            "|   XID: 2\n"
            "|   Purgeable: no\n"
        )
        index = parse_snapshots(text)
        assert index[1].purgeable is True
        assert index[2].purgeable is False

    def test_malformed_blocks_keep_numbering_contiguous(self):
        text = (
            "Snapshots for disk3s1 (4 found)\n"
            "+-- A1B2C3D4-0000-0000-0000-000000000001\n"
            "|   Name: first\n"
            "|   XID: 1\n"
            "|   Purgeable: Yes\n"
            "+-- A1B2C3D4-0000-0000-0000-000000000002\n"
            "|   Name: missing xid\n"
            "|   Purgeable: Yes\n"
            "+-- A1B2C3D4-0000-0000-0000-000000000003\n"
            "|   Name: third\n"
            "|   XID: 3\n"
            "|   Purgeable: No\n"
            "+-- A1B2C3D4-0000-0000-0000-000000000004\n"
            "|   Name: bad purgeable\n"
            "|   XID: 4\n"
            "|   Purgeable: Maybe\n"
        )
        index = parse_snapshots(text)
        assert list(index.keys()) == [1, 2]
        assert index[1].name == "first"
        assert index[2].name == "third"

    def test_duplicate_uuids_are_kept(self):
        block = (
            "+-- A1B2C3D4-0000-0000-0000-000000000001\n"
            "|   Name: same\n"
            "|   XID: 7\n"
            "|   Purgeable: Yes\n"
        )
        index = parse_snapshots(block + block)
        assert len(index) == 2
        assert index[1].uuid == index[2].uuid

    def test_empty_name(self):
        text = (
            "+-- A1B2C3D4-0000-0000-0000-000000000001\n"
            "|   Name:\n"
            "|   XID: 9\n"
            "|   Purgeable: Yes\n"
        )
        snap = parse_snapshots(text)[1]
        assert snap.name == ""
        assert snap.xid == "9"

    def test_unicode_tree_decoration(self):
        text = (
            "Snapshots for disk4s1 (1 found)\n"
            "│\n"
            "└── A1B2C3D4-0000-0000-0000-000000000001\n"
            "    Name:   com.apple.os.update-1\n"
            "    XID:    77\n"
            "    Purgeable:   Yes\n"
        )
        snap = parse_snapshots(text)[1]
        assert snap.disk == "disk4s1"
        assert snap.xid == "77"

    def test_crlf_line_endings(self, listing_text):
        index = parse_snapshots(listing_text.replace("\n", "\r\n"))
        assert len(index) == 3
        assert index[1].name == "com.apple.TimeMachine.2024-01-01-120000.local"

    def test_note_only_applies_until_next_block(self):
        text = (
            "+-- A1B2C3D4-0000-0000-0000-000000000001\n"
            "|   Name: a\n"
            "|   XID: 1\n"
            "|   Purgeable: Yes\n"
            "+-- A1B2C3D4-0000-0000-0000-000000000002\n"
            "|   Name: b\n"
            "|   XID: 2\n"
            "|   Purgeable: Yes\n"
            "|   NOTE: THIS SNAPSHOT LIMITS THE MINIMUM SIZE of APFS Container disk3\n"
        )
        index = parse_snapshots(text)
        assert index[1].space_reserving is False
        assert index[2].space_reserving is True

    def test_note_under_malformed_block_is_not_inherited(self):
        text = (
            "+-- A1B2C3D4-0000-0000-0000-000000000001\n"
            "|   Name: good-a\n"
            "|   XID: 1\n"
            "|   Purgeable: Yes\n"
            "+-- A1B2C3D4-0000-0000-0000-000000000002\n"
            "|   Name: broken-b\n"
            "|   Purgeable: Yes\n"
            "|   NOTE: This snapshot limits the minimum size of APFS Container disk3\n"
            "+-- A1B2C3D4-0000-0000-0000-000000000003\n"
            "|   Name: good-c\n"
            "|   XID: 3\n"
            "|   Purgeable: Yes\n"
        )
        index = parse_snapshots(text)
        assert [s.name for s in index.values()] == ["good-a", "good-c"]
        assert index[1].space_reserving is False
        assert index[2].space_reserving is False


class TestExtractMountPoints:
    def test_extracts_all(self, destination_info_text):
        assert extract_mount_points(destination_info_text) == [
            "/Volumes/Backup",
            "/Volumes/Archive",
        ]

    def test_trims_whitespace(self):
        assert extract_mount_points("   Mount Point :   /Volumes/My Disk   \n") == ["/Volumes/My Disk"]

    def test_label_is_case_sensitive(self):
        assert extract_mount_points("mount point : /Volumes/Backup\n") == []

    def test_no_destinations(self):
        assert extract_mount_points("tmutil: No destinations configured.\n") == []
