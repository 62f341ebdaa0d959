"""Tests for the inventory CSV parser."""

from ptcgvault.parsers.inventory_csv import InventoryRow, parse_inventory_csv


class TestParseInventoryCsv:
    def test_basic_rows(self) -> None:
        text = "set_code,card_number,count\nSVI,25,3\nPAL,185,1\n"

        rows = parse_inventory_csv(text)

        assert rows == [
            InventoryRow(set_code="SVI", card_number="25", count=3),
            InventoryRow(set_code="PAL", card_number="185", count=1),
        ]

    def test_header_only(self) -> None:
        assert parse_inventory_csv("set_code,card_number,count") == []

    def test_empty_text(self) -> None:
        assert parse_inventory_csv("") == []

    def test_missing_count_means_one(self) -> None:
        rows = parse_inventory_csv("set,number\nSVI,25\nSVI,26,\n")

        assert [r.count for r in rows] == [1, 1]

    def test_whitespace_trimmed(self) -> None:
        rows = parse_inventory_csv("h,h,h\n  SVI , 25 , 2 \n")

        assert rows == [InventoryRow(set_code="SVI", card_number="25", count=2)]

    def test_blank_lines_ignored(self) -> None:
        rows = parse_inventory_csv("h,h,h\nSVI,25,1\n\n,,\nPAL,2,1\n")

        assert [r.set_code for r in rows] == ["SVI", "PAL"]

    def test_malformed_rows_skipped(self) -> None:
        text = "h,h,h\nSVI,25,abc\nSVI,26,0\nSVI,27,-1\n,28,1\nSVI\nSVI,29,2\n"

        rows = parse_inventory_csv(text)

        assert rows == [InventoryRow(set_code="SVI", card_number="29", count=2)]

    def test_malformed_rows_logged(self, caplog) -> None:
        parse_inventory_csv("h,h,h\nSVI,25,many\n")

        assert "Skipping malformed inventory row 2" in caplog.text

    def test_duplicates_kept(self) -> None:
        rows = parse_inventory_csv("h,h,h\nSVI,25,1\nSVI,25,2\n")

        assert len(rows) == 2

    def test_quoted_fields(self) -> None:
        rows = parse_inventory_csv('h,h,h\n"PR-SV","085",1\n')

        assert rows == [InventoryRow(set_code="PR-SV", card_number="085", count=1)]
