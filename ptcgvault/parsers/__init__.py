from ptcgvault.parsers.inventory_csv import InventoryRow, parse_inventory_csv

__all__ = [
    "InventoryRow",
    "parse_inventory_csv",
]
