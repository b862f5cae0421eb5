"""Domain layer for ledgerport: parsing, duplicate detection and import services."""
