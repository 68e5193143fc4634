"""User-facing message catalogs."""
