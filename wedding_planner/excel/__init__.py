"""Spreadsheet decoding and template export."""
