"""Wedding planner: guest spreadsheet import and tenant-scoped data access.

The core of the package is the guest import pipeline: decode a spreadsheet,
normalize bilingual headers, validate each row, preview the result and commit
the valid rows as one batch insert scoped to a wedding.
"""

__version__ = "0.1.0"
