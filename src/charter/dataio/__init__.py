"""Data output helpers (CSV rows and artifact paths).

Utility modules here keep disk-level concerns isolated from the rest of the
application:
- :mod:`csv_writer` appends received records to a CSV log.
- :mod:`file_paths` names the per-record histogram images.
"""
