"""
Utility modules for the ratings analytics.

Cross-cutting concerns:
- Dates: Local calendar dates and month arithmetic
- Rounding: Half-up rounding and zero-guarded means
- Storage: File I/O for snapshots, reports and CSVs
"""
