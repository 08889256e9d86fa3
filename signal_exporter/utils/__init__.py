"""
Utility functions module.

Time Semantics:
- All instants handled by the exporter are timezone-aware UTC datetimes
- Naive datetimes are interpreted as UTC
- Durations are timedelta values; configuration accepts Go-style strings
"""
