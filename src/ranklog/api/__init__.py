"""API module for ranklog.

API layer:
- Validates inputs, calls the record store, query engine and aggregators
- Returns payloads for UI
- Forbidden: SQL, summary wording, cache decisions
"""
