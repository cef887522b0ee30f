"""Aggregation module for game statistics.

- Reads game records and produces rollups, leaderboards and digests
- Forbidden: record mutation, summarizer calls
"""
