"""
Rating fact store.

Responsibilities:
- Load tours and customer rating facts from CSV into DataFrames.
- Ingest new rating facts, one fact per (tour, customer) pair.
- Answer ranking queries from a single consistent snapshot.
"""
