"""
Tour recommendation service.

Responsibilities:
- Hold tours and customer rating facts.
- Rank tours by average rating, review count and title.
- Serve top-N and per-customer views through a read-through result cache.
"""
