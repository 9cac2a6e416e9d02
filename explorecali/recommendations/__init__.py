"""
Recommendation engine.

Responsibilities:
- Aggregate rating facts into per-tour average score and review count.
- Rank tours deterministically: average desc, review count desc, title asc.
- Exclude tours a customer already rated from their personal view.
- Memoize ranked results in a read-through cache with explicit clear-all.
"""
