"""
Supply chain traversal query.

Walks up to four `ships_to` hops upstream of a company, keeping only
shipments whose dates and product codes make them plausible components of the
downstream export. The query is deliberately expensive; it is the load.
"""

from __future__ import annotations

_SUPPLY_CHAIN_TEMPLATE = """
MATCH (a:company {{ id: $id }})<-[r1:ships_to]-(b)
WHERE b != a
WITH a, b, collect(r1) AS r1
OPTIONAL MATCH (b)<-[r2:ships_to]-(c)
WHERE c != b AND c != a AND any(export IN r1
WHERE (
export.min_date >= r2.min_date AND export.min_date <= r2.max_date AND
product_map.is_component(export.hs_code, r2.hs_code)
))
WITH a, b, c, r1, collect(r2) AS r2
OPTIONAL MATCH (c)<-[r3:ships_to]-(d)
WHERE d != c AND d != b AND d != a AND any(export IN r2
WHERE (
export.min_date >= r3.min_date AND export.min_date <= r3.max_date AND
product_map.is_component(export.hs_code, r3.hs_code)
))
WITH a, b, c, d, r1, r2, collect(r3) AS r3
OPTIONAL MATCH (d)<-[r4:ships_to]-(e)
WHERE e != d AND e != c AND e != b AND e != a AND any(export IN r3
WHERE (
export.min_date >= r4.min_date AND export.min_date <= r4.max_date AND
product_map.is_component(export.hs_code, r4.hs_code)
))
RETURN b, c, d, e, collect(r4) AS r4 LIMIT {result_limit}
QUERY MEMORY LIMIT {memory_limit_mb}MB;
"""


def build_supply_chain_query(result_limit: int = 20_000, memory_limit_mb: int = 5120) -> str:
    """
    Render the traversal with its row cap and per-query memory limit.

    The entity id is bound at run time through the `$id` parameter.
    """
    if result_limit < 1:
        raise ValueError(f"result_limit must be >= 1, got {result_limit}")
    if memory_limit_mb < 1:
        raise ValueError(f"memory_limit_mb must be >= 1, got {memory_limit_mb}")
    return _SUPPLY_CHAIN_TEMPLATE.format(
        result_limit=result_limit, memory_limit_mb=memory_limit_mb
    ).strip()


__all__ = ["build_supply_chain_query"]
