"""
Entity list builder.

Reads the `entityId,size` dataset and keeps the entities whose supply chain
is larger than a threshold. Row order is preserved; it defines the
round-robin order in which runners query the graph.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Iterable, Optional, Sequence, Tuple

from graphload.domain.models import Entity
from graphload.errors import EmptyEntityListError, EntityLoadError
from graphload.utils.logging import get_logger

log = get_logger(__name__)

_INTEGER = re.compile(r"[+-]?[0-9]+")


def _parse_row(line: str) -> Optional[Entity]:
    parts = line.rstrip("\r\n").split(",")
    if len(parts) != 2:
        return None
    entity_id, size = parts
    if not entity_id:
        return None
    if not _INTEGER.fullmatch(size):
        return None
    return Entity(id=entity_id, supply_chain_size=int(size))


def parse_entities(lines: Iterable[str], threshold: int) -> Tuple[Entity, ...]:
    """
    Filter raw dataset lines into an ordered, immutable entity list.

    Rows with the wrong number of columns or a non-integer size are skipped.
    Only rows with ``size > threshold`` are kept.
    """
    entities = []
    skipped = 0
    for line in lines:
        if not line.strip():
            continue
        entity = _parse_row(line)
        if entity is None:
            skipped += 1
            continue
        if entity.supply_chain_size > threshold:
            entities.append(entity)
    if skipped:
        log.debug("Skipped malformed dataset rows", extra={"skipped_rows": skipped})
    return tuple(entities)


def load_entities(path: Path | str, threshold: int) -> Tuple[Entity, ...]:
    """
    Load and filter the dataset at `path`.

    Raises
    ------
    EntityLoadError
        If the file cannot be opened or decoded.
    """
    path = Path(path)
    try:
        with path.open("r", encoding="utf-8") as f:
            entities = parse_entities(f, threshold)
    except (OSError, UnicodeDecodeError) as exc:
        raise EntityLoadError(f"Cannot read entity dataset {path}: {exc}") from exc

    log.info(
        f"Loaded {len(entities)} entities with supply chain size > {threshold}",
        extra={"path": str(path), "entities": len(entities), "threshold": threshold},
    )
    return entities


def require_entities(entities: Sequence[Entity], threshold: Optional[int] = None) -> Sequence[Entity]:
    """Fail fast when filtering left nothing to query."""
    if not entities:
        hint = f" (threshold {threshold})" if threshold is not None else ""
        raise EmptyEntityListError(f"No entities left after filtering{hint}")
    return entities


__all__ = ["parse_entities", "load_entities", "require_entities"]
