"""
Domain models for the graph load generator.

`Entity` is a unit of work read from the dataset; `QueryOutcome` is the
result of a single query attempt and lives for one runner iteration only.
"""
from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, model_validator


class FailureKind(str, Enum):
    """Classification of a failed query attempt."""

    TIMEOUT = "timeout"
    CONNECTION = "connection"
    RESOURCE_LIMIT = "resource_limit"
    OTHER = "other"


class Entity(BaseModel):
    """
    A company node worth querying repeatedly.
    """

    id: str = Field(..., min_length=1, description="Company identifier in the graph.")
    supply_chain_size: int = Field(..., description="Size metric used for filtering and logging.")

    model_config = {
        "frozen": True,
    }


class QueryOutcome(BaseModel):
    """
    Timing and classification of one query attempt.
    """

    runner_id: int = Field(..., ge=0)
    entity_id: str
    supply_chain_size: int
    elapsed_ms: int = Field(..., ge=0)
    success: bool
    failure_kind: Optional[FailureKind] = None
    failure_detail: Optional[str] = None

    model_config = {
        "frozen": True,
    }

    @model_validator(mode="after")
    def _check_failure_fields(self) -> "QueryOutcome":
        if self.success and (self.failure_kind is not None or self.failure_detail is not None):
            raise ValueError("successful outcome cannot carry failure details")
        if not self.success and self.failure_kind is None:
            raise ValueError("failed outcome requires a failure kind")
        return self

    @classmethod
    def succeeded(cls, runner_id: int, entity: Entity, elapsed_ms: int) -> "QueryOutcome":
        return cls(
            runner_id=runner_id,
            entity_id=entity.id,
            supply_chain_size=entity.supply_chain_size,
            elapsed_ms=elapsed_ms,
            success=True,
        )

    @classmethod
    def failed(
        cls,
        runner_id: int,
        entity: Entity,
        elapsed_ms: int,
        kind: FailureKind,
        detail: str,
    ) -> "QueryOutcome":
        return cls(
            runner_id=runner_id,
            entity_id=entity.id,
            supply_chain_size=entity.supply_chain_size,
            elapsed_ms=elapsed_ms,
            success=False,
            failure_kind=kind,
            failure_detail=detail,
        )


__all__ = ["Entity", "FailureKind", "QueryOutcome"]
