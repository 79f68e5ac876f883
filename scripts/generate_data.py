"""
Dataset generation script for the graph load generator.

Implements deterministic pseudo-random generation of the `entityId,size`
dataset consumed by `graphload run`. Sizes follow a long-tailed distribution
so that only a small share of companies clears the default threshold.
"""

from __future__ import annotations

import random
import sys
import time
from pathlib import Path

import typer

app = typer.Typer(help="Generate a synthetic entity dataset (entityId,size CSV).")


def _generate_entities_csv(csv_path: Path, rows: int, seed: int, max_size: int = 50_000) -> int:
    """
    Write `rows` entity lines to `csv_path` and return how many were written.

    The file has no header; the loader treats every line as a data row.
    """
    rng = random.Random(seed)
    with csv_path.open("w", encoding="utf-8") as f:
        for i in range(rows):
            # Pareto with alpha=1.2 gives a handful of very large supply chains.
            size = min(int(rng.paretovariate(1.2) * 100), max_size)
            f.write(f"C{i:08d},{size}\n")
    return rows


@app.command()
def main(
    rows: int = typer.Option(
        100_000,
        "--rows",
        "-r",
        min=1,
        help="Number of entities to generate.",
    ),
    seed: int = typer.Option(
        42,
        "--seed",
        help="Deterministic RNG seed.",
    ),
    output: Path = typer.Option(
        Path("data.csv"),
        "--output",
        "-o",
        help="CSV output path.",
    ),
) -> None:
    """
    Generate a synthetic entity dataset.
    """
    start = time.perf_counter()
    output.parent.mkdir(parents=True, exist_ok=True)

    typer.echo(f"Generating {rows:,} entities -> {output} (seed={seed})")
    _generate_entities_csv(output, rows=rows, seed=seed)
    duration = time.perf_counter() - start
    typer.echo(f"Generation completed in {duration:.2f}s")


if __name__ == "__main__":
    try:
        app()
    except KeyboardInterrupt:
        typer.echo("Cancelled by user.", err=True)
        sys.exit(130)
