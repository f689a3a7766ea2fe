"""
DRep Scoring — CLI entry point.

All commands follow this pattern:
  1. Load ``AppConfig`` via ``load_config()``.
  2. Configure logging.
  3. Load and validate the snapshot file(s).
  4. Score with ``AppConfig.scoring``.
  5. Report the result to stdout (and optionally to files).

Install and run::

    pip install -e .
    drep-scoring --help
    drep-scoring validate-config
    drep-scoring show-weights
    drep-scoring score --input data/snapshots/drep1abc.json
    drep-scoring score-batch --input data/snapshots/all.json --csv
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

import typer

app = typer.Typer(
    name="drep-scoring",
    help="DRep reputation scoring — local, deterministic CLI.",
    add_completion=False,
)


# ── Helpers ───────────────────────────────────────────────────────────────────

def _load_config_or_exit(config_path: Optional[str] = None):
    """Load AppConfig, printing a friendly error and exiting on failure."""
    from drep_scoring.config import load_config

    try:
        cfg_path = Path(config_path) if config_path else None
        return load_config(cfg_path)
    except FileNotFoundError as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)
    except Exception as exc:
        typer.echo(f"[ERROR] Config validation failed: {exc}", err=True)
        raise typer.Exit(code=1)


def _configure_logging(config):
    """Set up logging from config."""
    from drep_scoring.utils.logging import configure_logging
    configure_logging(config.logging)


# ── Commands ──────────────────────────────────────────────────────────────────

@app.command("score")
def score(
    input_path: str = typer.Option(
        ...,
        "--input",
        help="Path to a single-DRep snapshot JSON file.",
    ),
    output_path: Optional[str] = typer.Option(
        None,
        "--output",
        help="Also write the full result as JSON to this path.",
    ),
    as_json: bool = typer.Option(
        False,
        "--json",
        help="Print the result as JSON instead of the text report.",
    ),
    config_path: Optional[str] = typer.Option(
        None,
        "--config",
        help="Path to TOML config file.",
    ),
) -> None:
    """Score one DRep snapshot and print the report."""
    from drep_scoring.ingestion.snapshot_loader import load_snapshot
    from drep_scoring.reporting.export import export_to_json
    from drep_scoring.reporting.formatters import format_score_report
    from drep_scoring.scoring.contracts import ScoringInputError
    from drep_scoring.scoring.engine import score_drep

    config = _load_config_or_exit(config_path)
    _configure_logging(config)

    try:
        scoring_input = load_snapshot(Path(input_path))
        result = score_drep(scoring_input, config.scoring)
    except FileNotFoundError as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)
    except ScoringInputError as exc:
        typer.echo(f"[ERROR] Invalid scoring input: {exc}", err=True)
        raise typer.Exit(code=1)
    except ValueError as exc:
        typer.echo(f"[ERROR] Snapshot parse failed:\n{exc}", err=True)
        raise typer.Exit(code=1)

    if as_json:
        typer.echo(json.dumps(result.model_dump(mode="json"), indent=2))
    else:
        typer.echo(format_score_report(result, config.scoring))

    if output_path:
        written = export_to_json(result.model_dump(mode="json"), Path(output_path))
        if not as_json:
            typer.echo("")
            typer.echo(f"[OK] Result written to {written}")


@app.command("score-batch")
def score_batch(
    input_path: str = typer.Option(
        ...,
        "--input",
        help="Path to a batch JSON file (array of snapshots or {\"dreps\": [...]}).",
    ),
    output_dir: Optional[str] = typer.Option(
        None,
        "--output-dir",
        help="Override output directory from config.",
    ),
    write_csv: bool = typer.Option(
        False,
        "--csv",
        help="Also export a flat CSV (one row per DRep).",
    ),
    top_n: int = typer.Option(
        25,
        "--top-n",
        help="Number of leaderboard rows to print.",
    ),
    config_path: Optional[str] = typer.Option(
        None,
        "--config",
        help="Path to TOML config file.",
    ),
) -> None:
    """Score every DRep in a batch file, print a leaderboard and export results."""
    from drep_scoring.ingestion.snapshot_loader import load_batch
    from drep_scoring.reporting.export import (
        RESULT_CSV_COLUMNS,
        export_to_csv,
        export_to_json,
        flatten_results_for_export,
        results_to_json,
    )
    from drep_scoring.reporting.formatters import format_leaderboard
    from drep_scoring.scoring.contracts import ScoringInputError
    from drep_scoring.scoring.engine import score_many

    config = _load_config_or_exit(config_path)
    _configure_logging(config)

    try:
        inputs = load_batch(Path(input_path))
        results = score_many(inputs, config.scoring)
    except FileNotFoundError as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)
    except ScoringInputError as exc:
        typer.echo(f"[ERROR] Invalid scoring input: {exc}", err=True)
        raise typer.Exit(code=1)
    except ValueError as exc:
        typer.echo(f"[ERROR] Batch parse failed:\n{exc}", err=True)
        raise typer.Exit(code=1)

    typer.echo(format_leaderboard(results, top_n=top_n))

    out_dir = Path(output_dir or config.data.output_dir)
    stem = Path(input_path).stem
    json_path = export_to_json(results_to_json(results), out_dir / f"scores_{stem}.json")
    typer.echo("")
    typer.echo(f"[OK] {len(results)} result(s) written to {json_path}")

    if write_csv:
        csv_path = export_to_csv(
            flatten_results_for_export(results),
            out_dir / f"scores_{stem}.csv",
            fieldnames=RESULT_CSV_COLUMNS,
        )
        typer.echo(f"[OK] CSV written to {csv_path}")


@app.command("validate-config")
def validate_config(
    config_path: Optional[str] = typer.Option(
        None,
        "--config",
        help="Path to TOML config file (default: config/default.toml).",
    ),
    show_full: bool = typer.Option(
        False,
        "--full",
        help="Print full config including all fields.",
    ),
) -> None:
    """Validate the configuration file and print parsed values.

    Exits with code 1 if the config fails validation.
    """
    config = _load_config_or_exit(config_path)

    typer.echo("Configuration validated successfully.")
    typer.echo("")
    typer.echo(f"  Scoring version:  {config.scoring.version}")
    typer.echo(f"  Input dir:        {config.data.input_dir}")
    typer.echo(f"  Output dir:       {config.data.output_dir}")
    typer.echo(f"  Log level:        {config.logging.level}")
    typer.echo(f"  Debug mode:       {config.debug}")

    if show_full:
        typer.echo("")
        typer.echo("Full config (JSON):")
        typer.echo(json.dumps(config.model_dump(mode="json"), indent=2, default=str))

    typer.echo("")
    typer.echo("[OK] Config valid.")


@app.command("show-weights")
def show_weights(
    config_path: Optional[str] = typer.Option(
        None,
        "--config",
        help="Path to TOML config file.",
    ),
) -> None:
    """Print the versioned weighting tables used for scoring."""
    from drep_scoring.reporting.formatters import format_weights_table

    config = _load_config_or_exit(config_path)
    typer.echo(format_weights_table(config.scoring))


# ── Entry point ───────────────────────────────────────────────────────────────

if __name__ == "__main__":
    app()
