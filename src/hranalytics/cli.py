"\"\"\"Typer CLI entrypoint for the analytics pipeline.\"\"\""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

import yaml

from .container import create_container
from .logging import configure_logging
from .pipeline import AuditLogger
from .schemas import load_config

app = typer.Typer(help="Candidate score analytics CLI.")


@app.command()
def run(
    candidates: Path = typer.Option(..., exists=True, readable=True, dir_okay=False, help="Candidates JSONL path."),
    output: Path = typer.Option(
        ...,
        exists=False,
        file_okay=True,
        dir_okay=False,
        resolve_path=True,
        help="Output JSON path.",
    ),
    as_of: Optional[str] = typer.Option(None, help="Reference time (ISO 8601) that closes the four-week view."),
    config: Optional[Path] = typer.Option(None, exists=True, readable=True, dir_okay=False, help="YAML config path."),
    log_level: str = typer.Option("INFO", help="Log level for structured logging."),
    audit_log: Optional[Path] = typer.Option(None, dir_okay=False, help="Audit log output (JSONL)."),
) -> None:
    """Run the analytics pipeline."""
    settings: dict = {}
    if config:
        with config.open("r", encoding="utf-8") as handle:
            loaded = yaml.safe_load(handle) or {}
            if not isinstance(loaded, dict):
                raise typer.BadParameter("Config file must be a YAML object", param_name="config")
            settings = load_config(loaded).to_settings()

    configure_logging(log_level)

    container = create_container(settings=settings)
    pipeline = container.pipeline()
    audit_logger = AuditLogger(audit_log) if audit_log else None

    result = pipeline.run(
        candidates_path=candidates,
        output_path=output,
        as_of=as_of,
        audit_logger=audit_logger,
    )
    count = result["metadata"]["candidate_count"]
    typer.echo(f"Processed {count} candidates. Results saved to {output}.")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
