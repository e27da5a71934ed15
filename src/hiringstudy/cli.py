"""Typer CLI entrypoint for the hiring study."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Optional

import typer
from pydantic import ValidationError

from .config import load_yaml
from .container import create_container
from .logging import configure_logging
from .renderer import TerminalRenderer
from .schemas.config import load_config

app = typer.Typer(help="Simulated hiring study.")


def _load_settings(config: Optional[Path], store: Optional[Path]) -> dict[str, Any]:
    raw: dict[str, Any] = {}
    if config:
        try:
            raw = load_yaml(config)
        except ValueError as exc:
            raise typer.BadParameter(str(exc), param_name="config") from exc
    try:
        settings = load_config(raw).to_settings()
    except ValidationError as exc:
        raise typer.BadParameter(str(exc), param_name="config") from exc
    if store:
        settings["storage"] = {"path": str(store)}
    return settings


@app.command()
def run(
    config: Optional[Path] = typer.Option(None, exists=True, readable=True, dir_okay=False, help="YAML config path."),
    store: Optional[Path] = typer.Option(
        None,
        file_okay=False,
        dir_okay=True,
        resolve_path=True,
        help="Directory for finished session records (JSON).",
    ),
    log_level: str = typer.Option("INFO", help="Log level for structured logging."),
    json_logs: bool = typer.Option(True, "--json-logs/--console-logs", help="Render logs as JSON."),
) -> None:
    """Walk one participant through the study in the terminal."""
    settings = _load_settings(config, store)
    configure_logging(log_level, json=json_logs)

    container = create_container(settings=settings)
    controller = container.session_controller()
    renderer = TerminalRenderer(controller, survey=container.study_config().survey)
    try:
        renderer.run()
    finally:
        controller.close()


@app.command()
def pool(
    config: Optional[Path] = typer.Option(None, exists=True, readable=True, dir_okay=False, help="YAML config path."),
    size: Optional[int] = typer.Option(None, min=1, help="Override the configured pool size."),
) -> None:
    """Print a freshly generated candidate pool as JSON."""
    settings = _load_settings(config, None)
    container = create_container(settings=settings)
    candidates = container.pool_generator().generate(size)
    payload = [candidate.model_dump(mode="json", by_alias=True) for candidate in candidates]
    typer.echo(json.dumps(payload, ensure_ascii=False, indent=2))


def main() -> None:
    app()


if __name__ == "__main__":
    main()
