"""
latestlayer refs - List layer references.

Shows every layer reference of a service and what it would be resolved
against, without calling AWS.
"""

from collections.abc import Iterator
from pathlib import Path
from typing import Any

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from latestlayer.config.loader import DEFAULT_TEMPLATE_PATH, Service, load_compiled_template, load_service
from latestlayer.core.extractor import function_layer_associations, template_layer_associations
from latestlayer.core.matcher import resolution_target
from latestlayer.exceptions import LatestLayerError

app = typer.Typer(name="refs", help="List layer references of a service", invoke_without_command=True)

console = Console()


def load_project(
    project_dir: Path,
    stage: str | None,
    region: str | None,
    template: Path | None,
    substitute_env: bool = True,
) -> tuple[Service, Path | None]:
    """
    Load the service descriptor and, when available, its compiled template.

    The template is read from ``template`` when given, otherwise from the
    default packaging output under ``.serverless/`` if it exists.
    """
    service = load_service(project_dir, stage=stage, region=region, substitute_env=substitute_env)

    template_path = template
    if template_path is None and (project_dir / DEFAULT_TEMPLATE_PATH).is_file():
        template_path = project_dir / DEFAULT_TEMPLATE_PATH
    if template_path is not None:
        service.compiled_template = load_compiled_template(template_path)
    return service, template_path


def iter_references(service: Service) -> Iterator[tuple[str, str, Any]]:
    """Yield (source, location, reference) for every layer list element."""
    walks = (
        ("functions", function_layer_associations(service.functions)),
        ("template", template_layer_associations(service.compiled_template)),
    )
    for source, associations in walks:
        for location, layers in associations:
            if isinstance(layers, list):
                for index, layer in enumerate(layers):
                    yield source, f"{location}[{index}]", layer


@app.callback()
def refs(
    ctx: typer.Context,
    stage: str | None = typer.Option(None, "--stage", "-s", help="Deployment stage"),
    region: str | None = typer.Option(None, "--region", "-r", help="Region override"),
    template: Path | None = typer.Option(None, "--template", "-t", help="Compiled CloudFormation template (JSON)"),
    project_dir: Path = typer.Option(Path.cwd(), "--project-dir", "-d", help="Project directory"),
) -> None:
    """
    List layer references and their resolution targets.
    """
    if ctx.invoked_subcommand is None:
        try:
            service, _ = load_project(project_dir, stage, region, template)
        except LatestLayerError as e:
            console.print(f"[red]Error: {escape(e.message)}[/red]")
            raise typer.Exit(1) from e

        rows = list(iter_references(service))
        if not rows:
            console.print("[yellow]No layer references found[/yellow]")
            return

        table = Table(title=f"Layer references ({service.name}, {service.region})", show_header=True)
        table.add_column("Source", style="cyan")
        table.add_column("Location")
        table.add_column("Reference", overflow="fold")
        table.add_column("Target", style="green", overflow="fold")

        for source, location, layer in rows:
            target = resolution_target(layer, service.region)
            table.add_row(source, location, str(layer), target or "-")

        console.print(table)
