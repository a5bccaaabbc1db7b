"""
latestlayer resolve - Resolve placeholder layer references.

Runs both lifecycle entry points against a service and optionally writes the
rewritten descriptor and template back to disk.
"""

import asyncio
from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from latestlayer.cli.refs import load_project
from latestlayer.config.loader import DEFAULT_TEMPLATE_PATH, Service, dump_service, load_service, write_compiled_template
from latestlayer.config.resolver import resolve_value
from latestlayer.core.extractor import function_layer_associations
from latestlayer.core.matcher import match_reference
from latestlayer.core.plugin import LatestLayerVersionPlugin
from latestlayer.core.versions import VersionRecord
from latestlayer.exceptions import LatestLayerError
from latestlayer.utils.logging import get_logger, setup_logging, setup_logging_from_config

logger = get_logger("latestlayer.cli.resolve")

app = typer.Typer(name="resolve", help="Resolve layer references to their latest version", invoke_without_command=True)

console = Console()


async def _resolve(plugin: LatestLayerVersionPlugin) -> dict[str, VersionRecord]:
    resolved = await plugin.update_sls_layer_version()
    resolved.update(await plugin.update_cfn_layer_version())
    return resolved


def carry_resolved_layers(resolved: Service, raw: Service, stage: str = "dev") -> None:
    """
    Copy rewritten layer references from ``resolved`` into ``raw``.

    ``raw`` is the same descriptor loaded without substitution. Only elements
    that were placeholders once substituted are replaced, so every other
    ${VAR} reference is written back as it was.
    """
    raw_lists = dict(function_layer_associations(raw.functions))
    for location, layers in function_layer_associations(resolved.functions):
        original = raw_lists.get(location)
        if not isinstance(layers, list) or not isinstance(original, list) or len(layers) != len(original):
            continue
        for index, layer in enumerate(original):
            if match_reference(resolve_value(layer, stage)) is not None:
                original[index] = layers[index]


@app.callback()
def resolve(
    ctx: typer.Context,
    stage: str | None = typer.Option(None, "--stage", "-s", help="Deployment stage"),
    region: str | None = typer.Option(None, "--region", "-r", help="Region override"),
    profile: str | None = typer.Option(None, "--profile", help="AWS profile for the Lambda API"),
    template: Path | None = typer.Option(None, "--template", "-t", help="Compiled CloudFormation template (JSON)"),
    catalog: Path | None = typer.Option(None, "--catalog", help="Resolve offline from a YAML/JSON version catalog"),
    write: bool = typer.Option(
        False, "--write", "-w", help="Write resolved references back to disk (other ${VAR} references are kept)"
    ),
    log_level: str | None = typer.Option(None, "--log-level", help="Log level (DEBUG, INFO, ...)"),
    project_dir: Path = typer.Option(Path.cwd(), "--project-dir", "-d", help="Project directory"),
) -> None:
    """
    Resolve every placeholder layer reference of a service.
    """
    if ctx.invoked_subcommand is None:
        if write and stage:
            console.print("[red]Error: --write cannot be combined with --stage[/red]")
            raise typer.Exit(1)

        try:
            service, template_path = load_project(project_dir, stage, region, template)
            # Written descriptors keep their ${VAR} references
            raw = load_service(project_dir, region=region, substitute_env=False) if write else None
        except LatestLayerError as e:
            console.print(f"[red]Error: {escape(e.message)}[/red]")
            raise typer.Exit(1) from e

        if log_level:
            setup_logging(level=log_level)
        else:
            setup_logging_from_config(service.plugin_settings, project_dir=project_dir)

        try:
            if catalog is not None:
                from latestlayer.sources.memory import InMemoryLayerVersionSource

                source = InMemoryLayerVersionSource.from_file(catalog)
            else:
                from latestlayer.sources.lambda_api import LambdaLayerVersionSource

                source = LambdaLayerVersionSource(
                    region=service.region, profile=profile or service.provider.get("profile")
                )

            plugin = LatestLayerVersionPlugin(service, source=source)
            resolved = asyncio.run(_resolve(plugin))
        except LatestLayerError as e:
            logger.error(f"Layer resolution failed: {e.message}")
            console.print(f"[red]Error: {escape(e.message)}[/red]")
            raise typer.Exit(1) from e

        if not resolved:
            console.print("[yellow]No placeholder layer references found[/yellow]")
            return

        table = Table(title=f"Resolved layers ({service.name}, {service.region})", show_header=True)
        table.add_column("Layer", style="cyan", overflow="fold")
        table.add_column("Version", style="green", justify="right")
        table.add_column("ARN", overflow="fold")
        for target, record in resolved.items():
            table.add_row(target, str(record.version), record.arn)
        console.print(table)

        if raw is not None:
            carry_resolved_layers(service, raw)
            dump_service(raw)
            console.print(f"[green]Updated {service.path}[/green]")
            if template_path is not None or service.compiled_template.get("Resources"):
                template_path = template_path or project_dir / DEFAULT_TEMPLATE_PATH
                write_compiled_template(template_path, service.compiled_template)
                console.print(f"[green]Updated {template_path}[/green]")
