"""
Main CLI entry point.
"""

import typer

from latestlayer import __version__
from latestlayer.cli import refs, resolve


def version_callback(value: bool):
    """Callback to display version and exit."""
    if value:
        typer.echo(f"latestlayer version {__version__}")
        raise typer.Exit()


app = typer.Typer(
    name="latestlayer",
    help="latestlayer - Pin Lambda layer references to their latest published version",
    add_completion=False,
)

app.add_typer(refs.app, name="refs")
app.add_typer(resolve.app, name="resolve")


@app.callback(invoke_without_command=True)
def entrypoint(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        "-v",
        callback=version_callback,
        help="Show version and exit.",
    ),
):
    """
    latestlayer - Pin Lambda layer references to their latest published version.

    Run 'latestlayer <command> --help' for help on a specific command.
    """
    if ctx.invoked_subcommand is None:
        if not version:
            typer.echo(ctx.get_help())
            raise typer.Exit()


def main():
    """Main CLI entry point."""
    app()


if __name__ == "__main__":
    main()
