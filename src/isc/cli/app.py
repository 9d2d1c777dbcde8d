import typer


def version_callback(value: bool) -> None:
    """Show version and exit."""
    if value:  # pragma: no cover
        import isc

        typer.echo(f"isc version: {isc.__version__}")
        raise typer.Exit()


app = typer.Typer(
    name="isc",
    help=(
        "Selectively copy files from source to destination directory, "
        "using content checksums as the equality criteria."
    ),
    add_completion=False,
)
