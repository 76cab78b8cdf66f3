"""Entry point for the runsync CLI."""

import typer

from runsync.config import configure_logging
from runsync_cli.commands.route import show_segments, show_splits
from runsync_cli.commands.sync import sync_runs

app = typer.Typer(
    name="runsync",
    help="Sync runs to the remote store and analyze their routes.",
    no_args_is_help=True,
)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    configure_logging("DEBUG" if verbose else None)


app.command("sync")(sync_runs)
app.command("splits")(show_splits)
app.command("segments")(show_segments)


if __name__ == "__main__":
    app()
