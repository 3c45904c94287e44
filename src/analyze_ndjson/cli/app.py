import typer

from analyze_ndjson.cli.convert import convert
from analyze_ndjson.cli.inspect import inspect

app = typer.Typer(
    name="analyze-ndjson",
    help="Analyze NDJSON CLI: convert bundle analyzer .data files to NDJSON.",
    no_args_is_help=True,
    context_settings={"help_option_names": ["-h", "--help"]},
)

app.command("convert")(convert)
app.command("inspect")(inspect)


def main() -> None:
    app()
