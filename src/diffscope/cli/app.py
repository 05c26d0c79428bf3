import typer

from diffscope.cli.changes import changes
from diffscope.cli.check import check

app = typer.Typer(
    name="diffscope",
    help="diffscope CLI: spacing and documentation checks scoped to your change set.",
    no_args_is_help=True,
    context_settings={"help_option_names": ["-h", "--help"]},
)

app.command("check")(check)
app.command("changes")(changes)


def main() -> None:
    app()
