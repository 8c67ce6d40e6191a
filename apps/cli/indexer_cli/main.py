import typer
from indexer_cli.commands import service_cmd

app = typer.Typer(
    help="M24 indexer service manager",
    no_args_is_help=True,
    add_completion=False
)

app.command(name="install")(service_cmd.install)
app.command(name="uninstall")(service_cmd.uninstall)
app.command(name="restart")(service_cmd.restart)
app.command(name="status")(service_cmd.status)
app.command(name="logs")(service_cmd.logs)
app.command(name="configure")(service_cmd.configure)


def main():
    app()


if __name__ == "__main__":
    main()
