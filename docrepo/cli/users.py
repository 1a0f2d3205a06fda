"""Users Typer app that registers all user commands."""

import typer

from docrepo.api.users.cmd_create import cmd_create
from docrepo.api.users.cmd_reset import cmd_reset
from docrepo.api.users.cmd_show import cmd_show
from docrepo.api.users.cmd_update import cmd_update

from ._handle_stage_result import _handle_stage_result


def users() -> typer.Typer:
    """Create the users Typer app."""
    app = typer.Typer(
        name="users",
        help="User repository operations",
        pretty_exceptions_show_locals=False,
        pretty_exceptions_enable=False,
        context_settings={"help_option_names": ["-h", "--help"]},
        invoke_without_command=True,
    )

    @app.callback(invoke_without_command=True)
    def users_callback(ctx: typer.Context) -> None:
        """User repository operations - shows available commands."""
        if ctx.invoked_subcommand is None:
            typer.echo(ctx.get_help())
            raise typer.Exit()

    @app.command(name="show")
    def show_command(key: str = typer.Argument(..., help="Key of the user")) -> None:
        """Show the user with the given key."""
        _handle_stage_result(cmd_show)(key)

    @app.command(name="create")
    def create_command(
        user_id: str = typer.Argument(..., help="Id of the new user"),
        key: str = typer.Argument(..., help="Lookup key"),
        text: str = typer.Argument(..., help="Free text"),
    ) -> None:
        """Create a user."""
        _handle_stage_result(cmd_create)(user_id, key, text)

    @app.command(name="update")
    def update_command(
        user_id: str = typer.Argument(..., help="Id of the user"),
        commands: str = typer.Argument(
            ...,
            help='Update commands as JSON, e.g. \'{"$set": {"text": "new"}, "$push": {"tags": "c"}}\'',
        ),
    ) -> None:
        """Atomically update a user with $set, $pop, $push and $unshift."""
        _handle_stage_result(cmd_update)(user_id, commands)

    @app.command(name="reset")
    def reset_command() -> None:
        """Delete all users."""
        _handle_stage_result(cmd_reset)()

    return app
