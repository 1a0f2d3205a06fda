"""CLI - main entry point."""

import logging
import sys


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    import click

    from docrepo.api.config.RepositoryConfig import RepositoryConfig
    from docrepo.cli._create_app import _create_app
    from docrepo.logging_config import setup_logging

    if argv is None:
        argv = sys.argv[1:]

    try:
        log_config = RepositoryConfig.load().log
        setup_logging(level=log_config.level, log_file=log_config.file)
    except ValueError:
        # Commands report configuration problems themselves.
        setup_logging(level=logging.WARNING)

    app = _create_app()
    try:
        exit_code = app(argv, standalone_mode=False)
    except SystemExit as e:
        # Commands exit with 0 on success and 1 on failure.
        return e.code if isinstance(e.code, int) else 0
    except click.exceptions.UsageError as e:
        click.echo(f"Usage error: {e}", err=True)
        return 2
    except click.exceptions.Abort:
        return 1
    return exit_code if isinstance(exit_code, int) else 0
