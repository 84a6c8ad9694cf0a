"""
CLI Command Definitions.
Contains all Click command definitions and decorators.
"""

import click
from . import __version__


# Main CLI group
@click.group()
@click.version_option(__version__)
@click.option("--log-level", type=click.Choice(["none", "error", "info", "debug"]), help="Set the log level")
def cli(log_level):
    """Wordbank: vocabulary ingestion with AI grouping and example sentences."""
    from dotenv import load_dotenv
    from .core.logging import setup_logging
    from .core.settings import LogLevel, BackendSettings

    load_dotenv()

    if log_level:
        # Override setting for this run and update persistent setting
        lvl = LogLevel(log_level)
        BackendSettings.set_log_level(lvl)
        setup_logging(lvl)
    else:
        setup_logging()


@cli.command()
@click.option("--host", default=None, help="Host to bind to (default: 0.0.0.0)")
@click.option("--port", default=None, type=int, help="Port to bind to (default: PORT or 8000)")
@click.option("--reload/--no-reload", default=True, help="Enable or disable auto-reload")
def serve(host, port, reload):
    """Run the Wordbank API server."""
    from .cli_handlers import handle_serve
    handle_serve(host, port, reload)


@cli.command("init-db")
def init_db():
    """Create the database tables if they do not exist."""
    from .cli_handlers import handle_init_db
    handle_init_db()


@cli.command("import")
@click.argument("file_path", type=click.Path(exists=True, dir_okay=False))
@click.option("--api-url", default="http://localhost:8000/api/v1", help="API base URL")
@click.option("--chunked/--no-chunked", default=True, help="Submit the file chunk by chunk following the server cursor")
def import_words(file_path, api_url, chunked):
    """Import words from a JSON file through the bulk endpoint."""
    from .cli_handlers import handle_import_words
    handle_import_words(file_path, api_url, chunked)


@cli.command()
@click.option("--api-url", default="http://localhost:8000/api/v1", help="API base URL")
def groups(api_url):
    """List group labels and their words."""
    from .cli_handlers import handle_list_groups
    handle_list_groups(api_url)


@cli.command()
@click.argument("word")
@click.option("--api-url", default="http://localhost:8000/api/v1", help="API base URL")
def delete(word, api_url):
    """Delete a word."""
    from .cli_handlers import handle_delete_word
    handle_delete_word(word, api_url)


@cli.command("set-api-key")
@click.argument("key")
def set_api_key(key):
    """Require KEY in the X-API-Key header of every API request."""
    from .cli_handlers import handle_set_api_key
    handle_set_api_key(key)


if __name__ == "__main__":
    cli()
