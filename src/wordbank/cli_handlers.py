"""
CLI Command Handlers.
Contains all the implementation logic for CLI commands.
"""

import json
from typing import Any, Dict, List

import click


def load_words_file(file_path: str) -> List[Dict[str, Any]]:
    """Read a JSON list of words, or an object with a "words" list."""
    with open(file_path, "r", encoding="utf-8") as f:
        data = json.load(f)

    if isinstance(data, dict):
        data = data.get("words")
    if not isinstance(data, list) or not data:
        raise click.BadParameter(f"{file_path} must contain a non-empty list of words")
    return data


def handle_serve(host, port, reload):
    """Handle serve command."""
    import uvicorn
    from .api.core.config import settings
    from .core.settings import BackendSettings, LogLevel

    uvicorn_log_level = {
        LogLevel.DEBUG: "debug",
        LogLevel.INFO: "info",
        LogLevel.ERROR: "error",
        LogLevel.NONE: "critical",
    }.get(BackendSettings.get_log_level(), "info")

    uvicorn.run(
        "wordbank.api.main:app",
        host=host or settings.api_host,
        port=port or settings.api_port,
        reload=reload,
        log_level=uvicorn_log_level
    )


def handle_init_db():
    """Handle init-db command."""
    from .storage.src.database import get_db_path
    from .storage.src.project.initialize_database import setup_database

    setup_database()
    click.echo(f"✅ Database ready at {get_db_path()}")


def handle_import_words(file_path, api_url, chunked):
    """Handle import command."""
    from .api.services.api_client import APIError, VocabularyAPIClient

    words = load_words_file(file_path)
    client = VocabularyAPIClient(base_url=api_url)
    click.echo(f"📤 Importing {len(words)} words from {file_path}...")

    totals = {"addedCount": 0, "skippedCount": 0, "errorCount": 0}
    try:
        responses = client.bulk_insert_chunked(words) if chunked else [client.bulk_insert(words)]
        for response in responses:
            start = response.get("offset", 0)
            end = start + response.get("totalSent", 0)
            click.echo(
                f"  words {start}-{end - 1}: {response['addedCount']} added, "
                f"{response['skippedCount']} skipped, {response['errorCount']} errors"
                f"{'' if response.get('aiProcessingUsed') else ' (no AI grouping)'}"
            )
            for error in response.get("results", {}).get("errors", []):
                click.echo(f"    ❌ {error['word']}: {error['error']}", err=True)
            for key in totals:
                totals[key] += response.get(key, 0)
    except APIError as e:
        click.echo(f"❌ Import failed: {e}", err=True)
        raise click.Abort()

    click.echo(
        f"✅ Done. {totals['addedCount']} added, {totals['skippedCount']} skipped, "
        f"{totals['errorCount']} errors"
    )


def handle_list_groups(api_url):
    """Handle groups command."""
    from .api.services.api_client import APIError, VocabularyAPIClient

    try:
        groups = VocabularyAPIClient(base_url=api_url).get_groups()
    except APIError as e:
        click.echo(f"❌ Could not load groups: {e}", err=True)
        raise click.Abort()

    if not groups:
        click.echo("No groups yet.")
        return

    for label, entries in groups.items():
        click.echo(f"📂 {label} ({len(entries)})")
        for entry in entries:
            click.echo(f"  - {entry['word']}: {entry['meaning']}")


def handle_delete_word(word, api_url):
    """Handle delete command."""
    from .api.services.api_client import APIError, VocabularyAPIClient

    try:
        VocabularyAPIClient(base_url=api_url).delete_word(word)
    except APIError as e:
        if e.status_code == 404:
            click.echo(f"⚠️ Word not found: {word}")
            return
        click.echo(f"❌ Delete failed: {e}", err=True)
        raise click.Abort()

    click.echo(f"🗑️ Deleted {word}")


def handle_set_api_key(key):
    """Handle set-api-key command."""
    from .core.settings import BackendSettings
    from .storage.src.project.initialize_database import setup_database

    setup_database()
    if not BackendSettings.set_api_key(key):
        click.echo("❌ Could not store the API key", err=True)
        raise click.Abort()
    click.echo("🔑 API key stored; clients must now send it as X-API-Key")
