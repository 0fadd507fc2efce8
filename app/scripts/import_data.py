# Copyright (c) 2025 Joël Krügel
# License: GPL-3.0
# See LICENSE file in the project root for details.

from pathlib import Path

import typer

from app.db import build_store, set_store
from app.services.seed import create_default_user, import_data

cli = typer.Typer(help="Import users, routers and devices from JSON exports")


@cli.command()
def main(
    source: Path = typer.Argument(Path("."), help="Directory holding users.json, routers.json, devices.json"),
    backend: str = typer.Option(None, help="Target backend: sql or json (default: STORAGE_BACKEND)"),
    ensure_admin: bool = typer.Option(True, help="Create the admin account if the export has none"),
):
    """Clear the store and load the JSON exports into it."""
    store = build_store(backend)
    set_store(store)
    try:
        counts = import_data(source, store)
    except FileNotFoundError as e:
        typer.echo(f"❌ {e}")
        raise typer.Exit(1)
    if ensure_admin:
        create_default_user()
    typer.echo(
        f"✅ Imported {counts['users']} users, {counts['routers']} routers, "
        f"{counts['devices']} devices, {counts['efile']} audit entries into the {store.name} store"
    )


if __name__ == "__main__":
    cli()
