"""
Database setup commands, run through the Flask CLI:

    flask --app api init-db       # create the database and missing tables
    flask --app api seed-db       # upsert lookup rows
    flask --app api grant-roles   # create bs_admin / bs_staff / bs_readonly and grant
    flask --app api setup-db      # all of the above, in that order

Role passwords come from BS_ADMIN_PASSWORD, BS_STAFF_PASSWORD and
BS_READONLY_PASSWORD (see api.config).
"""
import click
from flask import current_app
from flask.cli import with_appcontext

from models import storage
from models.roles import apply_roles
from models.seed import seed_lookup_tables


def _role_settings():
    cfg = current_app.config
    return cfg["ROLE_PASSWORDS"], cfg["ROLE_HOST"], cfg["DATABASE_NAME"]


@click.command("init-db")
@with_appcontext
def init_db_command():
    """Create the database (server backends) and every missing table."""
    if storage.create_database(current_app.config["DATABASE_NAME"]):
        click.echo("Database ready.")
    storage.reload()
    click.echo(f"Schema ready ({len(storage.table_names())} tables).")


@click.command("seed-db")
@with_appcontext
def seed_db_command():
    """Insert or update the lookup table rows."""
    storage.reload()
    counts = seed_lookup_tables(storage.get_session())
    storage.save()
    for table, count in counts.items():
        click.echo(f"{table}: {count} rows")


@click.command("grant-roles")
@with_appcontext
def grant_roles_command():
    """Create the admin, staff and readonly accounts and grant their privileges."""
    passwords, host, database = _role_settings()
    try:
        applied = apply_roles(storage.engine, passwords, host=host, database=database)
    except ValueError as exc:
        raise click.ClickException(str(exc))
    if applied:
        click.echo(f"Granted roles: {', '.join(applied)}")
    else:
        click.echo(f"No access control on {storage.dialect_name}; roles skipped.")


@click.command("setup-db")
@click.option("--skip-roles", is_flag=True, help="Only create the schema and seed it.")
@with_appcontext
def setup_db_command(skip_roles):
    """Schema, then seed rows, then roles."""
    passwords, host, database = _role_settings()
    try:
        counts = storage.setup(
            credentials=None if skip_roles else passwords, role_host=host, database=database
        )
    except ValueError as exc:
        raise click.ClickException(str(exc))
    click.echo(f"Seeded {sum(counts.values())} lookup rows across {len(counts)} tables.")


def register_commands(app):
    app.cli.add_command(init_db_command)
    app.cli.add_command(seed_db_command)
    app.cli.add_command(grant_roles_command)
    app.cli.add_command(setup_db_command)
