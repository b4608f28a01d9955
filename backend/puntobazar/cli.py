# Overview: Flask CLI command groups for bootstrap and inspection.

# backend/puntobazar/cli.py
# Usage, from backend/ with the virtualenv active (FLASK_APP=wsgi.py):
#
#   flask system init            create tables (sql backend) and seed ADMIN_USERS
#   flask system reset-db --yes  drop and recreate every table, then reseed
#   flask users list             show the seeded back-office operators
#   flask db upgrade             apply Alembic migrations (Flask-Migrate)

import click
from flask import current_app
from flask.cli import with_appcontext

from .extensions import db
from .services.auth_service import seed_users
from .storage import get_storage


@click.group('system')
def system_group():
    """System bootstrap and repair commands."""


@system_group.command('init')
@with_appcontext
def init_system():
    """Create tables (SQL backend) and seed back-office users."""
    storage = get_storage()
    if storage.backend == "sql":
        db.create_all()
        click.echo("PASS Tables created")
    created = seed_users(
        storage, current_app.config.get("ADMIN_USERS", []), current_app.config["BCRYPT_ROUNDS"]
    )
    click.echo(f"PASS Seeded {created} user(s)")


@system_group.command('reset-db')
@click.option('--yes', is_flag=True, help='Confirm destructive reset')
@with_appcontext
def reset_db(yes):
    """Drop and recreate all tables. Deletes every record."""
    if not yes:
        click.echo("FAIL Refusing to reset without --yes")
        raise SystemExit(1)
    if get_storage().backend != "sql":
        click.echo("FAIL reset-db only applies to STORAGE_BACKEND=sql")
        raise SystemExit(1)
    db.drop_all()
    db.create_all()
    created = seed_users(
        get_storage(), current_app.config.get("ADMIN_USERS", []), current_app.config["BCRYPT_ROUNDS"]
    )
    click.echo(f"PASS Database reset, seeded {created} user(s)")


@click.group('users')
def users_group():
    """Back-office user inspection."""


@users_group.command('list')
@with_appcontext
def list_users():
    users = get_storage().usuarios.list()
    if not users:
        click.echo("No users. Run: python -m flask system init")
        return
    for u in users:
        click.echo(f"{u['id']:>3}  {u['usuario']:<20} {u['nombre']}")


def register_commands(app):
    app.cli.add_command(system_group)
    app.cli.add_command(users_group)
