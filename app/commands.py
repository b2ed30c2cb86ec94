"""
CLI commands

    flask create-admin --email admin@example.com --password s3cret

Falls back to ADMIN_EMAIL / ADMIN_PASSWORD / ADMIN_NAME from configuration.
"""

import click
from flask import current_app
from flask.cli import with_appcontext

from app.errors import ApiError
from app.services.identity_service import provision_admin


@click.command('create-admin')
@click.option('--email', default=None, help='Admin email (default: ADMIN_EMAIL)')
@click.option('--password', default=None, help='Password for a new account (default: ADMIN_PASSWORD)')
@click.option('--name', default=None, help='Display name (default: ADMIN_NAME)')
@with_appcontext
def create_admin_command(email, password, name):
    """Create an Admin account, or promote an existing user to Admin"""
    email = email or current_app.config.get('ADMIN_EMAIL')
    password = password or current_app.config.get('ADMIN_PASSWORD')
    name = name or current_app.config.get('ADMIN_NAME') or 'System Admin'

    if not email:
        raise click.UsageError('Provide --email or set ADMIN_EMAIL')

    try:
        user, created = provision_admin(email, password, name)
    except ApiError as e:
        raise click.ClickException(e.message)

    if created:
        click.echo(f"Created admin '{user.email}'")
    else:
        click.echo(f"User '{user.email}' is an admin")


def register_commands(app):
    app.cli.add_command(create_admin_command)
