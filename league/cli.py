"""
Command line helpers registered on the Flask app.

Administrators cannot self-register, so the first one is created here:

    flask --app run create-admin --email admin@example.com --first-name Ada --last-name Admin
"""

import click
from flask import Flask

from league.logger import get_logger

logger = get_logger(__name__)


def register_commands(app: Flask) -> None:
    """Attach the league CLI commands to ``app``."""

    @app.cli.command('create-admin')
    @click.option('--email', required=True, help='Login email of the administrator.')
    @click.option('--first-name', required=True)
    @click.option('--last-name', required=True)
    @click.option('--phone-number', default=None)
    @click.password_option(help='Password (prompted when omitted).')
    def create_admin(email, first_name, last_name, phone_number, password):
        """Create a user with the admin role."""
        from league.services import get_services

        result = get_services().users.bootstrap_admin({
            'email': email,
            'first_name': first_name,
            'last_name': last_name,
            'phone_number': phone_number,
            'password': password,
        })
        if not result.ok:
            logger.error(f"Admin creation failed: {result.error.message}")
            raise click.ClickException(result.error.message)
        click.echo(f"Created admin {result.value['email']} (id={result.value['id']})")
