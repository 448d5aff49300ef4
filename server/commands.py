"""
Provisioning commands.

    flask --app app create-account admin@example.com --role admin --name "Ada"
    flask --app app add-station "Station 1" --id S1
"""
import click
from flask import current_app
from flask.cli import with_appcontext

from database import db
from models import Account, Admin, Supervisor
from utils.security import hash_password

DIRECTORIES = {
    'admin': Admin,
    'supervisor': Supervisor,
}


def create_account(email, password, role, name=''):
    """Create login credentials and grant a role. Returns the directory entry."""
    email = email.strip().lower()
    if role not in DIRECTORIES:
        raise ValueError(f"Unknown role: {role}")
    if Account.query.filter_by(email=email).first():
        raise ValueError(f"Account already exists: {email}")

    directory = DIRECTORIES[role]
    db.session.add(Account(email=email, password_hash=hash_password(password)))
    entry = directory(email=email, name=name)
    db.session.add(entry)
    db.session.commit()
    return entry


@click.command('create-account')
@click.argument('email')
@click.option('--role', type=click.Choice(sorted(DIRECTORIES)), required=True)
@click.option('--name', default='')
@click.password_option()
@with_appcontext
def create_account_command(email, role, name, password):
    """Create a login for an admin or supervisor."""
    try:
        create_account(email, password, role, name)
    except ValueError as exc:
        raise click.ClickException(str(exc))
    click.echo(f"Created {role} account for {email.lower()}")


@click.command('add-station')
@click.argument('name')
@click.option('--id', 'station_id', default=None)
@with_appcontext
def add_station_command(name, station_id):
    """Add an unoccupied station."""
    fields = {'name': name, 'is_occupied': False}
    if station_id:
        fields['id'] = station_id
    station = current_app.extensions['docstore'].create('stations', fields)
    click.echo(f"Added station {station['name']} ({station['id']})")


def register_commands(app):
    app.cli.add_command(create_account_command)
    app.cli.add_command(add_station_command)
