import click
from flask.cli import with_appcontext

from findmyrun import db
from findmyrun.models import OwnerSession


@click.command('purge-sessions')
@with_appcontext
def purge_sessions():
    """Delete expired owner login links and sessions."""
    count = OwnerSession.purge_expired()
    db.session.commit()
    click.echo(f"Purged {count} expired owner sessions.")
