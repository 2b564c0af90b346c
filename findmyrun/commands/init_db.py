import click
from flask.cli import with_appcontext

from findmyrun import db


@click.command('init-db')
@click.option('--drop', is_flag=True, help='Drop existing tables first')
@with_appcontext
def init_db(drop):
    """Create all database tables."""
    if drop:
        if not click.confirm("WARNING: This will delete ALL data from the database. Are you sure you want to continue?"):
            click.echo("Operation cancelled.")
            return
        db.drop_all()
        click.echo("Dropped all tables.")

    db.create_all()
    click.echo("Database tables created.")
