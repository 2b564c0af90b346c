import click
from flask import current_app
from flask.cli import with_appcontext

from findmyrun.errors import FindMyRunError
from findmyrun.services.admin_service import load_seed_file, migrate_seed


@click.command('import-seed')
@click.option('--file', 'path', type=click.Path(dir_okay=False), help='Seed JSON file (defaults to SEED_DATA_PATH)')
@click.option('--batch-size', type=int, default=None, help='Clubs per insert batch')
@with_appcontext
def import_seed(path, batch_size):
    """
    Import seed clubs, skipping any whose name is already listed.
    """
    path = path or current_app.config['SEED_DATA_PATH']
    click.echo(f"Loading seed clubs from {path}...")
    try:
        records = load_seed_file(path)
    except FindMyRunError as e:
        raise click.ClickException(e.message)

    result = migrate_seed(records, batch_size=batch_size)
    click.echo(f"Migrated: {result['migrated']}")
    click.echo(f"Skipped (already exist): {result['skipped']}")
    click.echo(f"Total in seed file: {result['total']}")
    for error in result['errors']:
        click.echo(f"  Error - {error}", err=True)
