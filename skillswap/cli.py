import click

from skillswap import accounts, create_tables, db
from skillswap.errors import NotFound


def register_commands(app):
    @app.cli.command('init-db')
    def init_db():
        """Create missing tables and seed the default skill levels."""
        create_tables()
        click.echo('Database initialised.')

    @app.cli.command('make-admin')
    @click.argument('login')
    def make_admin(login):
        """Grant admin rights to the live account LOGIN."""
        try:
            accounts.promote_to_admin(db.session, login)
        except NotFound:
            raise click.ClickException(f"No live account with login '{login}'")
        click.echo(f"{login} is now an admin.")
