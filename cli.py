import logging

import click

from remote import commands


@click.group()
@click.option('--verbose', '-v', is_flag=True, help='Enable debug logging.')
def bref(verbose):
    """This CLI is used to operate serverless PHP applications on AWS Lambda.

    It runs console commands inside deployed functions and invokes functions
    with arbitrary events.
    """
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format='%(asctime)s %(name)-12s %(levelname)-8s %(message)s'
    )
    logging.getLogger("bref").setLevel(level)


bref.add_command(commands.cli_command)
bref.add_command(commands.invoke_command)


if __name__ == '__main__':
    bref()
