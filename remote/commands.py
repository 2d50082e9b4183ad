import logging

import click
from botocore.exceptions import BotoCoreError

from remote import config
from remote.events import parse_event, run_invoke
from remote.invoker import InvocationRequest, Invoker, run_remote

logger = logging.getLogger("bref")


def region_options(f):
    f = click.option('--config', 'configfile', type=click.File('r'),
                     help='YAML configuration file with Region and Profile.')(f)
    f = click.option('--profile',
                     help='AWS credentials profile to use.')(f)
    f = click.option('--region',
                     help=f'AWS region, defaults to the {config.REGION_ENV_VAR} '
                          f'environment variable or {config.DEFAULT_REGION}.')(f)
    return f


def resolve_settings(region, profile, configfile):
    parsed_config = config.load_config(configfile) if configfile else {}
    return (config.resolve_region(region, parsed_config),
            config.resolve_profile(profile, parsed_config))


def make_invoker(ctx, region, profile):
    try:
        return Invoker(config.make_lambda_client(region, profile))
    except BotoCoreError as e:
        click.echo(f'Error: {e}', err=True)
        ctx.exit(1)


@click.command('cli', context_settings=dict(ignore_unknown_options=True))
@click.argument('function')
@region_options
@click.argument('arguments', nargs=-1, type=click.UNPROCESSED)
@click.pass_context
def cli_command(ctx, function, region, profile, configfile, arguments):
    """Run a console command in a deployed function.

    Everything after the function name is forwarded to the remote console,
    for example:

        bref cli my-app-console -- migrate --force
    """
    region, profile = resolve_settings(region, profile, configfile)
    request = InvocationRequest(function, region, list(arguments))
    logger.debug("Running %s in %s (%s)", request.arguments,
                 request.function_name, request.region)

    invoker = make_invoker(ctx, request.region, profile)
    ctx.exit(run_remote(invoker, request.function_name, request.arguments))


@click.command('invoke')
@click.argument('function')
@click.option('--event', '-e', help='JSON event passed to the function.')
@click.option('--logs', is_flag=True,
              help='Print the end of the execution log.')
@region_options
@click.pass_context
def invoke_command(ctx, function, event, logs, region, profile, configfile):
    """Invoke a deployed function and print its result."""
    try:
        payload = parse_event(event)
    except ValueError as e:
        raise click.BadParameter(f'invalid JSON: {e}', param_hint='--event')

    region, profile = resolve_settings(region, profile, configfile)
    invoker = make_invoker(ctx, region, profile)
    ctx.exit(run_invoke(invoker, function, payload, show_logs=logs))
