import json

import click

from remote.invoker import Invoker, InvocationFailed, print_failure


def parse_event(text) -> str:
    if not text:
        return '{}'
    # Raises ValueError on malformed JSON
    json.loads(text)
    return text


def run_invoke(invoker: Invoker, function_name, event, show_logs=False):
    """Invoke a function with a JSON event and print what it returns."""
    result = invoker.invoke(function_name, event)

    if isinstance(result, InvocationFailed):
        print_failure(result)
        return 1

    if show_logs and result.logs:
        click.echo(result.logs, err=True)
    click.echo(json.dumps(result.payload, indent=4))
    return 0
