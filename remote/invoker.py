"""Run console commands inside a deployed Lambda function.

The function receives ``{"cli": "<command line>"}`` and answers with
``{"output": "...", "exitCode": N}``. Each argument is shell-quoted before
being joined since the remote side hands the string to a shell as-is.
"""
import base64
import json
import logging
import shlex
from typing import Any, List, NamedTuple, Optional, Union

import click
from botocore.exceptions import BotoCoreError, ClientError

logger = logging.getLogger("bref")

MAX_EXIT_CODE = 255


class InvocationRequest(NamedTuple):
    function_name: str
    region: str
    arguments: List[str]


class InvocationResult(NamedTuple):
    payload: Any
    logs: str


class InvocationFailed(NamedTuple):
    logs: str
    message: str


class StructuredOutput(NamedTuple):
    text: str
    exit_code: int


class UnexpectedPayload(NamedTuple):
    raw: Any
    logs: str


def escape_arguments(arguments):
    return ' '.join(shlex.quote(argument) for argument in arguments)


def build_payload(arguments) -> str:
    return json.dumps({'cli': escape_arguments(arguments)})


def decode_logs(log_result: Optional[str]) -> str:
    if not log_result:
        return ''
    return base64.b64decode(log_result).decode('utf-8', errors='replace')


class Invoker:
    """Synchronous Lambda invocations with the execution log tail attached."""

    def __init__(self, lambda_client):
        self.lambda_client = lambda_client

    def invoke(self, function_name: str, payload: str
               ) -> Union[InvocationResult, InvocationFailed]:
        logger.debug("Invoking %s with payload %s", function_name, payload)
        try:
            response = self.lambda_client.invoke(
                FunctionName=function_name,
                InvocationType='RequestResponse',
                LogType='Tail',
                Payload=payload
            )
        except (ClientError, BotoCoreError) as e:
            logger.debug("Invocation of %s failed: %s", function_name, e)
            return InvocationFailed(logs='', message=str(e))

        logs = decode_logs(response.get('LogResult'))
        body = response['Payload'].read().decode('utf-8')
        logger.debug("Response from %s: %s", function_name, body)

        try:
            result = json.loads(body) if body else None
        except ValueError:
            result = body

        if response.get('FunctionError'):
            if isinstance(result, dict) and 'errorMessage' in result:
                message = result['errorMessage']
            else:
                message = body
            return InvocationFailed(logs=logs, message=message)

        return InvocationResult(payload=result, logs=logs)


def exit_code_of(payload) -> int:
    code = payload.get('exitCode')
    if isinstance(code, bool):
        return 1
    if isinstance(code, float) and code.is_integer():
        code = int(code)
    if not isinstance(code, int):
        return 1
    # Shells only see the low 8 bits of the status
    if code < 0:
        return 1
    return min(code, MAX_EXIT_CODE)


def output_text(output) -> str:
    if isinstance(output, str):
        return output
    return json.dumps(output)


def interpret(result: InvocationResult
              ) -> Union[StructuredOutput, UnexpectedPayload]:
    payload = result.payload
    if isinstance(payload, dict) and 'output' in payload:
        return StructuredOutput(text=output_text(payload['output']),
                                exit_code=exit_code_of(payload))
    return UnexpectedPayload(raw=payload, logs=result.logs)


def print_failure(failure: InvocationFailed):
    if failure.logs:
        click.echo(failure.logs, err=True)
    click.echo(failure.message, err=True)


def run_remote(invoker: Invoker, function_name: str, arguments) -> int:
    """Run ``arguments`` as a console command in ``function_name``.

    Returns the exit code reported by the remote command, or 1 when the
    invocation failed or the response could not be understood.
    """
    result = invoker.invoke(function_name, build_payload(arguments))

    if isinstance(result, InvocationFailed):
        print_failure(result)
        return 1

    outcome = interpret(result)
    if isinstance(outcome, StructuredOutput):
        click.echo(outcome.text)
        return outcome.exit_code

    click.echo('Error: unexpected response from the function, '
               'no "output" field found', err=True)
    click.echo(outcome.logs, err=True)
    click.echo(json.dumps(outcome.raw, indent=4), err=True)
    return 1
