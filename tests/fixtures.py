__all__ = [
    "aws_credentials",
    "lambda_client",
    "FakeLambdaClient",
    "fake_lambda",
    "captured_sessions",
]

import base64
import io
import json
from os import environ

import boto3
import moto
import pytest

from remote import config


@pytest.fixture(scope="function")
def aws_credentials():
    """Mocked AWS Credentials for moto."""
    environ["AWS_ACCESS_KEY_ID"] = "testing"
    environ["AWS_SECRET_ACCESS_KEY"] = "testing"
    environ["AWS_SECURITY_TOKEN"] = "testing"
    environ["AWS_SESSION_TOKEN"] = "testing"


@pytest.fixture(scope="function")
def lambda_client(aws_credentials):
    with moto.mock_aws():
        yield boto3.client("lambda", region_name="us-east-1")


class FakeLambdaClient:
    """Answers every invocation with the same canned response."""

    def __init__(self, payload=None, logs="", function_error=None,
                 raw_body=None, error=None):
        self.payload = payload
        self.logs = logs
        self.function_error = function_error
        self.raw_body = raw_body
        self.error = error
        self.calls = []

    def invoke(self, **kwargs):
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error

        if self.raw_body is not None:
            body = self.raw_body
        else:
            body = json.dumps(self.payload)
        response = {
            "StatusCode": 200,
            "Payload": io.BytesIO(body.encode("utf-8")),
            "LogResult": base64.b64encode(self.logs.encode("utf-8")).decode(),
        }
        if self.function_error:
            response["FunctionError"] = self.function_error
        return response


@pytest.fixture(scope="function")
def fake_lambda(monkeypatch):
    """Route `make_lambda_client` to a FakeLambdaClient set up by the test."""
    client = FakeLambdaClient(payload={"output": "", "exitCode": 0})
    monkeypatch.setattr(config, "make_lambda_client",
                        lambda region, profile=None: client)
    return client


@pytest.fixture(scope="function")
def captured_sessions(monkeypatch):
    """Replace boto3.Session and record how Lambda clients get built."""
    sessions = []

    class CapturingSession:
        def __init__(self, profile_name=None):
            self.profile_name = profile_name
            self.clients = []
            sessions.append(self)

        def client(self, service_name, region_name=None, config=None):
            self.clients.append({"service_name": service_name,
                                 "region_name": region_name,
                                 "config": config})
            return FakeLambdaClient(payload={"output": "", "exitCode": 0})

    monkeypatch.setattr(config.boto3, "Session", CapturingSession)
    return sessions
