import os
import sys
from typing import Optional

import boto3
from botocore.config import Config
from ruamel.yaml import YAML

DEFAULT_REGION = 'us-east-1'
REGION_ENV_VAR = 'AWS_DEFAULT_REGION'

# Lambda functions run for at most 15 minutes
READ_TIMEOUT = 15 * 60


def load_config(configfile):
    """Load the optional YAML configuration file.

    Only the ``Region`` and ``Profile`` keys are used, everything else is
    ignored.
    """
    yaml = YAML()

    try:
        parsed_config = yaml.load(configfile)
    except Exception as e:
        print('Error reading configuration YAML: {}'.format(e))
        sys.exit(1)

    if parsed_config is None:
        return {}
    if not isinstance(parsed_config, dict):
        print('Error reading configuration YAML: expected a mapping')
        sys.exit(1)
    return parsed_config


def resolve_region(flag_value: Optional[str], config=None, environ=None) -> str:
    if flag_value:
        return flag_value
    if config and config.get('Region'):
        return str(config['Region'])
    if environ is None:
        environ = os.environ
    return environ.get(REGION_ENV_VAR) or DEFAULT_REGION


def resolve_profile(flag_value: Optional[str], config=None) -> Optional[str]:
    profile = flag_value
    if not profile and config:
        profile = config.get('Profile')
    if profile == 'default':
        profile = None
    return profile


def make_lambda_client(region: str, profile: Optional[str] = None):
    session = boto3.Session(profile_name=profile)
    return session.client(
        'lambda',
        region_name=region,
        config=Config(read_timeout=READ_TIMEOUT,
                      retries={'max_attempts': 0})
    )
