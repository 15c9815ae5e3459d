"""Main CLI entrypoint for webstack."""

import json
import logging
import sys
from typing import Any, Dict

import click

from ..config import ENV_FILE_PATH, Settings, load_env_file
from ..errors import WebstackError
from ..pipeline import make_ec2_client, provision_stack

logger = logging.getLogger(__name__)


def _json_output(data: Dict[str, Any]) -> None:
    """Output data as JSON."""
    click.echo(json.dumps(data, indent=None))


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    if not verbose:
        # botocore is chatty at INFO once credentials are resolved
        logging.getLogger('botocore').setLevel(logging.WARNING)


@click.group()
@click.version_option(package_name='webstack')
def main():
    """Webstack - provision a VPC, subnet, security group and EC2 instances."""


@main.command()
@click.option('--env-file', default=ENV_FILE_PATH, show_default=True, help='Environment file to load')
@click.option('--no-env-file', is_flag=True, help='Do not load an environment file')
@click.option('--user-data', 'user_data_path', help='User-data script for the launch template')
@click.option('--count', 'instance_count', type=int, help='Number of instances to launch')
@click.option('--region', help='AWS region')
@click.option('--no-tags', is_flag=True, help='Do not tag created resources')
@click.option('--json', 'output_json', is_flag=True, help='Output machine-readable JSON')
@click.option('--verbose', is_flag=True, help='Enable debug logging')
def up(env_file, no_env_file, user_data_path, instance_count, region, no_tags, output_json, verbose):
    """Provision the stack and wait for the instances to be running."""
    _configure_logging(verbose)
    try:
        if not no_env_file:
            loaded = load_env_file(env_file)
            logger.info(f"Environment variables loaded successfully from {loaded}")
        
        settings = Settings.from_env(
            region=region,
            user_data_path=user_data_path,
            instance_count=instance_count,
        )
        ec2 = make_ec2_client(settings)
        result = provision_stack(ec2, settings, tag_resources=not no_tags)
    except WebstackError as e:
        if output_json:
            _json_output({'error': str(e)})
        else:
            click.echo(f"❌ {e}", err=True)
        sys.exit(1)
    
    if output_json:
        _json_output(result.to_dict())
    else:
        click.echo(f"✅ Run {result.run_id} complete")
        click.echo(f"VPC: {result.vpc_id}")
        click.echo(f"Subnet: {result.subnet_id}")
        click.echo(f"Security group: {result.security_group_id}")
        click.echo(f"Launch template: {result.launch_template_id}")
        for instance in result.instances:
            click.echo(f"Instance: {instance.instance_id} ({instance.state}) {instance.public_dns or ''}".rstrip())
