"""
Tests for the command line entrypoint.
"""

import json

import pytest
from botocore.exceptions import EndpointConnectionError
from click.testing import CliRunner
from unittest.mock import Mock, patch

from webstack.cli.main import main
from webstack.errors import ConfigurationError, StepError
from webstack.provision import LaunchedInstance, StackResult
from conftest import make_fake_ec2


@pytest.fixture
def result():
    return StackResult(
        run_id="r-20240101-120000-abcd",
        vpc_id="vpc-1",
        subnet_id="subnet-1",
        security_group_id="sg-1",
        launch_template_id="lt-1",
        instances=[LaunchedInstance("i-1", "54.0.0.1", "ec2-1.example", "running")],
    )


@patch('webstack.cli.main.provision_stack')
@patch('webstack.cli.main.make_ec2_client')
def test_up_json_success(mock_client, mock_provision, result):
    mock_client.return_value = Mock()
    mock_provision.return_value = result
    
    outcome = CliRunner().invoke(main, ['up', '--no-env-file', '--json', '--count', '3'])
    
    assert outcome.exit_code == 0
    assert json.loads(outcome.stdout.strip().splitlines()[-1])['instances'][0]['instance_id'] == "i-1"
    settings = mock_provision.call_args.args[1]
    assert settings.instance_count == 3


@patch('webstack.cli.main.provision_stack')
@patch('webstack.cli.main.make_ec2_client')
def test_up_step_failure_exits_nonzero(mock_client, mock_provision):
    mock_provision.side_effect = StepError("vpc", "error creating VPC: denied")
    
    outcome = CliRunner().invoke(main, ['up', '--no-env-file'])
    
    assert outcome.exit_code == 1
    assert "error creating VPC" in outcome.output


@patch('webstack.cli.main.provision_stack')
@patch('webstack.cli.main.make_ec2_client')
def test_up_missing_env_file(mock_client, mock_provision, tmp_path):
    outcome = CliRunner().invoke(main, ['up', '--env-file', str(tmp_path / ".env"), '--json'])
    
    assert outcome.exit_code == 1
    assert "Error loading" in json.loads(outcome.stdout.strip().splitlines()[-1])['error']
    assert not mock_client.called
    assert not mock_provision.called


@patch('webstack.cli.main.provision_stack')
@patch('webstack.cli.main.make_ec2_client')
def test_up_missing_credentials(mock_client, mock_provision):
    mock_client.side_effect = ConfigurationError("Error loading AWS configuration: no credentials found")
    
    outcome = CliRunner().invoke(main, ['up', '--no-env-file'])
    
    assert outcome.exit_code == 1
    assert not mock_provision.called


@patch('webstack.cli.main.make_ec2_client')
def test_up_transport_error_during_wait_reports_json_error(mock_client, user_data_file):
    ec2 = make_fake_ec2()
    ec2.get_waiter.return_value.wait.side_effect = EndpointConnectionError(
        endpoint_url="https://ec2.us-east-1.amazonaws.com"
    )
    mock_client.return_value = ec2
    
    outcome = CliRunner().invoke(
        main, ['up', '--no-env-file', '--json', '--user-data', str(user_data_file)]
    )
    
    assert outcome.exit_code == 1
    assert not isinstance(outcome.exception, EndpointConnectionError)
    error = json.loads(outcome.stdout.strip().splitlines()[-1])['error']
    assert "error waiting for instances to be running" in error
