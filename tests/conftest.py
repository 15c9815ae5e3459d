"""
Shared fixtures: a recording fake EC2 client and run settings.
"""

import pytest
from unittest.mock import Mock

from webstack.config import Settings

USER_DATA = b"#!/bin/bash\necho 'hello' > /tmp/hello\n"


def make_fake_ec2(instance_count=2, instance_state='running'):
    """Mock EC2 client answering like the AWS API; calls land in method_calls."""
    ec2 = Mock()
    ec2.create_vpc.return_value = {'Vpc': {'VpcId': 'vpc-1'}}
    ec2.modify_vpc_attribute.return_value = {}
    ec2.create_subnet.return_value = {'Subnet': {'SubnetId': 'subnet-1'}}
    ec2.create_security_group.return_value = {'GroupId': 'sg-1'}
    ec2.authorize_security_group_ingress.return_value = {'Return': True}
    ec2.create_launch_template.return_value = {'LaunchTemplate': {'LaunchTemplateId': 'lt-1'}}
    ec2.run_instances.return_value = {
        'Instances': [
            {
                'InstanceId': f'i-{n}',
                'PublicIpAddress': f'54.0.0.{n}',
                'PublicDnsName': f'ec2-54-0-0-{n}.compute-1.amazonaws.com',
                'State': {'Code': 16, 'Name': instance_state},
            }
            for n in range(1, instance_count + 1)
        ]
    }
    ec2.get_waiter.return_value = Mock()
    return ec2


@pytest.fixture
def user_data_file(tmp_path):
    path = tmp_path / "user_data.sh"
    path.write_bytes(USER_DATA)
    return path


@pytest.fixture
def settings(user_data_file):
    return Settings(user_data_path=str(user_data_file), wait_delay=1, wait_timeout=10)


@pytest.fixture
def fake_ec2():
    return make_fake_ec2()
