"""
Straight-line provisioning pipeline: VPC, subnet, security group, launch
template, instances. The first failure aborts the run; resources created by
earlier steps are left in place.
"""

import logging
from typing import Optional

import boto3
from botocore.exceptions import BotoCoreError

from .config import Settings
from .deadline import Deadline
from .errors import ConfigurationError
from .ids import new_run_id
from .provision import (
    StackResult,
    create_launch_template,
    create_security_group,
    create_subnet,
    create_vpc,
    launch_instances,
    wait_for_instances,
)
from .tags import base_tags

logger = logging.getLogger(__name__)


def make_ec2_client(settings: Settings, session: Optional[boto3.session.Session] = None):
    """
    Build the EC2 client for the configured region.
    
    Args:
        settings: Run settings
        session: Optional boto3 session, a fresh one by default
        
    Returns:
        Boto3 EC2 client
        
    Raises:
        ConfigurationError: If no AWS credentials can be resolved
    """
    session = session or boto3.session.Session(region_name=settings.region)
    try:
        credentials = session.get_credentials()
    except BotoCoreError as e:
        raise ConfigurationError(f"Error loading AWS configuration: {e}") from e
    if credentials is None:
        raise ConfigurationError("Error loading AWS configuration: no credentials found")
    
    client = session.client('ec2', region_name=settings.region, config=settings.boto_config())
    logger.info(f"AWS configuration loaded successfully (region {settings.region})")
    return client


def provision_stack(ec2, settings: Settings, run_id: Optional[str] = None,
                    deadline: Optional[Deadline] = None, tag_resources: bool = True) -> StackResult:
    """
    Run all five provisioning steps in order.
    
    Args:
        ec2: Boto3 EC2 client
        settings: Run settings
        run_id: Run ID used for tagging, generated when omitted
        deadline: Run deadline, settings.run_timeout from now when omitted
        tag_resources: Attach project/run_id tags to created resources
        
    Returns:
        StackResult with every identifier produced
        
    Raises:
        WebstackError: On the first failing step
    """
    run_id = run_id or new_run_id()
    deadline = deadline or Deadline(settings.run_timeout)
    tags = base_tags(run_id, settings.extra_tags) if tag_resources else None
    
    logger.info(f"Starting run {run_id} in {settings.region}")
    
    deadline.check('vpc')
    vpc_id = create_vpc(ec2, settings, tags)
    
    deadline.check('subnet')
    subnet_id = create_subnet(ec2, settings, vpc_id, tags)
    
    deadline.check('security_group')
    security_group_id = create_security_group(ec2, settings, vpc_id, tags)
    
    deadline.check('launch_template')
    launch_template_id = create_launch_template(ec2, settings, security_group_id, tags)
    
    deadline.check('instances')
    instances = launch_instances(ec2, settings, launch_template_id, subnet_id, tags)
    instances = wait_for_instances(ec2, settings, instances, deadline)
    
    logger.info(f"Run {run_id} complete")
    return StackResult(
        run_id=run_id,
        vpc_id=vpc_id,
        subnet_id=subnet_id,
        security_group_id=security_group_id,
        launch_template_id=launch_template_id,
        instances=instances,
    )
