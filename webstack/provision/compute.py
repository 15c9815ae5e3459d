"""
Launch template and EC2 instance provisioning, including the wait for the
instances to reach the running state.
"""

import base64
import logging
import math
from pathlib import Path
from typing import Dict, List, Optional

from botocore.exceptions import BotoCoreError, ClientError, WaiterError

from ..config import Settings
from ..deadline import Deadline
from ..errors import InstanceFailedError, StepError, UserDataError, WaitError, WaitTimeoutError
from ..ids import unique_name
from ..tags import tag_specifications
from .models import LaunchedInstance

logger = logging.getLogger(__name__)

LATEST_VERSION = "$Latest"


def encode_user_data(path: str) -> str:
    """
    Read a user-data script and base64-encode its exact bytes.

    Args:
        path: Path to the script

    Returns:
        Base64 string ready for the UserData field

    Raises:
        UserDataError: If the file is missing or unreadable
    """
    try:
        raw = Path(path).read_bytes()
    except OSError as e:
        raise UserDataError(path, e.strerror or str(e)) from e

    logger.info(f"{path} file read successfully ({len(raw)} bytes)")
    return base64.b64encode(raw).decode('ascii')


def create_launch_template(ec2, settings: Settings, security_group_id: str,
                           tags: Optional[Dict[str, str]] = None) -> str:
    """
    Register a launch template carrying the user-data script.

    Args:
        ec2: Boto3 EC2 client
        settings: Run settings (image, instance type, user-data path)
        security_group_id: Security group attached to launched instances
        tags: Optional tags applied to the template

    Returns:
        Launch template ID

    Raises:
        UserDataError: If the user-data file cannot be read
        StepError: If the API call fails
    """
    user_data = encode_user_data(settings.user_data_path)
    template_name = unique_name(settings.launch_template_prefix)

    params = {
        'LaunchTemplateName': template_name,
        'LaunchTemplateData': {
            'UserData': user_data,
            'ImageId': settings.image_id,
            'InstanceType': settings.instance_type,
            'SecurityGroupIds': [security_group_id],
        },
    }
    if tags:
        params['TagSpecifications'] = tag_specifications('launch-template', tags, name=template_name)

    try:
        response = ec2.create_launch_template(**params)
    except (ClientError, BotoCoreError) as e:
        raise StepError('launch_template', f"error creating launch template: {e}") from e

    template_id = response['LaunchTemplate']['LaunchTemplateId']
    logger.info(f"Launch template {template_name} created with ID: {template_id}")
    return template_id


def launch_instances(ec2, settings: Settings, launch_template_id: str, subnet_id: str,
                     tags: Optional[Dict[str, str]] = None) -> List[LaunchedInstance]:
    """
    Launch exactly settings.instance_count instances from the template.

    MinCount and MaxCount are equal, so the call either yields that many
    instances or fails.

    Args:
        ec2: Boto3 EC2 client
        settings: Run settings
        launch_template_id: Template to launch from
        subnet_id: Subnet to launch into
        tags: Optional tags applied to the instances

    Returns:
        Launched instances as reported by run_instances

    Raises:
        StepError: If the call fails
    """
    params = {
        'LaunchTemplate': {
            'LaunchTemplateId': launch_template_id,
            'Version': LATEST_VERSION,
        },
        'MinCount': settings.instance_count,
        'MaxCount': settings.instance_count,
        'SubnetId': subnet_id,
    }
    if tags:
        params['TagSpecifications'] = tag_specifications('instance', tags)

    try:
        response = ec2.run_instances(**params)
    except (ClientError, BotoCoreError) as e:
        raise StepError('instances', f"unable to launch instances: {e}") from e

    instances = [LaunchedInstance.from_aws(item) for item in response.get('Instances', [])]
    for instance in instances:
        logger.info(
            f"Launched instance with ID: {instance.instance_id}, "
            f"IP address: {instance.public_ip or '-'}, DNS name: {instance.public_dns or '-'}"
        )
    return instances


def wait_for_instances(ec2, settings: Settings, instances: List[LaunchedInstance],
                       deadline: Optional[Deadline] = None) -> List[LaunchedInstance]:
    """
    Block until every instance reports running.

    Polling is delegated to the boto3 instance_running waiter. The attempt
    budget is settings.wait_timeout, clipped to what is left of the run
    deadline.

    Args:
        ec2: Boto3 EC2 client
        settings: Run settings (wait_timeout, wait_delay)
        instances: Instances returned by launch_instances
        deadline: Optional run deadline

    Returns:
        The same instances, marked running

    Raises:
        WaitTimeoutError: If the budget runs out while an instance is pending
        InstanceFailedError: If an instance enters a terminal non-running state
        WaitError: If the waiter fails for any other reason
    """
    instance_ids = [instance.instance_id for instance in instances]
    if not instance_ids:
        raise WaitError("no instances to wait for", instance_ids)

    budget = settings.wait_timeout
    if deadline is not None:
        deadline.check('wait')
        budget = min(budget, deadline.remaining())
    # One poll before the first sleep, so N sleeps need N + 1 attempts
    max_attempts = math.ceil(budget / settings.wait_delay) + 1

    waiter = ec2.get_waiter('instance_running')
    logger.info(f"Waiting for instances to be running: {', '.join(instance_ids)}")
    logger.info("This may take a few minutes...")

    try:
        waiter.wait(
            InstanceIds=instance_ids,
            WaiterConfig={'Delay': settings.wait_delay, 'MaxAttempts': max_attempts}
        )
    except WaiterError as e:
        reason = e.kwargs.get('reason', '')
        if 'Max attempts exceeded' in reason:
            raise WaitTimeoutError(
                f"error waiting for instances to be running: timed out after {budget:.0f}s",
                instance_ids, reason
            ) from e
        if 'terminal failure state' in reason:
            raise InstanceFailedError(
                f"error waiting for instances to be running: {reason}",
                instance_ids, reason
            ) from e
        raise WaitError(f"error waiting for instances to be running: {reason}", instance_ids, reason) from e
    except BotoCoreError as e:
        raise WaitError(f"error waiting for instances to be running: {e}", instance_ids, str(e)) from e

    for instance in instances:
        instance.state = 'running'
    logger.info("All instances are running")
    return instances
