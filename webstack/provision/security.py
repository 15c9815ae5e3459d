"""
Security group provisioning.
"""

import logging
from typing import Dict, List, Optional

from botocore.exceptions import BotoCoreError, ClientError

from ..config import Settings
from ..errors import StepError
from ..ids import unique_name
from ..tags import tag_specifications

logger = logging.getLogger(__name__)


def ingress_permissions(settings: Settings) -> List[Dict]:
    """The single inbound rule opened on the security group."""
    return [{
        'IpProtocol': settings.ingress_protocol,
        'FromPort': settings.ingress_port,
        'ToPort': settings.ingress_port,
        'IpRanges': [{'CidrIp': settings.ingress_cidr}],
    }]


def create_security_group(ec2, settings: Settings, vpc_id: str, tags: Optional[Dict[str, str]] = None) -> str:
    """
    Create a uniquely named security group and open the service port.
    
    A failure while authorizing ingress leaves the group in place without
    any inbound rule.
    
    Args:
        ec2: Boto3 EC2 client
        settings: Run settings
        vpc_id: Parent VPC ID
        tags: Optional tags applied at creation
        
    Returns:
        Security group ID
        
    Raises:
        StepError: If either call fails
    """
    group_name = unique_name(settings.security_group_prefix)
    params = {
        'GroupName': group_name,
        'Description': settings.security_group_description,
        'VpcId': vpc_id,
    }
    if tags:
        params['TagSpecifications'] = tag_specifications('security-group', tags, name=group_name)
    
    try:
        response = ec2.create_security_group(**params)
    except (ClientError, BotoCoreError) as e:
        raise StepError('security_group', f"error creating security group: {e}") from e
    
    group_id = response['GroupId']
    logger.info(f"Created security group {group_name} with ID: {group_id}")
    
    try:
        ec2.authorize_security_group_ingress(
            GroupId=group_id,
            IpPermissions=ingress_permissions(settings)
        )
    except (ClientError, BotoCoreError) as e:
        raise StepError(
            'security_group',
            f"error adding inbound (ingress) rule for port {settings.ingress_port}: {e}"
        ) from e
    logger.info(f"Added inbound (ingress) rule for port {settings.ingress_port} to security group with ID: {group_id}")
    
    return group_id
