"""
VPC and subnet provisioning.
"""

import logging
from typing import Dict, Optional

from botocore.exceptions import BotoCoreError, ClientError

from ..config import Settings
from ..errors import StepError
from ..tags import tag_specifications

logger = logging.getLogger(__name__)


def create_vpc(ec2, settings: Settings, tags: Optional[Dict[str, str]] = None) -> str:
    """
    Create the VPC and enable DNS hostnames on it.
    
    Args:
        ec2: Boto3 EC2 client
        settings: Run settings (uses vpc_cidr)
        tags: Optional tags applied at creation
        
    Returns:
        VPC ID
        
    Raises:
        StepError: If either call fails
    """
    params = {'CidrBlock': settings.vpc_cidr}
    if tags:
        params['TagSpecifications'] = tag_specifications('vpc', tags)
    
    try:
        response = ec2.create_vpc(**params)
    except (ClientError, BotoCoreError) as e:
        raise StepError('vpc', f"error creating VPC: {e}") from e
    
    vpc_id = response['Vpc']['VpcId']
    logger.info(f"VPC created with ID: {vpc_id}")
    
    try:
        ec2.modify_vpc_attribute(VpcId=vpc_id, EnableDnsHostnames={'Value': True})
    except (ClientError, BotoCoreError) as e:
        raise StepError('vpc', f"error enabling DNS hostnames: {e}") from e
    logger.info(f"DNS hostnames enabled for VPC with ID: {vpc_id}")
    
    return vpc_id


def create_subnet(ec2, settings: Settings, vpc_id: str, tags: Optional[Dict[str, str]] = None) -> str:
    """
    Create the subnet inside the VPC.
    
    Args:
        ec2: Boto3 EC2 client
        settings: Run settings (uses subnet_cidr and the availability zone)
        vpc_id: Parent VPC ID
        tags: Optional tags applied at creation
        
    Returns:
        Subnet ID
        
    Raises:
        StepError: If the call fails
    """
    params = {
        'VpcId': vpc_id,
        'CidrBlock': settings.subnet_cidr,
        'AvailabilityZone': settings.subnet_availability_zone,
    }
    if tags:
        params['TagSpecifications'] = tag_specifications('subnet', tags)
    
    try:
        response = ec2.create_subnet(**params)
    except (ClientError, BotoCoreError) as e:
        raise StepError('subnet', f"error creating subnet: {e}") from e
    
    subnet_id = response['Subnet']['SubnetId']
    logger.info(f"Subnet created with ID: {subnet_id}")
    return subnet_id
