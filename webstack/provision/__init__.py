"""
Provisioning steps for the network and compute stack.
"""

from .compute import create_launch_template, encode_user_data, launch_instances, wait_for_instances
from .models import LaunchedInstance, StackResult
from .network import create_subnet, create_vpc
from .security import create_security_group, ingress_permissions

__all__ = [
    "create_vpc",
    "create_subnet",
    "create_security_group",
    "ingress_permissions",
    "create_launch_template",
    "encode_user_data",
    "launch_instances",
    "wait_for_instances",
    "LaunchedInstance",
    "StackResult",
]
