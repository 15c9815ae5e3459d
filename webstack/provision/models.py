"""
Data models for provisioned resources.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class LaunchedInstance:
    """An EC2 instance returned by run_instances."""
    instance_id: str
    public_ip: Optional[str] = None
    public_dns: Optional[str] = None
    state: str = "pending"

    @classmethod
    def from_aws(cls, instance: Dict[str, Any]) -> "LaunchedInstance":
        """Build from a run_instances / describe_instances instance dict."""
        return cls(
            instance_id=instance['InstanceId'],
            public_ip=instance.get('PublicIpAddress'),
            # Empty until the instance is assigned a public address
            public_dns=instance.get('PublicDnsName') or None,
            state=instance.get('State', {}).get('Name', 'pending'),
        )


@dataclass
class StackResult:
    """Identifiers produced by one complete run, in creation order."""
    run_id: str
    vpc_id: str
    subnet_id: str
    security_group_id: str
    launch_template_id: str
    instances: List[LaunchedInstance] = field(default_factory=list)

    @property
    def instance_ids(self) -> List[str]:
        return [instance.instance_id for instance in self.instances]

    def to_dict(self) -> Dict[str, Any]:
        return {
            'run_id': self.run_id,
            'vpc_id': self.vpc_id,
            'subnet_id': self.subnet_id,
            'security_group_id': self.security_group_id,
            'launch_template_id': self.launch_template_id,
            'instances': [
                {
                    'instance_id': i.instance_id,
                    'public_ip': i.public_ip,
                    'public_dns': i.public_dns,
                    'state': i.state,
                }
                for i in self.instances
            ],
        }
