"""
Webstack - provisions a minimal VPC, subnet, security group, launch template
and EC2 instances, then waits for the instances to be running.
"""

__version__ = "0.1.0"
