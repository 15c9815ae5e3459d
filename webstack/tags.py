"""
Tagging utilities for consistent resource tagging across runs.
"""

from datetime import datetime
from typing import Dict, List, Optional


def base_tags(run_id: str, extra: Optional[Dict[str, str]] = None) -> Dict[str, str]:
    """
    Generate base tags for a provisioning run.
    
    Args:
        run_id: Run ID
        extra: Additional tags to include
        
    Returns:
        Dictionary of tags to apply to resources
    """
    tags = {
        "project": "webstack",
        "run_id": run_id,
        "created_at": datetime.utcnow().isoformat() + "Z"
    }
    
    if extra:
        tags.update(extra)
    
    return tags


def tag_specifications(resource_type: str, tags: Dict[str, str], name: Optional[str] = None) -> List[Dict]:
    """
    Convert a tag dictionary into the EC2 TagSpecifications shape.
    
    Args:
        resource_type: EC2 resource type ("vpc", "subnet", "security-group", ...)
        tags: Tags to apply
        name: Optional value for the Name tag
        
    Returns:
        A single-element TagSpecifications list
    """
    merged = dict(tags)
    if name:
        merged["Name"] = name
    
    return [{
        "ResourceType": resource_type,
        "Tags": [{"Key": key, "Value": value} for key, value in merged.items()]
    }]

