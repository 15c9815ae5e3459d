"""
Run ID and resource name generation utilities.
"""

import random
import string
import uuid
from datetime import datetime


def new_run_id() -> str:
    """
    Generate a new run ID in format: r-YYYYMMDD-hhmmss-XXXX
    
    Returns:
        str: Unique run ID
    """
    now = datetime.now()
    date_str = now.strftime("%Y%m%d")
    time_str = now.strftime("%H%M%S")
    
    # Generate 4 random alphanumeric characters
    random_suffix = ''.join(random.choices(string.ascii_lowercase + string.digits, k=4))
    
    return f"r-{date_str}-{time_str}-{random_suffix}"


def unique_name(prefix: str) -> str:
    """
    Build a resource name that will not collide with earlier runs.
    
    Args:
        prefix: Fixed name prefix, e.g. "webservice-sg-"
        
    Returns:
        str: prefix followed by a fresh UUID4
    """
    return f"{prefix}{uuid.uuid4()}"
