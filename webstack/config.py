"""
Run configuration: every tunable with its documented default, plus
environment-file loading.
"""

import os
from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any, Dict, Optional

from botocore.config import Config
from dotenv import load_dotenv

from .errors import ConfigurationError

ENV_FILE_PATH = ".env"
ENV_PREFIX = "WEBSTACK_"

DEFAULT_REGION = "us-east-1"
DEFAULT_AMI_ID = "ami-01816d07b1128cd2d"  # Amazon Linux 2023


@dataclass
class Settings:
    """Configuration for a single provisioning run."""
    region: str = DEFAULT_REGION
    vpc_cidr: str = "10.0.0.0/16"
    subnet_cidr: str = "10.0.1.0/24"
    # Defaults to the region string itself, see DESIGN.md
    availability_zone: Optional[str] = None
    ingress_protocol: str = "tcp"
    ingress_port: int = 8080
    ingress_cidr: str = "0.0.0.0/0"
    security_group_prefix: str = "webservice-sg-"
    security_group_description: str = "Security group for port 8080 access"
    launch_template_prefix: str = "webservice-launch-template-"
    image_id: str = DEFAULT_AMI_ID
    instance_type: str = "t2.micro"
    instance_count: int = 2
    user_data_path: str = "user_data.sh"
    run_timeout: float = 360.0
    wait_timeout: float = 300.0
    wait_delay: float = 15.0
    connect_timeout: float = 10.0
    read_timeout: float = 60.0
    max_attempts: int = 3
    extra_tags: Dict[str, str] = field(default_factory=dict)

    @property
    def subnet_availability_zone(self) -> str:
        return self.availability_zone or self.region

    @classmethod
    def from_env(cls, environ: Optional[Dict[str, str]] = None, **overrides: Any) -> "Settings":
        """
        Build settings from WEBSTACK_* environment variables.

        AWS_REGION / AWS_DEFAULT_REGION are honoured for the region when
        WEBSTACK_REGION is unset. Keyword overrides win over the environment.

        Args:
            environ: Mapping to read instead of os.environ
            **overrides: Explicit field values

        Returns:
            Validated Settings

        Raises:
            ConfigurationError: If a value cannot be converted or is invalid
        """
        env = os.environ if environ is None else environ
        values: Dict[str, Any] = {}

        region = env.get(f"{ENV_PREFIX}REGION") or env.get("AWS_REGION") or env.get("AWS_DEFAULT_REGION")
        if region:
            values["region"] = region

        for f in fields(cls):
            if f.name in ("region", "extra_tags"):
                continue
            raw = env.get(ENV_PREFIX + f.name.upper())
            if raw is None or raw == "":
                continue
            values[f.name] = _convert(f.name, raw, f.default)

        values.update({k: v for k, v in overrides.items() if v is not None})
        settings = cls(**values)
        settings.validate()
        return settings

    def with_overrides(self, **overrides: Any) -> "Settings":
        """Return a validated copy with the non-None overrides applied."""
        settings = replace(self, **{k: v for k, v in overrides.items() if v is not None})
        settings.validate()
        return settings

    def validate(self) -> None:
        """
        Reject settings that would make every run fail.

        Raises:
            ConfigurationError: On the first invalid field
        """
        if not self.region:
            raise ConfigurationError("region must not be empty")
        if self.instance_count < 1:
            raise ConfigurationError(f"instance_count must be at least 1, got {self.instance_count}")
        if not 0 <= self.ingress_port <= 65535:
            raise ConfigurationError(f"ingress_port out of range: {self.ingress_port}")
        for name in ("run_timeout", "wait_timeout", "wait_delay", "connect_timeout", "read_timeout"):
            if getattr(self, name) <= 0:
                raise ConfigurationError(f"{name} must be positive")
        if self.max_attempts < 1:
            raise ConfigurationError("max_attempts must be at least 1")

    def boto_config(self) -> Config:
        """botocore client configuration; retries stay botocore's concern."""
        return Config(
            region_name=self.region,
            connect_timeout=self.connect_timeout,
            read_timeout=self.read_timeout,
            retries={"max_attempts": self.max_attempts, "mode": "standard"},
        )


def _convert(name: str, raw: str, default: Any) -> Any:
    try:
        if isinstance(default, int):
            return int(raw)
        if isinstance(default, float):
            return float(raw)
    except ValueError as e:
        raise ConfigurationError(f"invalid value for {ENV_PREFIX}{name.upper()}: {raw!r}") from e
    return raw


def load_env_file(path: str = ENV_FILE_PATH) -> Path:
    """
    Load KEY=VALUE pairs from an environment file into os.environ.

    Existing environment variables are not overridden.

    Args:
        path: Path to the env file

    Returns:
        Path: Resolved path of the loaded file

    Raises:
        ConfigurationError: If the file does not exist
    """
    env_path = Path(path)
    if not env_path.is_file():
        raise ConfigurationError(f"Error loading {path} file: file not found")

    load_dotenv(env_path, override=False)
    return env_path.resolve()
