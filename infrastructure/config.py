"""Configuration loader for multi-site CDN management."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml
from aws_cdk import RemovalPolicy

from infrastructure.cdk_constructs.storage import ERROR_DOCUMENT
from infrastructure.exceptions import ConfigError
from infrastructure.logging_config import get_logger

logger = get_logger(__name__)

REMOVAL_POLICIES = {
  "retain": RemovalPolicy.RETAIN,
  "destroy": RemovalPolicy.DESTROY,
  "snapshot": RemovalPolicy.SNAPSHOT,
}


@dataclass
class SiteConfig:
  """Configuration for a single static site."""

  resource_names_prefix: str
  owner: str = ""
  email: str = ""
  domain_names: list[str] = field(default_factory=list)
  enable_https: bool = False
  has_build_command: bool = False
  certificate_arn: str | None = None
  bucket_name: str | None = None
  error_document: str = ERROR_DOCUMENT
  removal_policy: RemovalPolicy = RemovalPolicy.RETAIN
  region: str = "us-east-1"

  @property
  def stack_name(self) -> str:
    return f"StaticSite-{self.resource_names_prefix}"


@dataclass
class Config:
  """Multi-site configuration."""

  sites: list[SiteConfig] = field(default_factory=list)

  @classmethod
  def from_yaml(cls, path: Path | str = "sites.yaml") -> "Config":
    """Load configuration from YAML file."""
    try:
      with open(path) as f:
        data = yaml.safe_load(f) or {}
    except OSError as e:
      raise ConfigError(f"Cannot read config file {path}: {e}") from e
    except yaml.YAMLError as e:
      raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if not isinstance(data, dict):
      raise ConfigError(f"{path}: top level must be a mapping")

    config = cls.from_dict(data)
    logger.info("config_loaded", path=str(path), sites=len(config.sites))
    return config

  @classmethod
  def from_dict(cls, data: dict[str, Any]) -> "Config":
    defaults = data.get("defaults") or {}
    if not isinstance(defaults, dict):
      raise ConfigError("defaults must be a mapping")

    site_entries = data.get("sites") or []
    if not isinstance(site_entries, list):
      raise ConfigError("sites must be a list")

    sites: list[SiteConfig] = []
    for index, site_data in enumerate(site_entries):
      if not isinstance(site_data, dict):
        raise ConfigError(f"sites[{index}]: entry must be a mapping")
      # Merge defaults with site-specific config
      merged = {**defaults, **site_data}
      sites.append(_parse_site(merged, index))

    prefixes = [site.resource_names_prefix for site in sites]
    duplicates = sorted({p for p in prefixes if prefixes.count(p) > 1})
    if duplicates:
      raise ConfigError(f"Duplicate resource_names_prefix: {', '.join(duplicates)}")

    return cls(sites=sites)


def _parse_site(merged: dict[str, Any], index: int) -> SiteConfig:
  prefix = merged.get("resource_names_prefix")
  if not prefix:
    raise ConfigError(f"sites[{index}]: resource_names_prefix is required")

  domain_names = merged.get("domain_names") or []
  if isinstance(domain_names, str):
    domain_names = [domain_names]
  if not isinstance(domain_names, list):
    raise ConfigError(f"sites[{index}]: domain_names must be a list")

  removal_policy_str = str(merged.get("removal_policy", "retain")).lower()
  if removal_policy_str not in REMOVAL_POLICIES:
    raise ConfigError(f"sites[{index}]: unknown removal_policy {removal_policy_str!r}")

  return SiteConfig(
    resource_names_prefix=str(prefix),
    owner=merged.get("owner", ""),
    email=merged.get("email", ""),
    domain_names=list(domain_names),
    enable_https=_parse_flag(merged, "enable_https", index),
    has_build_command=_parse_flag(merged, "has_build_command", index),
    certificate_arn=merged.get("certificate_arn"),
    bucket_name=merged.get("bucket_name"),
    error_document=merged.get("error_document", ERROR_DOCUMENT),
    removal_policy=REMOVAL_POLICIES[removal_policy_str],
    region=merged.get("region", "us-east-1"),
  )


def _parse_flag(merged: dict[str, Any], key: str, index: int) -> bool:
  # Quoted "false" would be truthy, so only YAML booleans are accepted.
  value = merged.get(key, False)
  if not isinstance(value, bool):
    raise ConfigError(f"sites[{index}]: {key} must be true or false, got {value!r}")
  return value
