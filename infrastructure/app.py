#!/usr/bin/env python3
"""CDK application entry point for static website CDN infrastructure."""

import sys
from pathlib import Path

# Add the project root to the Python path
sys.path.insert(0, str(Path(__file__).parent.parent))

import aws_cdk as cdk
import boto3

from infrastructure.config import Config
from infrastructure.logging_config import configure_logging, get_logger
from infrastructure.stacks.site_stack import StaticSiteStack

logger = get_logger(__name__)


def get_account_id() -> str:
  """Get AWS account ID from current credentials."""
  sts = boto3.client("sts")
  return str(sts.get_caller_identity()["Account"])


def add_site_stacks(
  app: cdk.App,
  config: Config,
  account_id: str | None = None,
) -> list[StaticSiteStack]:
  """Add one stack per configured site to the app."""
  stacks: list[StaticSiteStack] = []
  for site in config.sites:
    stack = StaticSiteStack(
      app,
      site.stack_name,
      site_config=site,
      env=cdk.Environment(
        account=account_id,
        region=site.region,
      ),
      description=f"Static website CDN for {site.resource_names_prefix}",
    )
    stacks.append(stack)
    logger.info("site_stack_added", stack=site.stack_name, region=site.region)

  return stacks


def main() -> None:
  """Load configuration and synthesize every site stack."""
  configure_logging()

  app = cdk.App()
  config_path = app.node.try_get_context("config") or "sites.yaml"
  config = Config.from_yaml(Path(config_path))

  add_site_stacks(app, config, account_id=get_account_id())
  app.synth()


if __name__ == "__main__":
  main()
