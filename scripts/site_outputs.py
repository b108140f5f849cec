#!/usr/bin/env python3
"""Print the CDN outputs of a deployed site stack for DNS or reporting tools."""

import argparse
import json
import sys
from typing import Any

import boto3  # type: ignore[import-not-found]

OUTPUT_KEYS = {
  "BucketName": "S3_BUCKET",
  "DistributionId": "DISTRIBUTION_ID",
  "DistributionDomainName": "DISTRIBUTION_DOMAIN_NAME",
}


def get_site_outputs(stack_name: str, region: str = "us-east-1") -> dict[str, str]:
  """Read the CloudFormation outputs of a site stack.

  CDK suffixes output keys with a hash of the construct path, so outputs are
  matched by prefix.

  Args:
    stack_name: The CloudFormation stack name (e.g., 'StaticSite-site1')
    region: AWS region

  Returns:
    Dictionary with S3_BUCKET, DISTRIBUTION_ID and DISTRIBUTION_DOMAIN_NAME
  """
  cloudformation = boto3.client("cloudformation", region_name=region)
  response = cloudformation.describe_stacks(StackName=stack_name)
  outputs: list[dict[str, Any]] = response["Stacks"][0].get("Outputs", [])

  result: dict[str, str] = {}
  for output in outputs:
    for prefix, name in OUTPUT_KEYS.items():
      if _matches(output["OutputKey"], prefix):
        result[name] = output["OutputValue"]

  missing = sorted(set(OUTPUT_KEYS.values()) - set(result))
  if missing:
    raise KeyError(f"Stack {stack_name} has no output for {', '.join(missing)}")
  return result


def _matches(output_key: str, prefix: str) -> bool:
  # "SiteDistributionIdABC123" must not match "DistributionDomainName".
  stripped = output_key.removeprefix("Site")
  return stripped == prefix or (
    stripped.startswith(prefix) and not stripped[len(prefix) :][:1].islower()
  )


def format_outputs(outputs: dict[str, str], output_format: str = "env") -> str:
  """Render outputs as env lines, shell exports or JSON."""
  if output_format == "json":
    return json.dumps(outputs, indent=2)
  if output_format == "export":
    return "\n".join(f"export {key}={value}" for key, value in outputs.items())
  return "\n".join(f"{key}={value}" for key, value in outputs.items())


def main() -> None:
  """Main entry point."""
  parser = argparse.ArgumentParser(
    description="Print CDN outputs of a deployed static site stack"
  )
  parser.add_argument(
    "stack_name",
    help="CloudFormation stack name (e.g., StaticSite-site1)",
  )
  parser.add_argument(
    "--region",
    default="us-east-1",
    help="AWS region (default: us-east-1)",
  )
  parser.add_argument(
    "--format",
    choices=["env", "json", "export"],
    default="env",
    help="Output format (default: env)",
  )

  args = parser.parse_args()

  try:
    outputs = get_site_outputs(args.stack_name, args.region)
  except Exception as e:
    print(f"Error retrieving stack outputs: {e}", file=sys.stderr)
    sys.exit(1)

  print(format_outputs(outputs, args.format))


if __name__ == "__main__":
  main()
