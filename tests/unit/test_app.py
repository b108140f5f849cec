"""Tests for the CDK app entry point."""

from unittest.mock import MagicMock, patch

import aws_cdk as cdk
from aws_cdk.assertions import Template

from infrastructure.app import add_site_stacks, get_account_id
from infrastructure.config import Config


class TestAddSiteStacks:
  """Test stack creation from configuration."""

  def test_one_stack_per_site(self) -> None:
    config = Config.from_dict(
      {
        "defaults": {"owner": "Web Team"},
        "sites": [
          {
            "resource_names_prefix": "site1",
            "domain_names": ["example.com"],
            "enable_https": True,
            "has_build_command": True,
            "certificate_arn": "arn:aws:acm:us-east-1:123456789012:certificate/cert-123",
          },
          {"resource_names_prefix": "site2", "region": "eu-west-1"},
        ],
      }
    )
    app = cdk.App()

    stacks = add_site_stacks(app, config, account_id="123456789012")

    assert [stack.stack_name for stack in stacks] == ["StaticSite-site1", "StaticSite-site2"]
    assert stacks[1].region == "eu-west-1"
    for stack in stacks:
      Template.from_stack(stack).resource_count_is("AWS::CloudFront::Distribution", 1)

  def test_stacks_are_tagged(self) -> None:
    config = Config.from_dict(
      {"sites": [{"resource_names_prefix": "site1", "owner": "Web Team"}]}
    )

    (stack,) = add_site_stacks(cdk.App(), config)

    template = Template.from_stack(stack)
    (bucket,) = template.find_resources("AWS::S3::Bucket").values()
    tags = {tag["Key"]: tag["Value"] for tag in bucket["Properties"]["Tags"]}
    assert tags["Owner"] == "Web Team"
    assert tags["Project"] == "static-sites"
    assert tags["ResourcePrefix"] == "site1"
    assert "OwnerEmail" not in tags


class TestGetAccountId:
  """Test account resolution via STS."""

  def test_reads_caller_identity(self) -> None:
    with patch("boto3.client") as mock_client:
      mock_sts = MagicMock()
      mock_sts.get_caller_identity.return_value = {"Account": "123456789012"}
      mock_client.return_value = mock_sts

      assert get_account_id() == "123456789012"
      mock_client.assert_called_once_with("sts")
