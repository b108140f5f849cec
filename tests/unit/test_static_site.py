"""Tests for the StaticSiteConstruct."""

import pytest
from aws_cdk import App, Environment, RemovalPolicy, Stack
from aws_cdk.assertions import Match, Template

from infrastructure.cdk_constructs import StaticSiteConstruct
from infrastructure.exceptions import ErrorDocumentMismatchError, InvalidCdnInputError

CERTIFICATE_ARN = "arn:aws:acm:us-east-1:123456789012:certificate/cert-123"


def new_stack() -> Stack:
  return Stack(App(), "TestStack", env=Environment(region="us-east-1"))


class TestStaticSiteConstruct:
  """Test the main StaticSiteConstruct with HTTPS and an SPA build."""

  @pytest.fixture
  def template(self) -> Template:
    """Create a template with HTTPS and SPA routing."""
    stack = new_stack()
    StaticSiteConstruct(
      stack,
      "TestSite",
      resource_names_prefix="site1",
      domain_names=["example.com", "www.example.com"],
      enable_https=True,
      has_build_command=True,
      certificate_arn=CERTIFICATE_ARN,
      bucket_name="bucket-abc",
      removal_policy=RemovalPolicy.DESTROY,
    )
    return Template.from_stack(stack)

  def test_creates_private_website_bucket(self, template: Template) -> None:
    """Verify S3 bucket is created with the website documents."""
    template.has_resource_properties(
      "AWS::S3::Bucket",
      {
        "BucketName": "bucket-abc",
        "WebsiteConfiguration": {
          "IndexDocument": "index.html",
          "ErrorDocument": "error.html",
        },
      },
    )

  def test_only_the_cdn_policy_is_attached(self, template: Template) -> None:
    """Verify the bucket carries a single policy, owned by the CDN."""
    template.resource_count_is("AWS::S3::BucketPolicy", 1)

  def test_creates_cloudfront_distribution(self, template: Template) -> None:
    """Verify CloudFront distribution uses the imported certificate."""
    template.has_resource_properties(
      "AWS::CloudFront::Distribution",
      {
        "DistributionConfig": {
          "Aliases": ["example.com", "www.example.com"],
          "DefaultRootObject": "index.html",
          "ViewerCertificate": {
            "AcmCertificateArn": CERTIFICATE_ARN,
            "SslSupportMethod": "sni-only",
          },
          "CustomErrorResponses": [
            {"ErrorCode": 403, "ResponseCode": 200, "ResponsePagePath": "/index.html"}
          ],
        },
      },
    )

  def test_certificate_is_imported_not_issued(self, template: Template) -> None:
    template.resource_count_is("AWS::CertificateManager::Certificate", 0)

  def test_outputs(self, template: Template) -> None:
    """Verify distribution and bucket outputs for downstream consumers."""
    template.has_output("*", {"Description": "S3 bucket name"})
    template.has_output("*", {"Description": "CloudFront distribution ID"})
    template.has_output(
      "*",
      {
        "Description": "CloudFront distribution domain name",
        "Value": {"Fn::GetAtt": [Match.any_value(), "DomainName"]},
      },
    )


class TestStaticSiteWithoutHttps:
  """Test StaticSiteConstruct on the default CloudFront domain."""

  @pytest.fixture
  def template(self) -> Template:
    """Create a template for a plain static site."""
    stack = new_stack()
    StaticSiteConstruct(
      stack,
      "TestSite",
      resource_names_prefix="site2",
      bucket_name="bucket-xyz",
    )
    return Template.from_stack(stack)

  def test_no_aliases_and_default_certificate(self, template: Template) -> None:
    template.has_resource_properties(
      "AWS::CloudFront::Distribution",
      {
        "DistributionConfig": {
          "Aliases": Match.absent(),
          "ViewerCertificate": {"CloudFrontDefaultCertificate": True},
          "CustomErrorResponses": [
            {"ErrorCode": 403, "ResponseCode": 403, "ResponsePagePath": "/error.html"}
          ],
        },
      },
    )


class TestStaticSiteValidation:
  """Test StaticSiteConstruct input checks."""

  def test_https_requires_certificate_arn(self) -> None:
    stack = new_stack()

    with pytest.raises(InvalidCdnInputError, match="certificate_arn"):
      StaticSiteConstruct(
        stack,
        "TestSite",
        resource_names_prefix="site1",
        domain_names=["example.com"],
        enable_https=True,
      )

    assert stack.node.try_find_child("TestSite") is None
    Template.from_stack(stack).resource_count_is("AWS::S3::Bucket", 0)

  def test_https_requires_domain_names(self) -> None:
    stack = new_stack()

    with pytest.raises(InvalidCdnInputError, match="domain name"):
      StaticSiteConstruct(
        stack,
        "TestSite",
        resource_names_prefix="site1",
        enable_https=True,
        certificate_arn=CERTIFICATE_ARN,
      )

    Template.from_stack(stack).resource_count_is("AWS::S3::Bucket", 0)

  def test_error_document_must_match_error_route(self) -> None:
    with pytest.raises(ErrorDocumentMismatchError, match="404.html"):
      StaticSiteConstruct(
        new_stack(),
        "TestSite",
        resource_names_prefix="site2",
        error_document="404.html",
      )

  def test_spa_site_ignores_error_document(self) -> None:
    """Verify SPA routing never serves the bucket error document."""
    stack = new_stack()
    StaticSiteConstruct(
      stack,
      "TestSite",
      resource_names_prefix="site2",
      has_build_command=True,
      error_document="404.html",
    )

    Template.from_stack(stack).resource_count_is("AWS::CloudFront::Distribution", 1)


class TestStaticSiteResourceCounts:
  """Test resource counts for the full construct."""

  def test_resource_count(self) -> None:
    """Verify expected number of key resources."""
    stack = new_stack()
    StaticSiteConstruct(
      stack,
      "TestSite",
      resource_names_prefix="count-test",
    )
    template = Template.from_stack(stack)

    template.resource_count_is("AWS::S3::Bucket", 1)
    template.resource_count_is("AWS::S3::BucketPolicy", 1)
    template.resource_count_is("AWS::CloudFront::CloudFrontOriginAccessIdentity", 1)
    template.resource_count_is("AWS::CloudFront::Distribution", 1)
    template.resource_count_is("Custom::PublicAccessBlock", 1)
