"""Pytest fixtures for CDK construct tests."""

import aws_cdk as cdk
import pytest
from aws_cdk import aws_certificatemanager as acm
from aws_cdk import aws_s3 as s3

CERTIFICATE_ARN = "arn:aws:acm:us-east-1:123456789012:certificate/cert-123"


@pytest.fixture
def app() -> cdk.App:
  """Create a CDK App for testing."""
  return cdk.App()


@pytest.fixture
def stack(app: cdk.App) -> cdk.Stack:
  """Create a CDK Stack for testing."""
  return cdk.Stack(app, "TestStack", env=cdk.Environment(region="us-east-1"))


@pytest.fixture
def bucket(stack: cdk.Stack) -> s3.Bucket:
  """Create the website bucket the CDN borrows."""
  return s3.Bucket(stack, "WebsiteBucket", bucket_name="bucket-abc")


@pytest.fixture
def certificate(stack: cdk.Stack) -> acm.ICertificate:
  """Import an already issued certificate."""
  return acm.Certificate.from_certificate_arn(stack, "Certificate", CERTIFICATE_ARN)
