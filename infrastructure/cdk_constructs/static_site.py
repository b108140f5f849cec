"""Composite construct wiring the website bucket to its CDN."""

from collections.abc import Sequence

from aws_cdk import CfnOutput, RemovalPolicy
from aws_cdk import aws_certificatemanager as acm
from constructs import Construct

from infrastructure.exceptions import ErrorDocumentMismatchError, InvalidCdnInputError

from .cdn import CdnConstruct
from .storage import ERROR_DOCUMENT, StorageBucket


class StaticSiteConstruct(Construct):
  """Static website infrastructure.

  Creates:
  - S3 bucket for static content (private, website documents configured)
  - CloudFront CDN with origin access identity and bucket lockdown
  - (Optional) import of an already issued ACM certificate for HTTPS
  """

  def __init__(
    self,
    scope: Construct,
    id: str,
    *,
    resource_names_prefix: str,
    domain_names: Sequence[str] = (),
    enable_https: bool = False,
    has_build_command: bool = False,
    certificate_arn: str | None = None,
    bucket_name: str | None = None,
    error_document: str = ERROR_DOCUMENT,
    removal_policy: RemovalPolicy = RemovalPolicy.RETAIN,
  ) -> None:
    # Certificate issuance lives outside this app, so HTTPS needs an existing ARN.
    if enable_https and not certificate_arn:
      raise InvalidCdnInputError(
        f"{resource_names_prefix}: enable_https requires certificate_arn"
      )
    if enable_https and not domain_names:
      raise InvalidCdnInputError(
        f"{resource_names_prefix}: enable_https requires at least one domain name"
      )

    super().__init__(scope, id)

    self.storage = StorageBucket(
      self,
      f"{resource_names_prefix}-bucket",
      bucket_name=bucket_name,
      error_document=error_document,
      removal_policy=removal_policy,
    )

    self.certificate: acm.ICertificate | None = None
    if enable_https and certificate_arn:
      self.certificate = acm.Certificate.from_certificate_arn(
        self,
        f"{resource_names_prefix}-certificate",
        certificate_arn,
      )

    self.cdn = CdnConstruct(
      self,
      f"{resource_names_prefix}-cdn",
      bucket=self.storage.bucket,
      resource_names_prefix=resource_names_prefix,
      domain_names=domain_names,
      enable_https=enable_https,
      has_build_command=has_build_command,
      certificate=self.certificate,
    )

    self._check_error_document()

    # Outputs
    CfnOutput(
      self,
      "BucketName",
      value=self.storage.bucket.bucket_name,
      description="S3 bucket name",
    )
    CfnOutput(
      self,
      "DistributionId",
      value=self.cdn.distribution_id,
      description="CloudFront distribution ID",
    )
    CfnOutput(
      self,
      "DistributionDomainName",
      value=self.cdn.distribution_domain_name,
      description="CloudFront distribution domain name",
    )

  def _check_error_document(self) -> None:
    # SPA routing always lands on index.html; only plain sites serve the error page.
    if self.cdn.props.has_build_command:
      return
    routed = self.cdn.error_routing.response_page_path.lstrip("/")
    if routed != self.storage.error_document:
      raise ErrorDocumentMismatchError(
        f"CDN routes missing objects to /{routed} but the bucket error document "
        f"is {self.storage.error_document}"
      )
