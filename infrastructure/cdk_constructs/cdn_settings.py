"""Inputs and derived settings for the CDN construct.

Everything here is plain data: validated inputs, the bucket trust policy, the
fixed public access posture, and the two-variant viewer certificate and error
routing choices. Nothing in this module creates CloudFormation resources.
"""

from dataclasses import dataclass, field
from typing import Any

from aws_cdk import aws_certificatemanager as acm
from aws_cdk import aws_cloudfront as cloudfront
from aws_cdk import aws_iam as iam
from aws_cdk import aws_s3 as s3

from infrastructure.exceptions import InvalidCdnInputError, UpstreamReferenceError
from infrastructure.logging_config import get_logger

logger = get_logger(__name__)

BUCKET_READ_ACTIONS = (
  "s3:GetObject",
  "s3:GetObjectVersion",
  "s3:ListBucket",
  "s3:GetBucketAcl",
  "s3:GetBucketLocation",
)

ALLOWED_METHODS = ("DELETE", "GET", "HEAD", "OPTIONS", "PATCH", "POST", "PUT")
CACHED_METHODS = ("GET", "HEAD")
DEFAULT_ROOT_OBJECT = "index.html"

# S3 answers 403, not 404, for a missing key when the caller can't list the bucket.
ORIGIN_MISSING_OBJECT_STATUS = 403


@dataclass(frozen=True)
class CdnProps:
  """Validated inputs of the CDN construct.

  The bucket and certificate are borrowed handles; only their ARN, name and
  domain attributes are read.
  """

  bucket: s3.IBucket
  resource_names_prefix: str
  domain_names: tuple[str, ...] = field(default_factory=tuple)
  enable_https: bool = False
  has_build_command: bool = False
  certificate: acm.ICertificate | None = None

  def __post_init__(self) -> None:
    object.__setattr__(self, "domain_names", tuple(self.domain_names))

    if not self.resource_names_prefix or not self.resource_names_prefix.strip():
      raise InvalidCdnInputError("resource_names_prefix must be a non-empty string")

    if self.enable_https:
      if self.certificate is None:
        raise InvalidCdnInputError(
          f"{self.resource_names_prefix}: enable_https requires a certificate"
        )
      if not self.domain_names:
        raise InvalidCdnInputError(
          f"{self.resource_names_prefix}: enable_https requires at least one domain name"
        )
      if any(not name or not name.strip() for name in self.domain_names):
        raise InvalidCdnInputError(
          f"{self.resource_names_prefix}: domain names must not be blank"
        )
      if not getattr(self.certificate, "certificate_arn", None):
        raise UpstreamReferenceError(
          f"{self.resource_names_prefix}: certificate has no resolvable ARN"
        )
    elif self.domain_names:
      logger.warning(
        "domain_names_ignored_without_https",
        prefix=self.resource_names_prefix,
        domain_names=list(self.domain_names),
      )

    for attribute in ("bucket_arn", "bucket_name", "bucket_regional_domain_name"):
      if not getattr(self.bucket, attribute, None):
        raise UpstreamReferenceError(
          f"{self.resource_names_prefix}: bucket has no resolvable {attribute}"
        )

  @property
  def aliases(self) -> list[str] | None:
    """Distribution aliases; only claimed when a matching certificate is bound."""
    return list(self.domain_names) if self.enable_https else None


def build_bucket_trust_policy(bucket_arn: str, identity_arn: str) -> iam.PolicyDocument:
  """Grant read access on the bucket and its objects to exactly one identity."""
  if not bucket_arn:
    raise UpstreamReferenceError("cannot build a bucket policy without a bucket ARN")
  if not identity_arn:
    raise UpstreamReferenceError("cannot build a bucket policy without an identity ARN")

  return iam.PolicyDocument(
    statements=[
      iam.PolicyStatement(
        effect=iam.Effect.ALLOW,
        actions=list(BUCKET_READ_ACTIONS),
        resources=[bucket_arn, f"{bucket_arn}/*"],
        principals=[iam.ArnPrincipal(identity_arn)],
      )
    ]
  )


@dataclass(frozen=True)
class PublicAccessLockdown:
  """S3 public access block flags applied to the website bucket."""

  block_public_acls: bool
  block_public_policy: bool
  ignore_public_acls: bool
  restrict_public_buckets: bool

  def to_parameters(self) -> dict[str, bool]:
    """Render as the PublicAccessBlockConfiguration of PutPublicAccessBlock."""
    return {
      "BlockPublicAcls": self.block_public_acls,
      "BlockPublicPolicy": self.block_public_policy,
      "IgnorePublicAcls": self.ignore_public_acls,
      "RestrictPublicBuckets": self.restrict_public_buckets,
    }


# restrict_public_buckets stays False so a public website hosting exception
# managed outside this construct keeps working.
FIXED_LOCKDOWN = PublicAccessLockdown(
  block_public_acls=True,
  block_public_policy=True,
  ignore_public_acls=True,
  restrict_public_buckets=False,
)


@dataclass(frozen=True)
class DefaultViewerCertificate:
  """The *.cloudfront.net certificate; no custom domains."""

  def to_property(self) -> cloudfront.CfnDistribution.ViewerCertificateProperty:
    return cloudfront.CfnDistribution.ViewerCertificateProperty(
      cloud_front_default_certificate=True,
    )


@dataclass(frozen=True)
class AcmViewerCertificate:
  """An issued ACM certificate served with SNI."""

  certificate_arn: str
  ssl_support_method: str = "sni-only"

  def to_property(self) -> cloudfront.CfnDistribution.ViewerCertificateProperty:
    return cloudfront.CfnDistribution.ViewerCertificateProperty(
      acm_certificate_arn=self.certificate_arn,
      ssl_support_method=self.ssl_support_method,
    )


ViewerCertificate = DefaultViewerCertificate | AcmViewerCertificate


def select_viewer_certificate(props: CdnProps) -> ViewerCertificate:
  if props.enable_https and props.certificate is not None:
    return AcmViewerCertificate(certificate_arn=props.certificate.certificate_arn)
  return DefaultViewerCertificate()


@dataclass(frozen=True)
class ErrorRoutingRule:
  """Custom error response for objects missing from the bucket."""

  error_code: int
  response_code: int
  response_page_path: str

  def to_property(self) -> cloudfront.CfnDistribution.CustomErrorResponseProperty:
    return cloudfront.CfnDistribution.CustomErrorResponseProperty(
      error_code=self.error_code,
      response_code=self.response_code,
      response_page_path=self.response_page_path,
    )

  def as_dict(self) -> dict[str, Any]:
    return {
      "ErrorCode": self.error_code,
      "ResponseCode": self.response_code,
      "ResponsePagePath": self.response_page_path,
    }


# Client-side router takes over every unknown path.
SPA_ROUTING = ErrorRoutingRule(
  error_code=ORIGIN_MISSING_OBJECT_STATUS,
  response_code=200,
  response_page_path="/index.html",
)

# Must match the bucket's website error document.
STATIC_ERROR_ROUTING = ErrorRoutingRule(
  error_code=ORIGIN_MISSING_OBJECT_STATUS,
  response_code=ORIGIN_MISSING_OBJECT_STATUS,
  response_page_path="/error.html",
)


def select_error_routing(has_build_command: bool) -> ErrorRoutingRule:
  return SPA_ROUTING if has_build_command else STATIC_ERROR_ROUTING
