"""CloudFront CDN in front of a private S3 website bucket."""

from collections.abc import Sequence

from aws_cdk import Stack
from aws_cdk import aws_certificatemanager as acm
from aws_cdk import aws_cloudfront as cloudfront
from aws_cdk import aws_iam as iam
from aws_cdk import aws_s3 as s3
from aws_cdk import custom_resources as cr
from constructs import Construct

from infrastructure.logging_config import get_logger

from .cdn_settings import (
  ALLOWED_METHODS,
  CACHED_METHODS,
  DEFAULT_ROOT_OBJECT,
  FIXED_LOCKDOWN,
  CdnProps,
  build_bucket_trust_policy,
  select_error_routing,
  select_viewer_certificate,
)

logger = get_logger(__name__)


class CdnConstruct(Construct):
  """CloudFront distribution reading a bucket through an origin access identity.

  Creates:
  - CloudFront origin access identity
  - Bucket policy granting read access to that identity only
  - Public access block on the bucket (fixed posture)
  - CloudFront distribution with SPA or plain error routing, and either the
    default certificate or an ACM certificate with custom domain aliases

  The bucket and certificate are borrowed; the bucket only gets the policy
  and the public access block attached.
  """

  def __init__(
    self,
    scope: Construct,
    id: str,
    *,
    bucket: s3.IBucket,
    resource_names_prefix: str,
    domain_names: Sequence[str] = (),
    enable_https: bool = False,
    has_build_command: bool = False,
    certificate: acm.ICertificate | None = None,
  ) -> None:
    # Validate before registering in the tree so a bad input leaves no children.
    props = CdnProps(
      bucket=bucket,
      resource_names_prefix=resource_names_prefix,
      domain_names=tuple(domain_names),
      enable_https=enable_https,
      has_build_command=has_build_command,
      certificate=certificate,
    )
    super().__init__(scope, id)

    self.props = props
    self.origin_id = props.resource_names_prefix

    self._create_access_identity()
    self._attach_bucket_policy()
    self._lock_down_public_access()
    self._create_distribution()

    logger.info(
      "cdn_configured",
      prefix=props.resource_names_prefix,
      enable_https=props.enable_https,
      spa_mode=props.has_build_command,
      aliases=props.aliases,
    )

  @property
  def distribution_id(self) -> str:
    return self.distribution.ref

  @property
  def distribution_domain_name(self) -> str:
    return self.distribution.attr_domain_name

  def _create_access_identity(self) -> None:
    self.access_identity = cloudfront.CfnCloudFrontOriginAccessIdentity(
      self,
      "OriginAccessIdentity",
      cloud_front_origin_access_identity_config=(
        cloudfront.CfnCloudFrontOriginAccessIdentity.CloudFrontOriginAccessIdentityConfigProperty(
          comment=self.props.resource_names_prefix,
        )
      ),
    )

    identity_id = self.access_identity.attr_id
    self.access_identity_path = f"origin-access-identity/cloudfront/{identity_id}"
    self.access_identity_arn = Stack.of(self).format_arn(
      service="iam",
      region="",
      account="cloudfront",
      resource="user",
      resource_name=f"CloudFront Origin Access Identity {identity_id}",
    )

  def _attach_bucket_policy(self) -> None:
    bucket = self.props.bucket
    self.trust_policy = build_bucket_trust_policy(bucket.bucket_arn, self.access_identity_arn)

    # Stable logical id: a redeploy with the same input updates nothing.
    self.bucket_policy = s3.CfnBucketPolicy(
      self,
      "BucketPolicy",
      bucket=bucket.bucket_name,
      policy_document=self.trust_policy,
    )

  def _lock_down_public_access(self) -> None:
    bucket = self.props.bucket
    self.lockdown = FIXED_LOCKDOWN

    put_public_access_block = cr.AwsSdkCall(
      service="S3",
      action="putPublicAccessBlock",
      parameters={
        "Bucket": bucket.bucket_name,
        "PublicAccessBlockConfiguration": self.lockdown.to_parameters(),
      },
      physical_resource_id=cr.PhysicalResourceId.of(
        f"{self.props.resource_names_prefix}-public-access-block"
      ),
    )

    self.public_access_block = cr.AwsCustomResource(
      self,
      "PublicAccessBlock",
      resource_type="Custom::PublicAccessBlock",
      on_update=put_public_access_block,
      policy=cr.AwsCustomResourcePolicy.from_statements(
        [
          iam.PolicyStatement(
            actions=["s3:PutBucketPublicAccessBlock"],
            resources=[bucket.bucket_arn],
          )
        ]
      ),
      install_latest_aws_sdk=False,
    )
    self.public_access_block.node.add_dependency(self.bucket_policy)

  def _create_distribution(self) -> None:
    props = self.props
    self.viewer_certificate = select_viewer_certificate(props)
    self.error_routing = select_error_routing(props.has_build_command)

    self.distribution = cloudfront.CfnDistribution(
      self,
      "Distribution",
      distribution_config=cloudfront.CfnDistribution.DistributionConfigProperty(
        enabled=True,
        default_root_object=DEFAULT_ROOT_OBJECT,
        aliases=props.aliases,
        origins=[
          cloudfront.CfnDistribution.OriginProperty(
            id=self.origin_id,
            domain_name=props.bucket.bucket_regional_domain_name,
            s3_origin_config=cloudfront.CfnDistribution.S3OriginConfigProperty(
              origin_access_identity=self.access_identity_path,
            ),
          )
        ],
        custom_error_responses=[self.error_routing.to_property()],
        default_cache_behavior=cloudfront.CfnDistribution.DefaultCacheBehaviorProperty(
          target_origin_id=self.origin_id,
          allowed_methods=list(ALLOWED_METHODS),
          cached_methods=list(CACHED_METHODS),
          # Redirect even on the default certificate: *.cloudfront.net serves HTTPS.
          viewer_protocol_policy="redirect-to-https",
          forwarded_values=cloudfront.CfnDistribution.ForwardedValuesProperty(
            query_string=False,
            cookies=cloudfront.CfnDistribution.CookiesProperty(forward="none"),
          ),
        ),
        restrictions=cloudfront.CfnDistribution.RestrictionsProperty(
          geo_restriction=cloudfront.CfnDistribution.GeoRestrictionProperty(
            restriction_type="none",
          ),
        ),
        viewer_certificate=self.viewer_certificate.to_property(),
      ),
    )

    # The origin is validated at creation, so the bucket has to exist first.
    self.distribution.node.add_dependency(props.bucket)
