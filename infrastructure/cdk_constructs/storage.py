"""S3 bucket holding the static website content."""

from aws_cdk import RemovalPolicy
from aws_cdk import aws_s3 as s3
from constructs import Construct

INDEX_DOCUMENT = "index.html"
ERROR_DOCUMENT = "error.html"


class StorageBucket(Construct):
  """Private S3 bucket served through CloudFront.

  The bucket carries no policy of its own: CdnConstruct attaches the only
  bucket policy, and a second AWS::S3::BucketPolicy would replace it.
  """

  def __init__(
    self,
    scope: Construct,
    id: str,
    *,
    bucket_name: str | None = None,
    error_document: str = ERROR_DOCUMENT,
    removal_policy: RemovalPolicy = RemovalPolicy.RETAIN,
  ) -> None:
    super().__init__(scope, id)

    self.index_document = INDEX_DOCUMENT
    self.error_document = error_document

    self.bucket = s3.Bucket(
      self,
      "Bucket",
      bucket_name=bucket_name,
      website_index_document=self.index_document,
      website_error_document=self.error_document,
      encryption=s3.BucketEncryption.S3_MANAGED,
      removal_policy=removal_policy,
    )
