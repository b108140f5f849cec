"""CDK constructs for static website CDN infrastructure."""

from .cdn import CdnConstruct
from .cdn_settings import CdnProps
from .static_site import StaticSiteConstruct
from .storage import StorageBucket

__all__ = [
  "CdnConstruct",
  "CdnProps",
  "StaticSiteConstruct",
  "StorageBucket",
]
