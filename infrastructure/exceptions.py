"""Exception types raised while building the static site CDN."""


class CdnError(Exception):
  """Base exception for all CDN construction errors."""


class InvalidCdnInputError(CdnError):
  """Raised when the CDN inputs contradict each other (e.g. HTTPS without a certificate)."""


class UpstreamReferenceError(CdnError):
  """Raised when a borrowed bucket or certificate handle lacks a required attribute."""


class ErrorDocumentMismatchError(CdnError):
  """Raised when the CDN error route does not match the bucket's error document."""


class ConfigError(CdnError):
  """Raised when the site configuration file is missing keys or malformed."""
