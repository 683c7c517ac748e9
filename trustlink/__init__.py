"""TrustLink: profile, feed and connection services."""

__version__ = "0.1.0"
