"""
Remote Config API Client Module.

REST transport for the Remote Config service: template fetch, validate,
publish, rollback and version listing.
"""

from remote_config.api_client.client import RemoteConfigApiClient

__all__ = ["RemoteConfigApiClient"]
