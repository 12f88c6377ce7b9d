"""
Remote Config Models.

Validating wrappers around the records exchanged with the service:
- Template: parameters, parameter groups, conditions and the etag.
- Version: publication metadata of a template.
- ListVersionsOptions / ListVersionsResult: version history paging.
"""

from remote_config.models.list_versions import ListVersionsOptions, ListVersionsResult
from remote_config.models.template import Template
from remote_config.models.version import Version

__all__ = ["ListVersionsOptions", "ListVersionsResult", "Template", "Version"]
