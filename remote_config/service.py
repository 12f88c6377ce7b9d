"""
Remote Config Service.

Public entry point for managing a project's Remote Config template. Each
operation makes one call on the transport and wraps the raw record it
returns in a validated Template, Version or ListVersionsResult. Nothing is
cached between calls, and transport errors are not caught here.
"""

from __future__ import annotations

import json
from typing import Any, Mapping, Optional, Protocol, Union

from loguru import logger

from remote_config.api_client.client import RemoteConfigApiClient, VersionNumber
from remote_config.config.settings import ClientSettings
from remote_config.errors import invalid_argument
from remote_config.models.list_versions import ListVersionsOptions, ListVersionsResult
from remote_config.models.template import Template
from remote_config.utils import validator

TemplateInput = Union[Template, Mapping[str, Any]]
OptionsInput = Union[ListVersionsOptions, Mapping[str, Any]]


class RemoteConfigTransport(Protocol):
    """Operations the service expects from a transport client."""

    def get_template(self) -> Mapping[str, Any]: ...

    def get_template_at_version(self, version_number: VersionNumber) -> Mapping[str, Any]: ...

    def validate_template(self, template: TemplateInput) -> Mapping[str, Any]: ...

    def publish_template(self, template: TemplateInput, force: bool = False) -> Mapping[str, Any]: ...

    def rollback(self, version_number: VersionNumber) -> Mapping[str, Any]: ...

    def list_versions(self, options: Optional[OptionsInput] = None) -> Mapping[str, Any]: ...


class RemoteConfig:
    """
    Remote Config service for one project.

    Usage::

        remote_config = RemoteConfig(settings=ClientSettings(project_id="my-project"))
        template = remote_config.get_template()
        template.parameters["header_text"] = {"defaultValue": {"value": "Welcome"}}
        published = remote_config.publish_template(template)
    """

    def __init__(
        self,
        client: Optional[RemoteConfigTransport] = None,
        settings: Optional[ClientSettings] = None,
    ) -> None:
        """
        Initialize the service.

        Args:
            client: Transport to delegate to. When omitted, a
                    RemoteConfigApiClient is built from settings.
            settings: Settings for the default transport. Defaults to
                      ClientSettings.from_env().
        """
        self.client: RemoteConfigTransport = (
            client if client is not None else RemoteConfigApiClient(settings)
        )

    def get_template(self) -> Template:
        """Get the active version of the project's template."""
        return Template.from_dict(self.client.get_template())

    def get_template_at_version(self, version_number: VersionNumber) -> Template:
        """
        Get the template published as a given version.

        Args:
            version_number: Version number, as an int or an int64 string.
        """
        return Template.from_dict(self.client.get_template_at_version(version_number))

    def validate_template(self, template: TemplateInput) -> Template:
        """
        Validate a template on the server without publishing it.

        Returns:
            The validated template, carrying the input template's etag.
        """
        return Template.from_dict(self.client.validate_template(template))

    def publish_template(self, template: TemplateInput, force: bool = False) -> Template:
        """
        Publish a template.

        Args:
            template: Template to publish.
            force: Publish even if the template's etag no longer matches the
                   active template on the server.

        Returns:
            The published template, with its new etag and version.
        """
        return Template.from_dict(self.client.publish_template(template, force=force))

    def rollback(self, version_number: VersionNumber) -> Template:
        """
        Roll the project's template back to a previous version.

        A rollback is equivalent to fetching that version and force-publishing
        it; the result is a new version of type ROLLBACK.
        """
        return Template.from_dict(self.client.rollback(version_number))

    def list_versions(self, options: Optional[OptionsInput] = None) -> ListVersionsResult:
        """
        List published template versions, newest first.

        Only the last 300 versions are kept by the service; versions of
        non-active templates older than 90 days are deleted.

        Args:
            options: Page size, page token and version/time filters.

        Returns:
            The page of versions and the token of the next page, if any.
        """
        result = ListVersionsResult.from_dict(self.client.list_versions(options))
        logger.debug(
            f"Listed {len(result.versions)} Remote Config versions, "
            f"next_page_token={result.next_page_token}"
        )
        return result

    def create_template_from_json(self, json_string: Any) -> Template:
        """
        Create a template from its JSON representation.

        Args:
            json_string: JSON text of a template record, e.g. from Template.to_json().

        Raises:
            RemoteConfigError: ``invalid-argument`` if the input is not a
                non-empty string, is not valid JSON, or is not a valid template.
        """
        if not validator.is_non_empty_string(json_string):
            raise invalid_argument("JSON string must be a valid non-empty string")

        try:
            data = json.loads(json_string)
        except json.JSONDecodeError as e:
            raise invalid_argument(
                f"Failed to parse the JSON string: {json_string}. {e}"
            ) from e

        return Template.from_dict(data)

    def close(self) -> None:
        """Release the transport's resources, if it holds any."""
        close = getattr(self.client, "close", None)
        if callable(close):
            close()
