"""
Remote Config REST API Client.

Thin transport over the Remote Config REST API:
- Bearer-token authentication on a shared requests session.
- Fetching the active template or a historical version.
- Validating (dry run) and publishing templates, with etag concurrency.
- Rolling back to a previous version.
- Listing published versions.

Every method returns the raw JSON record from the service. Template records
get the response ``ETag`` header folded in as their ``etag`` field. Service
errors are raised as RemoteConfigError with the code the service reported.
"""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional, Union

import requests
from loguru import logger

from remote_config import __version__
from remote_config.config.settings import ClientSettings
from remote_config.errors import (
    ERROR_CODE_MAPPING,
    UNKNOWN_ERROR,
    RemoteConfigError,
    invalid_argument,
)
from remote_config.models.list_versions import ListVersionsOptions
from remote_config.models.template import Template
from remote_config.models.types import ListVersionsRecord, TemplateRecord
from remote_config.utils import validator

VersionNumber = Union[int, str]


class RemoteConfigApiClient:
    """
    Client for the Remote Config REST API.

    Usage::

        client = RemoteConfigApiClient(
            ClientSettings(project_id="my-project", access_token="ya29...")
        )
        record = client.get_template()
        # Returns: {"conditions": [...], "parameters": {...}, "etag": "etag-123-1", ...}
    """

    ENDPOINTS = {
        "template": "/v1/projects/{project_id}/remoteConfig",
        "rollback": "/v1/projects/{project_id}/remoteConfig:rollback",
        "list_versions": "/v1/projects/{project_id}/remoteConfig:listVersions",
    }

    def __init__(
        self,
        settings: Optional[ClientSettings] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        """
        Initialize the REST client.

        Args:
            settings: Connection settings. Defaults to ClientSettings.from_env().
            session: Optional pre-built requests session to use instead of
                     creating one on first request.
        """
        self._settings = settings if settings is not None else ClientSettings.from_env()
        self._session: Optional[requests.Session] = session
        logger.info(
            f"RemoteConfigApiClient initialized, project={self._settings.project_id or '<unset>'}, "
            f"url={self._settings.base_url}"
        )

    @property
    def is_configured(self) -> bool:
        """Check if the client has the minimum settings to operate."""
        return bool(self._settings.base_url and self._settings.project_id)

    def _get_session(self) -> requests.Session:
        """Get or create the HTTP session with default headers and auth."""
        if self._session is None:
            self._session = requests.Session()
            self._session.verify = self._settings.verify_ssl
            self._session.headers.update({
                "Accept-Encoding": "gzip",
                "Content-Type": "application/json",
                "X-Firebase-Client": f"remote-config-python/{__version__}",
            })
            if self._settings.access_token:
                self._session.headers["Authorization"] = (
                    f"Bearer {self._settings.access_token}"
                )
        return self._session

    def _url(self, endpoint_name: str) -> str:
        if not self.is_configured:
            raise invalid_argument(
                "Failed to determine project ID. Set project_id in the client "
                "settings or the GOOGLE_CLOUD_PROJECT environment variable."
            )
        endpoint = self.ENDPOINTS[endpoint_name].format(project_id=self._settings.project_id)
        return f"{self._settings.base_url}{endpoint}"

    def _request(self, method: str, endpoint_name: str, **kwargs: Any) -> requests.Response:
        """
        Make an authenticated API request.

        Args:
            method: HTTP method (GET, PUT, POST).
            endpoint_name: Key into ENDPOINTS.
            **kwargs: Passed to requests (json, params, headers).

        Returns:
            The successful response.

        Raises:
            RemoteConfigError: If the request fails or the service returns an error.
        """
        url = self._url(endpoint_name)
        session = self._get_session()
        logger.debug(f"Remote Config API {method} {url}")

        try:
            response = session.request(
                method=method,
                url=url,
                timeout=self._settings.timeout_sec,
                **kwargs,
            )
            response.raise_for_status()
            return response
        except requests.exceptions.HTTPError as e:
            error = self._error_from_response(e.response)
            logger.error(f"Remote Config API HTTP error: {error}")
            raise error from e
        except requests.exceptions.Timeout as e:
            logger.error(f"Remote Config API timeout: {e}")
            raise RemoteConfigError(
                f"Remote Config API request timed out after {self._settings.timeout_sec}s"
            ) from e
        except requests.exceptions.ConnectionError as e:
            logger.error(f"Remote Config API connection error: {e}")
            raise RemoteConfigError(f"Cannot connect to Remote Config API: {e}") from e
        except requests.exceptions.RequestException as e:
            logger.error(f"Remote Config API request error: {e}")
            raise RemoteConfigError(f"Remote Config API request failed: {e}") from e

    @staticmethod
    def _error_from_response(response: Optional[requests.Response]) -> RemoteConfigError:
        """Map an error response body ({"error": {"status", "message"}}) to an error."""
        if response is None:
            return RemoteConfigError("Remote Config API request failed without a response")

        status_code = response.status_code
        try:
            error = response.json().get("error") or {}
        except (ValueError, AttributeError):
            error = {}

        status = error.get("status") if isinstance(error, dict) else None
        if not status:
            return RemoteConfigError(
                f"Unexpected response with status: {status_code} and body: {response.text}",
                code=UNKNOWN_ERROR,
                status_code=status_code,
            )

        code = ERROR_CODE_MAPPING.get(status, UNKNOWN_ERROR)
        message = error.get("message") or f"Unknown server error: {response.text}"
        return RemoteConfigError(message, code=code, status_code=status_code)

    @staticmethod
    def _to_template_record(
        response: requests.Response, etag: Optional[str] = None
    ) -> TemplateRecord:
        """Fold the response ETag (or a given etag) into the response body."""
        etag = etag if etag is not None else response.headers.get("ETag")
        if not validator.is_non_empty_string(etag):
            raise invalid_argument("ETag header is not present in the server response.")

        try:
            body = response.json()
        except ValueError as e:
            raise RemoteConfigError(
                f"Failed to parse Remote Config response body: {e}",
                status_code=response.status_code,
            ) from e
        if not validator.is_non_null_object(body):
            raise RemoteConfigError(
                f"Unexpected Remote Config response body: {response.text}",
                status_code=response.status_code,
            )

        record = dict(body)
        record["etag"] = etag
        return record  # type: ignore[return-value]

    @staticmethod
    def _validate_version_number(version_number: Any) -> str:
        if not validator.is_non_empty_string(version_number) and \
           not validator.is_number(version_number):
            raise invalid_argument(
                "Version number must be a non-empty string in int64 format or a number"
            )
        if not validator.is_integer_like(version_number):
            raise invalid_argument(
                "Version number must be an integer or a string in int64 format"
            )
        if validator.is_number(version_number):
            return str(int(version_number))
        return version_number.strip()

    @staticmethod
    def _request_body(template: Template) -> Dict[str, Any]:
        body: Dict[str, Any] = {
            "conditions": template.conditions,
            "parameters": template.parameters,
            "parameterGroups": template.parameter_groups,
        }
        if template.version is not None:
            body["version"] = {
                k: v for k, v in template.version.to_dict().items() if v is not None
            }
        return body

    # ------------------------------------------------------------------
    # Template Operations
    # ------------------------------------------------------------------

    def get_template(self) -> TemplateRecord:
        """Fetch the active template."""
        logger.info("Fetching active Remote Config template")
        return self._to_template_record(self._request("GET", "template"))

    def get_template_at_version(self, version_number: VersionNumber) -> TemplateRecord:
        """
        Fetch the template published as the given version.

        Raises:
            RemoteConfigError: ``invalid-argument`` for a non-integer version number.
        """
        version = self._validate_version_number(version_number)
        logger.info(f"Fetching Remote Config template at version {version}")
        response = self._request("GET", "template", params={"versionNumber": version})
        return self._to_template_record(response)

    def validate_template(self, template: Union[Template, Mapping[str, Any]]) -> TemplateRecord:
        """
        Ask the service to validate a template without publishing it.

        The returned record carries the input template's etag: the service
        answers with a ``-0``-suffixed etag that only marks a successful validation.
        """
        checked = Template.from_dict(template)
        logger.info(f"Validating Remote Config template, etag={checked.etag}")
        response = self._request(
            "PUT",
            "template",
            params={"validate_only": "true"},
            headers={"If-Match": checked.etag},
            json=self._request_body(checked),
        )
        return self._to_template_record(response, etag=checked.etag)

    def publish_template(
        self,
        template: Union[Template, Mapping[str, Any]],
        force: bool = False,
    ) -> TemplateRecord:
        """
        Publish a template.

        Args:
            template: Template to publish; its etag guards against lost updates.
            force: Skip the etag check and overwrite whatever is active.
        """
        checked = Template.from_dict(template)
        if_match = "*" if force else checked.etag
        logger.info(f"Publishing Remote Config template, If-Match={if_match}")
        response = self._request(
            "PUT",
            "template",
            headers={"If-Match": if_match},
            json=self._request_body(checked),
        )
        return self._to_template_record(response)

    def rollback(self, version_number: VersionNumber) -> TemplateRecord:
        """Republish a previous version as a forced update."""
        version = self._validate_version_number(version_number)
        logger.info(f"Rolling back Remote Config template to version {version}")
        response = self._request("POST", "rollback", json={"versionNumber": version})
        return self._to_template_record(response)

    # ------------------------------------------------------------------
    # Version History
    # ------------------------------------------------------------------

    def list_versions(
        self,
        options: Optional[Union[ListVersionsOptions, Mapping[str, Any]]] = None,
    ) -> ListVersionsRecord:
        """
        Fetch one page of published versions, newest first.

        Raises:
            RemoteConfigError: ``invalid-argument`` for malformed options, before
                any request is made.
        """
        params = ListVersionsOptions.from_dict(options).to_params() if options is not None else {}
        logger.info(f"Listing Remote Config versions, params={params}")
        response = self._request("GET", "list_versions", params=params)
        try:
            return response.json()
        except ValueError as e:
            raise RemoteConfigError(
                f"Failed to parse list versions response: {e}",
                status_code=response.status_code,
            ) from e

    def close(self) -> None:
        """Close the HTTP session."""
        if self._session is not None:
            self._session.close()
            self._session = None
            logger.debug("Remote Config client session closed")
