"""
List Versions Module.

Options and result records for paging through published template versions.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional, Union

from remote_config.errors import invalid_argument
from remote_config.models.version import Version
from remote_config.utils import validator

# Service-side cap on page size
MAX_PAGE_SIZE = 300


@dataclass
class ListVersionsOptions:
    """
    Filter and pagination options for listing template versions.

    Attributes:
        page_size: Maximum number of versions per page (1-300).
        page_token: Token of the page to fetch, from a previous result.
        end_version_number: Newest version number to include.
        start_time: Only versions published at or after this instant.
        end_time: Only versions published before this instant.
    """

    page_size: Optional[int] = None
    page_token: Optional[str] = None
    end_version_number: Optional[Union[str, int]] = None
    start_time: Optional[Union[datetime, str]] = None
    end_time: Optional[Union[datetime, str]] = None

    _WIRE_NAMES = {
        "pageSize": "page_size",
        "pageToken": "page_token",
        "endVersionNumber": "end_version_number",
        "startTime": "start_time",
        "endTime": "end_time",
    }

    @classmethod
    def from_dict(cls, data: Any) -> "ListVersionsOptions":
        """
        Build options from a camelCase mapping (``pageSize``, ``pageToken``, ...).

        Raises:
            RemoteConfigError: ``invalid-argument`` if data is not a mapping.
        """
        if isinstance(data, ListVersionsOptions):
            return data
        if not validator.is_non_null_object(data):
            raise invalid_argument("ListVersionsOptions must be a non-null object.")
        return cls(**{
            attr: data.get(wire)
            for wire, attr in cls._WIRE_NAMES.items()
            if data.get(wire) is not None
        })

    def to_params(self) -> Dict[str, Any]:
        """
        Validate the options and render them as request query parameters.

        Timestamps are sent as ISO-8601 strings.

        Raises:
            RemoteConfigError: ``invalid-argument`` if an option is out of range
                or has the wrong type.
        """
        params: Dict[str, Any] = {}

        if self.page_size is not None:
            if not validator.is_number(self.page_size):
                raise invalid_argument("pageSize must be a number or undefined.")
            if not validator.is_integer_like(self.page_size) or \
               not 1 <= self.page_size <= MAX_PAGE_SIZE:
                raise invalid_argument(
                    f"pageSize must be a number between 1 and {MAX_PAGE_SIZE} (inclusive)."
                )
            params["pageSize"] = int(self.page_size)

        if self.page_token is not None:
            if not validator.is_non_empty_string(self.page_token):
                raise invalid_argument("pageToken must be a string value.")
            params["pageToken"] = self.page_token

        if self.end_version_number is not None:
            if not validator.is_integer_like(self.end_version_number):
                raise invalid_argument(
                    "endVersionNumber must be a non-empty string in int64 format or a number."
                )
            params["endVersionNumber"] = str(self.end_version_number)

        for wire, value in (("startTime", self.start_time), ("endTime", self.end_time)):
            if value is None:
                continue
            if not isinstance(value, datetime) and not validator.is_utc_date_string(value):
                raise invalid_argument(
                    f"{wire} must be a valid Date object or a UTC date string."
                )
            params[wire] = validator.to_iso_string(value)

        return params


@dataclass
class ListVersionsResult:
    """
    One page of published versions, newest first.

    Attributes:
        versions: Normalized versions on this page (never None).
        next_page_token: Token for the next page, if there is one.
    """

    versions: List[Version] = field(default_factory=list)
    next_page_token: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Any) -> "ListVersionsResult":
        """Wrap a raw list-versions response, normalizing every version."""
        if not validator.is_non_null_object(data):
            raise invalid_argument("Invalid list versions response: expected an object.")
        raw_versions = data.get("versions") or []
        return cls(
            versions=[Version.from_dict(v) for v in raw_versions],
            next_page_token=data.get("nextPageToken"),
        )
