"""
Remote Config Version Module.

Validates and normalizes the version metadata attached to a template or
returned by the list-versions call. Every field is optional; a field that is
present must satisfy the rule registered for it in ``VERSION_FIELD_RULES``.

The service returns ``updateTime`` as an ISO-8601 string, while normalized
versions expose it in UTC display format. A UTC display string given back to
the normalizer (e.g. from a previously fetched template) is kept as is, so
normalizing a normalized version changes nothing.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, fields
from typing import Any, Callable, Dict, Mapping, Optional, Tuple, Union

from remote_config.errors import describe, invalid_argument
from remote_config.models.types import VersionRecord
from remote_config.utils import validator

# (wire field, attribute, predicate, error message)
FieldRule = Tuple[str, str, Callable[[Any], bool], str]

VERSION_FIELD_RULES: Tuple[FieldRule, ...] = (
    (
        "versionNumber",
        "version_number",
        lambda v: validator.is_non_empty_string(v) or validator.is_number(v),
        "Version number must be a non-empty string in int64 format or a number",
    ),
    (
        "versionNumber",
        "version_number",
        validator.is_integer_like,
        "Version number must be an integer or a string in int64 format",
    ),
    (
        "updateOrigin",
        "update_origin",
        validator.is_non_empty_string,
        "Version update origin must be a non-empty string",
    ),
    (
        "updateType",
        "update_type",
        validator.is_non_empty_string,
        "Version update type must be a non-empty string",
    ),
    (
        "updateUser",
        "update_user",
        validator.is_non_null_object,
        "Version update user must be a non-null object",
    ),
    (
        "description",
        "description",
        validator.is_non_empty_string,
        "Version description must be a non-empty string",
    ),
    (
        "rollbackSource",
        "rollback_source",
        validator.is_non_empty_string,
        "Version rollback source must be a non-empty string",
    ),
    (
        "isLegacy",
        "is_legacy",
        validator.is_boolean,
        "Version.isLegacy must be a boolean",
    ),
    (
        "updateTime",
        "update_time",
        lambda v: validator.is_iso_date_string(v) or validator.is_utc_date_string(v),
        "Version update time must be a valid date string",
    ),
)

# attribute -> wire field
_WIRE_NAMES: Dict[str, str] = {attr: wire for wire, attr, _, _ in VERSION_FIELD_RULES}


@dataclass(frozen=True)
class Version:
    """
    Metadata describing one publication of a Remote Config template.

    Attributes:
        version_number: Version number as given (int64 string or integral number).
        update_time: Publication time in UTC display format.
        update_origin: Origin of the update (e.g. "CONSOLE", "REST_API").
        update_type: Kind of update (e.g. "INCREMENTAL_UPDATE", "ROLLBACK").
        update_user: Descriptor of the user who published the version.
        description: Free-form description supplied at publish time.
        rollback_source: Version number this version was rolled back from.
        is_legacy: Whether the version predates the versioning API.

    Raises:
        RemoteConfigError: ``invalid-argument`` when a field fails its rule.
    """

    version_number: Optional[Union[str, int, float]] = None
    update_time: Optional[str] = None
    update_origin: Optional[str] = None
    update_type: Optional[str] = None
    update_user: Optional[Mapping[str, Any]] = None
    description: Optional[str] = None
    rollback_source: Optional[str] = None
    is_legacy: Optional[bool] = None

    def __post_init__(self) -> None:
        for _, attr, predicate, message in VERSION_FIELD_RULES:
            value = getattr(self, attr)
            if value is not None and not predicate(value):
                raise invalid_argument(message)

        # ISO timestamps from the API become UTC display strings; UTC input is kept
        if self.update_time is not None and validator.is_iso_date_string(self.update_time):
            object.__setattr__(self, "update_time", validator.to_utc_string(self.update_time))

    @classmethod
    def from_dict(cls, data: Any) -> "Version":
        """
        Build a version from a raw wire record.

        Args:
            data: Mapping with camelCase wire fields, e.g. as returned by the service.
                Keys holding None are treated as absent; unknown keys are ignored.

        Returns:
            Normalized Version.

        Raises:
            RemoteConfigError: ``invalid-argument`` if the record is not a mapping
                or one of its fields is invalid.
        """
        if isinstance(data, Version):
            return data
        if not validator.is_non_null_object(data):
            raise invalid_argument(
                f"Invalid Remote Config version instance: {describe(data)}"
            )

        kwargs = {
            attr: data.get(wire)
            for attr, wire in _WIRE_NAMES.items()
            if data.get(wire) is not None
        }
        return cls(**kwargs)

    def to_dict(self) -> VersionRecord:
        """Return the wire record, with None for every absent field."""
        return {  # type: ignore[return-value]
            _WIRE_NAMES[f.name]: getattr(self, f.name) for f in fields(self)
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict())
