"""
Remote Config Template Module.

Wraps a template record fetched from, or about to be sent to, the Remote
Config service. Validation is deliberately shallow: the container types of
``parameters``, ``parameterGroups`` and ``conditions`` are enforced, but the
individual entries are passed through as the service returns them.
"""

from __future__ import annotations

import json
from typing import Any, Dict, List, Mapping, Optional, Sequence, Union

from remote_config.errors import describe, invalid_argument
from remote_config.models.types import (
    RemoteConfigCondition,
    RemoteConfigParameter,
    RemoteConfigParameterGroup,
    TemplateRecord,
    VersionRecord,
)
from remote_config.models.version import Version
from remote_config.utils import validator


class Template:
    """
    A Remote Config template: parameters, parameter groups, conditions,
    the etag of the state it was read from, and optional version metadata.

    The etag is read-only. It is only ever set from a service response or
    from explicit construction, and is sent back as the optimistic
    concurrency token on publish.

    Attributes:
        parameters: Parameter name -> parameter definition.
        parameter_groups: Group name -> parameter group definition.
        conditions: Ordered list of targeting conditions.
        version: Version metadata, if the service supplied any.

    Usage::

        template = Template.from_dict(record)
        template.parameters["welcome_message"] = {"defaultValue": {"value": "hi"}}
        remote_config.publish_template(template)
    """

    def __init__(
        self,
        etag: str,
        parameters: Optional[Mapping[str, RemoteConfigParameter]] = None,
        parameter_groups: Optional[Mapping[str, RemoteConfigParameterGroup]] = None,
        conditions: Optional[Sequence[RemoteConfigCondition]] = None,
        version: Optional[Union[Version, Mapping[str, Any]]] = None,
    ) -> None:
        """
        Initialize and validate a template.

        Args:
            etag: Opaque concurrency token; must be a non-empty string.
            parameters: Parameter definitions (default: empty).
            parameter_groups: Parameter group definitions (default: empty).
            conditions: Targeting conditions (default: empty).
            version: Version metadata as a Version or a wire record.

        Raises:
            RemoteConfigError: ``invalid-argument`` if any part is malformed.
        """
        if not validator.is_non_empty_string(etag):
            raise invalid_argument(
                f"Invalid Remote Config template: {describe({'etag': etag})}"
            )
        self._etag = etag

        if parameters is not None and not validator.is_non_null_object(parameters):
            raise invalid_argument("Remote Config parameters must be a non-null object")
        self.parameters: Dict[str, RemoteConfigParameter] = (
            dict(parameters) if parameters is not None else {}
        )

        if parameter_groups is not None and not validator.is_non_null_object(parameter_groups):
            raise invalid_argument(
                "Remote Config parameter groups must be a non-null object"
            )
        self.parameter_groups: Dict[str, RemoteConfigParameterGroup] = (
            dict(parameter_groups) if parameter_groups is not None else {}
        )

        if conditions is not None and not validator.is_array(conditions):
            raise invalid_argument("Remote Config conditions must be an array")
        self.conditions: List[RemoteConfigCondition] = (
            list(conditions) if conditions is not None else []
        )

        self.version: Optional[Version] = (
            Version.from_dict(version) if version is not None else None
        )

    @classmethod
    def from_dict(cls, data: Any) -> "Template":
        """
        Build a template from a raw wire record.

        Args:
            data: Mapping with camelCase wire fields. ``etag`` is mandatory;
                ``parameters``, ``parameterGroups`` and ``conditions`` may be
                omitted but not null; a null ``version`` is treated as absent.

        Returns:
            Validated Template.

        Raises:
            RemoteConfigError: ``invalid-argument`` if the record is not a mapping,
                lacks a valid etag, or has malformed parts.
        """
        if isinstance(data, Template):
            return data
        if not validator.is_non_null_object(data) or \
           not validator.is_non_empty_string(data.get("etag")):
            raise invalid_argument(f"Invalid Remote Config template: {describe(data)}")

        if "parameters" in data and data["parameters"] is None:
            raise invalid_argument("Remote Config parameters must be a non-null object")
        if "parameterGroups" in data and data["parameterGroups"] is None:
            raise invalid_argument(
                "Remote Config parameter groups must be a non-null object"
            )
        if "conditions" in data and data["conditions"] is None:
            raise invalid_argument("Remote Config conditions must be an array")

        return cls(
            etag=data["etag"],
            parameters=data.get("parameters"),
            parameter_groups=data.get("parameterGroups"),
            conditions=data.get("conditions"),
            version=data.get("version"),
        )

    @property
    def etag(self) -> str:
        """The ETag of the template."""
        return self._etag

    def to_dict(self) -> TemplateRecord:
        """Return the wire record, including the read-only etag."""
        version: Optional[VersionRecord] = (
            self.version.to_dict() if self.version is not None else None
        )
        return {  # type: ignore[typeddict-item]
            "conditions": self.conditions,
            "parameters": self.parameters,
            "parameterGroups": self.parameter_groups,
            "etag": self.etag,
            "version": version,
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Template):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __repr__(self) -> str:
        return (
            f"Template(etag={self.etag!r}, parameters={len(self.parameters)}, "
            f"parameter_groups={len(self.parameter_groups)}, "
            f"conditions={len(self.conditions)}, version={self.version!r})"
        )
