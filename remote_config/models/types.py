from __future__ import annotations

from typing import Any, Dict, List, Literal, TypedDict, Union

# ---- Enumerations carried on the wire
ParameterValueType = Literal["STRING", "BOOLEAN", "NUMBER", "JSON"]

TagColor = Literal[
    "BLUE", "BROWN", "CYAN", "DEEP_ORANGE", "GREEN", "INDIGO", "LIME",
    "ORANGE", "PINK", "PURPLE", "TEAL",
]

UpdateOrigin = Literal[
    "REMOTE_CONFIG_UPDATE_ORIGIN_UNSPECIFIED", "CONSOLE", "REST_API", "ADMIN_SDK_NODE",
]

UpdateType = Literal[
    "REMOTE_CONFIG_UPDATE_TYPE_UNSPECIFIED", "INCREMENTAL_UPDATE", "FORCED_UPDATE", "ROLLBACK",
]


# ---- Parameter values
class ExplicitParameterValue(TypedDict):
    value: str


class InAppDefaultValue(TypedDict):
    useInAppDefault: bool


RemoteConfigParameterValue = Union[ExplicitParameterValue, InAppDefaultValue]


# ---- Template parts
class RemoteConfigParameter(TypedDict, total=False):
    defaultValue: RemoteConfigParameterValue
    conditionalValues: Dict[str, RemoteConfigParameterValue]
    description: str
    valueType: ParameterValueType


class RemoteConfigParameterGroup(TypedDict, total=False):
    description: str
    parameters: Dict[str, RemoteConfigParameter]


class _ConditionRequired(TypedDict):
    name: str
    expression: str


class RemoteConfigCondition(_ConditionRequired, total=False):
    tagColor: TagColor


class _UserRequired(TypedDict):
    email: str


class RemoteConfigUser(_UserRequired, total=False):
    name: str
    imageUrl: str


# ---- Raw records exchanged with the transport
class VersionRecord(TypedDict, total=False):
    versionNumber: Union[str, int, float]
    updateTime: str
    updateOrigin: UpdateOrigin
    updateType: UpdateType
    updateUser: RemoteConfigUser
    description: str
    rollbackSource: str
    isLegacy: bool


class _TemplateRequired(TypedDict):
    etag: str


class TemplateRecord(_TemplateRequired, total=False):
    conditions: List[RemoteConfigCondition]
    parameters: Dict[str, RemoteConfigParameter]
    parameterGroups: Dict[str, RemoteConfigParameterGroup]
    version: VersionRecord


class ListVersionsRecord(TypedDict, total=False):
    versions: List[VersionRecord]
    nextPageToken: str


JsonRecord = Dict[str, Any]
