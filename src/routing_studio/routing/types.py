"""Pydantic models for the routing document and the UI config sidecar.

Every document-level model allows extra fields so that keys this editor does
not know about survive a load/save cycle untouched.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Annotated, Any, Literal, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    PlainSerializer,
    ValidatorFunctionWrapHandler,
    WrapValidator,
    field_validator,
    model_serializer,
)

ProviderId = str
ModelId = str  # e.g. "openai:gpt-5.1"
ClassName = str


def _keep_int(value: Any, handler: ValidatorFunctionWrapHandler) -> float:
    """Validate as a float but hand back JSON integers unchanged."""
    result = handler(value)
    return value if type(value) is int else result


def _as_is(value: Any) -> Any:
    return value


# A JSON number that is written back the way it was read: 0 stays 0, 0.5 stays 0.5.
JsonNumber = Annotated[
    float, Field(strict=True), WrapValidator(_keep_int), PlainSerializer(_as_is)
]
UnitScore = Annotated[
    float, Field(strict=True, ge=0, le=1), WrapValidator(_keep_int), PlainSerializer(_as_is)
]


class _Passthrough(BaseModel):
    """Base for records that keep unknown keys verbatim."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)


class ProviderConfig(_Passthrough):
    """Provider enablement plus an opaque, user-defined weight."""

    enabled: bool = Field(strict=True)
    weight: JsonNumber


class DefaultsConfig(_Passthrough):
    """Class keys used for licensed and unlicensed callers."""

    licensed: ClassName
    unlicensed: ClassName


class LegacyClassPreference(_Passthrough):
    kind: Literal["class"]
    class_: ClassName = Field(alias="class")


class LegacyExplicitPreference(_Passthrough):
    kind: Literal["explicit"]
    model: ModelId


LegacyPreference = Annotated[
    Union[LegacyClassPreference, LegacyExplicitPreference],
    Field(discriminator="kind"),
]


class ModelInfo(_Passthrough):
    """Scores are 0..1 where higher is better (cheaper, faster, smarter)."""

    reasoning: UnitScore
    latency: UnitScore
    cost: UnitScore
    context_tokens: int = Field(alias="contextTokens", strict=True, ge=0)
    tools: bool = Field(strict=True)
    vision: bool = Field(strict=True)
    tags: list[str] = Field(default_factory=list)

    def metric(self, key: str) -> Any:
        """Return the raw value stored under JSON key *key*, or None."""
        for name, info in type(self).model_fields.items():
            if key == (info.alias or name):
                return getattr(self, name)
        return (self.model_extra or {}).get(key)


class RoutingDocument(_Passthrough):
    """Routing file v1."""

    version: Literal[1]
    providers: dict[ProviderId, ProviderConfig] = Field(default_factory=dict)
    defaults: DefaultsConfig
    classes: dict[ClassName, list[ModelId]] = Field(default_factory=dict)
    legacy_preference_map: dict[str, LegacyPreference] | None = Field(
        default=None, alias="legacyPreferenceMap"
    )
    models: dict[ModelId, ModelInfo] = Field(default_factory=dict)

    @field_validator("version", mode="before")
    @classmethod
    def _reject_bool_version(cls, value: Any) -> Any:
        if isinstance(value, bool):
            raise ValueError("Input should be 1")
        return value

    @field_validator("legacy_preference_map", mode="before")
    @classmethod
    def _reject_null_legacy_map(cls, value: Any) -> Any:
        # The key may be absent, but when present it must be an object
        if value is None:
            raise ValueError("Input should be an object")
        return value

    @model_serializer(mode="wrap")
    def _omit_absent_legacy_map(self, handler):
        data = handler(self)
        if self.legacy_preference_map is None:
            data.pop("legacyPreferenceMap", None)
            data.pop("legacy_preference_map", None)
        return data

    def to_json_dict(self) -> dict[str, Any]:
        """Plain JSON-ready dict using the on-disk key names."""
        return self.model_dump(mode="json", by_alias=True)


# --- Validation results ---------------------------------------------------


class Severity(StrEnum):
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


@dataclass(frozen=True)
class ValidationIssue:
    severity: Severity
    path: str
    message: str


@dataclass(frozen=True)
class IssueSummary:
    errors: int = 0
    warnings: int = 0
    infos: int = 0


# --- UI config sidecar ----------------------------------------------------


class TagRule(BaseModel):
    type: Literal["tag"] = "tag"
    tag: str


class MetricRule(BaseModel):
    type: Literal["metric"] = "metric"
    metric: str
    op: Literal[">=", "<=", ">", "<"]
    value: float


ClassRule = Annotated[Union[TagRule, MetricRule], Field(discriminator="type")]


class MetricDefinition(BaseModel):
    """How a numeric model field is labelled and edited in the UI."""

    model_config = ConfigDict(populate_by_name=True)

    key: str
    label: str
    description: str | None = None
    min: float = 0
    max: float = 1
    step: float = 0.05
    higher_is_better: bool = Field(default=True, alias="higherIsBetter")


class ClassMeta(BaseModel):
    key: str
    label: str
    description: str | None = None
    icon: str | None = None
    rules: list[ClassRule] | None = None


class UiConfig(BaseModel):
    """Editor-only presentation settings. Never written into a routing file."""

    model_config = ConfigDict(populate_by_name=True)

    metric_definitions: list[MetricDefinition] = Field(
        default_factory=list, alias="metricDefinitions"
    )
    class_meta: dict[str, ClassMeta] = Field(default_factory=dict, alias="classMeta")
