# =============================================================================
# core/schema.py  —  Declarative parameter schemas, validated by pydantic
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Each tool declares its arguments as a tuple of Field descriptors.  A
#   ParameterSchema compiles those descriptors ONCE into a pydantic model, and
#   that model drives two things:
#     1. to_json_schema()  → model_json_schema(), shown to the agent by the host
#     2. validate()        → model_validate(), run before any request is built
#   Tool modules only ever see the descriptors; pydantic stays behind them.
#
# VALIDATION RULES:
#   - The first pydantic error wins; its location becomes a path like
#     "filters[0].values[1]" or "periodFilter.value._type".
#   - Optional fields that are absent (or null) are left OUT of the result
#     unless they declare a default.  Downstream, "not in the dict" means
#     "not sent to Dixa".
#   - Keys the schema doesn't know are dropped.
#   - Scalars are strict: "true" is not a boolean and 42 is not a string.
#
# SPECIAL SHAPES:
#   preset period  → {"_type": "Preset", "value": {"_type": "PreviousWeek"}}
#   range period   → {"from": "<ISO-8601>", "to": "<ISO-8601>"}
#   filter list    → [{"attribute": "channel", "values": ["email"]}, ...]
#   filter map     → {"channel": ["email"], "queue_id": ["q1"]}
#   Each endpoint picks the shape Dixa expects for it; the shapes are NOT
#   interchangeable.
# =============================================================================

from __future__ import annotations

import logging
from dataclasses import dataclass, field as dataclass_field
from datetime import datetime
from enum import Enum
from typing import Annotated, Any, Literal, Mapping, Optional

import pydantic
from pydantic import (
    AfterValidator,
    BaseModel,
    BeforeValidator,
    ConfigDict,
    StrictBool,
    StrictStr,
    TypeAdapter,
    ValidationError,
    model_validator,
)

from core.errors import ParameterValidationError

logger = logging.getLogger(__name__)


class _Missing:
    def __repr__(self) -> str:
        return "MISSING"


#: Sentinel for "this field has no default".
MISSING: Any = _Missing()

#: Closed set of named periods accepted by Dixa analytics.
PERIOD_PRESETS: tuple[str, ...] = (
    "PreviousQuarter",
    "ThisWeek",
    "PreviousWeek",
    "Yesterday",
    "Today",
    "ThisMonth",
    "PreviousMonth",
    "ThisQuarter",
    "ThisYear",
)

PRESET_PERIOD = "preset"
RANGE_PERIOD = "range"

DEFAULT_PAGE_LIMIT = 50


class FieldType(str, Enum):
    STRING = "string"
    NUMBER = "number"
    INTEGER = "integer"
    BOOLEAN = "boolean"
    STRING_LIST = "string_list"
    FILTER_MAP = "filter_map"
    FILTER_LIST = "filter_list"
    PERIOD_FILTER = "period_filter"


@dataclass(frozen=True)
class Field:
    """One accepted argument: its type, presence rules and documentation."""

    name: str
    type: FieldType
    description: str
    required: bool = True
    default: Any = MISSING
    choices: tuple[str, ...] = ()
    minimum: Optional[float] = None
    min_length: Optional[int] = None
    period_shape: Optional[str] = None

    def __post_init__(self) -> None:
        if self.required and self.has_default:
            raise ValueError(f"Field '{self.name}' cannot be both required and defaulted")
        if self.type is FieldType.PERIOD_FILTER and self.period_shape not in _PERIOD_MODELS:
            raise ValueError(
                f"Field '{self.name}' needs a period shape: {PRESET_PERIOD!r} or {RANGE_PERIOD!r}"
            )

    @property
    def has_default(self) -> bool:
        return self.default is not MISSING


# =============================================================================
# Field constructors
# =============================================================================
# Tool modules build their schemas from these helpers instead of spelling out
# Field(...) with every keyword.
# =============================================================================
def string(
    name: str,
    description: str,
    *,
    required: bool = True,
    default: Any = MISSING,
    choices: tuple[str, ...] = (),
    min_length: Optional[int] = None,
) -> Field:
    return Field(name, FieldType.STRING, description, required=required,
                 default=default, choices=choices, min_length=min_length)


def identifier(name: str, description: str) -> Field:
    """A required, non-empty string substituted into a URL path."""
    return string(name, description, min_length=1)


def number(name: str, description: str, *, required: bool = True,
           default: Any = MISSING, minimum: Optional[float] = None) -> Field:
    return Field(name, FieldType.NUMBER, description, required=required,
                 default=default, minimum=minimum)


def integer(name: str, description: str, *, required: bool = True,
            default: Any = MISSING, minimum: Optional[int] = None) -> Field:
    return Field(name, FieldType.INTEGER, description, required=required,
                 default=default, minimum=minimum)


def boolean(name: str, description: str, *, required: bool = True, default: Any = MISSING) -> Field:
    return Field(name, FieldType.BOOLEAN, description, required=required, default=default)


def string_list(name: str, description: str, *, required: bool = True) -> Field:
    return Field(name, FieldType.STRING_LIST, description, required=required)


def filter_list(name: str, description: str, *, required: bool = False) -> Field:
    return Field(name, FieldType.FILTER_LIST, description, required=required)


def filter_map(name: str, description: str, *, required: bool = False) -> Field:
    return Field(name, FieldType.FILTER_MAP, description, required=required)


def period_filter(name: str, description: str, *, shape: str, required: bool = True) -> Field:
    return Field(name, FieldType.PERIOD_FILTER, description, required=required, period_shape=shape)


def page_key() -> Field:
    return string("pageKey", "Pagination key for next page of results", required=False)


def page_limit(default: Optional[int] = DEFAULT_PAGE_LIMIT) -> Field:
    if default is None:
        return integer("pageLimit", "Number of results per page", required=False, minimum=1)
    return integer(
        "pageLimit",
        f"Number of results per page (default: {default})",
        required=False,
        default=default,
        minimum=1,
    )


# =============================================================================
# Pydantic building blocks for the special shapes
# =============================================================================
_TIMESTAMP = TypeAdapter(datetime)


def _parse_timestamp(value: str) -> datetime:
    try:
        return _TIMESTAMP.validate_python(value)
    except ValidationError:
        raise ValueError(f"expected an ISO-8601 timestamp, got {value!r}") from None


def _iso_timestamp(value: str) -> str:
    _parse_timestamp(value)
    # Dixa gets the caller's text, not a re-serialized datetime.
    return value


def _integral(value: Any) -> Any:
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


Timestamp = Annotated[StrictStr, AfterValidator(_iso_timestamp)]
StrictInteger = Annotated[int, pydantic.Strict()]
StrictNumber = Annotated[float, pydantic.Strict()]
PresetName = Literal[PERIOD_PRESETS]  # type: ignore[valid-type]


class _ShapeModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class FilterItem(_ShapeModel):
    attribute: StrictStr = pydantic.Field(description="The attribute to filter by")
    values: list[StrictStr] = pydantic.Field(description="Array of values to filter by")


class PresetValue(_ShapeModel):
    type_: PresetName = pydantic.Field(alias="_type", description="The type of preset period")


class PresetPeriod(_ShapeModel):
    type_: Literal["Preset"] = pydantic.Field(alias="_type")
    value: PresetValue

    @model_validator(mode="before")
    @classmethod
    def _reject_range(cls, data: Any) -> Any:
        if isinstance(data, Mapping) and "_type" not in data and ("from" in data or "to" in data):
            raise ValueError("explicit ranges are not accepted here; expected a Preset period")
        return data


class RangePeriod(_ShapeModel):
    from_: Timestamp = pydantic.Field(
        alias="from", description="Start date in ISO format", json_schema_extra={"format": "date-time"}
    )
    to: Timestamp = pydantic.Field(
        description="End date in ISO format", json_schema_extra={"format": "date-time"}
    )

    @model_validator(mode="before")
    @classmethod
    def _reject_preset(cls, data: Any) -> Any:
        if isinstance(data, Mapping) and "_type" in data:
            raise ValueError("preset periods are not accepted here; expected {from, to}")
        return data

    @model_validator(mode="after")
    def _ordered(self) -> "RangePeriod":
        start, end = _parse_timestamp(self.from_), _parse_timestamp(self.to)
        # Naive and aware timestamps can't be ordered; only compare like with like.
        if (start.tzinfo is None) == (end.tzinfo is None) and start > end:
            raise ValueError("'from' must not be after 'to'")
        return self


_PERIOD_MODELS: dict[str, type[BaseModel]] = {
    PRESET_PERIOD: PresetPeriod,
    RANGE_PERIOD: RangePeriod,
}


# =============================================================================
# Descriptor → pydantic compilation
# =============================================================================
def _annotation(field: Field) -> Any:
    if field.type is FieldType.STRING:
        return Literal[field.choices] if field.choices else StrictStr  # type: ignore[valid-type]
    if field.type is FieldType.PERIOD_FILTER:
        return _PERIOD_MODELS[field.period_shape]
    if field.type is FieldType.INTEGER:
        # Bounds sit on the int itself so they show up in the published schema.
        return Annotated[StrictInteger, pydantic.Field(ge=field.minimum), BeforeValidator(_integral)]
    if field.type is FieldType.NUMBER:
        return Annotated[StrictNumber, pydantic.Field(ge=field.minimum)]
    return {
        FieldType.BOOLEAN: StrictBool,
        FieldType.STRING_LIST: list[StrictStr],
        FieldType.FILTER_MAP: dict[StrictStr, list[StrictStr]],
        FieldType.FILTER_LIST: list[FilterItem],
    }[field.type]


def _field_info(field: Field) -> Any:
    options: dict[str, Any] = {"description": field.description}
    if not field.required:
        options["default"] = field.default if field.has_default else None
    if field.min_length is not None and not field.choices:
        options["min_length"] = field.min_length
    return pydantic.Field(**options)


def _compile(fields: tuple[Field, ...]) -> type[BaseModel]:
    return pydantic.create_model(
        "Arguments",
        __config__=ConfigDict(extra="ignore"),
        **{field.name: (_annotation(field), _field_info(field)) for field in fields},
    )


def _error_path(loc: tuple[Any, ...]) -> str:
    path = ""
    for part in loc:
        if isinstance(part, int):
            path += f"[{part}]"
        else:
            path += f".{part}" if path else str(part)
    return path or "<arguments>"


def _constraint(error: Mapping[str, Any]) -> str:
    if error["type"] == "missing":
        return "is required"
    if error["type"] == "value_error":
        return str(error["ctx"]["error"])
    return error["msg"]


def _published(schema: Any) -> Any:
    """Drop pydantic's auto titles and the null default of optional fields."""
    if isinstance(schema, dict):
        return {
            key: _published(value)
            for key, value in schema.items()
            if not (key == "title" and isinstance(value, str))
            and not (key == "default" and value is None)
        }
    if isinstance(schema, list):
        return [_published(item) for item in schema]
    return schema


# =============================================================================
# ParameterSchema
# =============================================================================
@dataclass(frozen=True)
class ParameterSchema:
    """The full argument contract of one tool."""

    fields: tuple[Field, ...] = ()
    model: type[BaseModel] = dataclass_field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        seen = set()
        for field in self.fields:
            if field.name in seen:
                raise ValueError(f"Duplicate field '{field.name}' in parameter schema")
            seen.add(field.name)
        object.__setattr__(self, "model", _compile(self.fields))

    @classmethod
    def of(cls, *fields: Field) -> "ParameterSchema":
        return cls(tuple(fields))

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(field.name for field in self.fields)

    def __contains__(self, name: object) -> bool:
        return name in self.names

    def field(self, name: str) -> Field:
        for field in self.fields:
            if field.name == name:
                return field
        raise KeyError(name)

    def validate(self, arguments: Optional[Mapping[str, Any]]) -> dict[str, Any]:
        """Validate raw tool arguments.

        Args:
            arguments: The mapping received from the host (None means "no args").

        Returns:
            A new dict holding only known, present (or defaulted) fields.

        Raises:
            ParameterValidationError: On the first field that breaks its contract.
        """
        if arguments is None:
            arguments = {}
        if not isinstance(arguments, Mapping):
            raise ParameterValidationError("<arguments>", "expected an object of named arguments")

        unknown = sorted(str(key) for key in arguments if key not in self)
        if unknown:
            logger.debug("Dropping unknown arguments: %s", ", ".join(unknown))

        present = {
            name: arguments[name]
            for name in self.names
            if arguments.get(name) is not None
        }
        try:
            validated = self.model.model_validate(present)
        except ValidationError as exc:
            first = exc.errors()[0]
            raise ParameterValidationError(_error_path(first["loc"]), _constraint(first)) from None

        # None only ever means "absent optional"; nested shapes have no nullable parts.
        return validated.model_dump(by_alias=True, exclude_none=True)

    def to_json_schema(self) -> dict[str, Any]:
        schema = _published(self.model.model_json_schema())
        schema.setdefault("required", [])
        return schema
