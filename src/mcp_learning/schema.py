"""Argument shapes and validation for capability handlers."""

import inspect
import math
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import (
    Any,
    Callable,
    Dict,
    Iterable,
    Iterator,
    List,
    Literal,
    Mapping,
    Optional,
    Sequence,
    Tuple,
    Union,
    get_args,
    get_origin,
)

_MISSING = object()


MISSING_FIELD = "missing_field"
TYPE_MISMATCH = "type_mismatch"
INVALID_ENUM_VALUE = "invalid_enum_value"
OUT_OF_RANGE = "out_of_range"


def _type_name(value: Any) -> str:
    """Name a runtime value the way JSON Schema names types."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, int):
        return "integer"
    if isinstance(value, float):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, (list, tuple)):
        return "array"
    if isinstance(value, dict):
        return "object"
    return type(value).__name__


@dataclass(frozen=True)
class ArgumentError:
    """Structured reason a raw argument mapping was rejected."""

    reason: str
    field: str
    expected: Optional[str] = None
    actual: Optional[str] = None
    allowed: Optional[Tuple[str, ...]] = None
    minimum: Optional[float] = None
    maximum: Optional[float] = None

    @property
    def message(self) -> str:
        if self.reason == MISSING_FIELD:
            return f"Missing required argument: {self.field}"
        if self.reason == TYPE_MISMATCH:
            return (
                f"Argument {self.field}: expected {self.expected}, "
                f"got {self.actual}"
            )
        if self.reason == INVALID_ENUM_VALUE:
            allowed = ", ".join(self.allowed or ())
            return f"Argument {self.field}: must be one of [{allowed}]"
        if self.reason == OUT_OF_RANGE:
            low = "-inf" if self.minimum is None else _format_bound(self.minimum)
            high = "inf" if self.maximum is None else _format_bound(self.maximum)
            subject = "length" if self.expected == "length" else "value"
            return f"Argument {self.field}: {subject} must be between {low} and {high}"
        return f"Argument {self.field}: invalid"

    def to_dict(self) -> Dict[str, Any]:
        """Structured form, omitting fields that do not apply."""
        result: Dict[str, Any] = {"reason": self.reason, "field": self.field}
        for key in ("expected", "actual", "minimum", "maximum"):
            value = getattr(self, key)
            if value is not None:
                result[key] = value
        if self.allowed is not None:
            result["allowed"] = list(self.allowed)
        return result


def _format_bound(value: float) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


class _Invalid(Exception):
    """Internal signal carrying an ArgumentError out of a field check."""

    def __init__(self, error: ArgumentError):
        super().__init__(error.message)
        self.error = error


@dataclass(frozen=True)
class Field(ABC):
    """Base for the closed set of argument field kinds."""

    name: str
    description: str = ""
    required: bool = True
    default: Any = _MISSING

    json_type = "string"

    @property
    def optional(self) -> bool:
        return not self.required or self.has_default

    @property
    def has_default(self) -> bool:
        return self.default is not _MISSING

    @abstractmethod
    def check(self, value: Any) -> Any:
        """Return the coerced value or raise _Invalid."""

    def mismatch(self, expected: str, value: Any) -> "_Invalid":
        return _Invalid(ArgumentError(
            TYPE_MISMATCH, self.name, expected=expected, actual=_type_name(value)
        ))

    def to_json_schema(self) -> Dict[str, Any]:
        schema: Dict[str, Any] = {"type": self.json_type}
        if self.description:
            schema["description"] = self.description
        if self.has_default:
            schema["default"] = self.default
        return schema


@dataclass(frozen=True)
class StringField(Field):
    min_length: Optional[int] = None

    json_type = "string"

    def check(self, value: Any) -> Any:
        if not isinstance(value, str):
            raise self.mismatch("string", value)
        if self.min_length is not None and len(value) < self.min_length:
            raise _Invalid(ArgumentError(
                OUT_OF_RANGE, self.name, expected="length",
                minimum=self.min_length,
            ))
        return value

    def to_json_schema(self) -> Dict[str, Any]:
        schema = super().to_json_schema()
        if self.min_length is not None:
            schema["minLength"] = self.min_length
        return schema


@dataclass(frozen=True)
class NumberField(Field):
    minimum: Optional[float] = None
    maximum: Optional[float] = None
    integer: bool = False

    @property
    def json_type(self) -> str:  # type: ignore[override]
        return "integer" if self.integer else "number"

    def check(self, value: Any) -> Any:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise self.mismatch(self.json_type, value)
        if isinstance(value, float):
            if not math.isfinite(value):
                raise self.mismatch(self.json_type, value)
            if self.integer:
                if not value.is_integer():
                    raise self.mismatch("integer", value)
                value = int(value)
        too_low = self.minimum is not None and value < self.minimum
        too_high = self.maximum is not None and value > self.maximum
        if too_low or too_high:
            raise _Invalid(ArgumentError(
                OUT_OF_RANGE, self.name,
                minimum=self.minimum, maximum=self.maximum,
            ))
        return value

    def to_json_schema(self) -> Dict[str, Any]:
        schema = super().to_json_schema()
        if self.minimum is not None:
            schema["minimum"] = self.minimum
        if self.maximum is not None:
            schema["maximum"] = self.maximum
        return schema


@dataclass(frozen=True)
class BooleanField(Field):
    json_type = "boolean"

    def check(self, value: Any) -> Any:
        if not isinstance(value, bool):
            raise self.mismatch("boolean", value)
        return value


@dataclass(frozen=True)
class EnumField(Field):
    choices: Tuple[str, ...] = ()

    json_type = "string"

    def __post_init__(self):
        # choices may be passed as a list
        object.__setattr__(self, "choices", tuple(self.choices))

    def check(self, value: Any) -> Any:
        if not isinstance(value, str):
            raise self.mismatch("string", value)
        if value not in self.choices:
            raise _Invalid(ArgumentError(
                INVALID_ENUM_VALUE, self.name, allowed=self.choices
            ))
        return value

    def to_json_schema(self) -> Dict[str, Any]:
        schema = super().to_json_schema()
        schema["enum"] = list(self.choices)
        return schema


class ArgumentShape:
    """Ordered set of named argument fields.

    Field names are unique within a shape. Shapes are immutable once built
    and are shared by reference between capability records.
    """

    def __init__(self, fields: Iterable[Field] = ()):
        """Initialize a shape.

        Args:
            fields: Field declarations, in the order they should be listed

        Raises:
            ValueError: If two fields share a name
        """
        self._fields: Tuple[Field, ...] = tuple(fields)
        names = [f.name for f in self._fields]
        duplicates = sorted({n for n in names if names.count(n) > 1})
        if duplicates:
            raise ValueError(f"Duplicate argument names: {', '.join(duplicates)}")

    @classmethod
    def from_function(cls, func: Callable) -> "ArgumentShape":
        """Derive a shape from a handler's signature.

        Args:
            func: Function to analyze

        Returns:
            ArgumentShape with one field per parameter
        """
        sig = inspect.signature(func)
        fields = []

        for param_name, param in sig.parameters.items():
            if param_name == 'self':
                continue
            if param.kind in (param.VAR_POSITIONAL, param.VAR_KEYWORD):
                continue

            annotation = param.annotation
            kwargs: Dict[str, Any] = {}
            if param.default is not inspect.Parameter.empty:
                kwargs["required"] = False
                if param.default is not None:
                    kwargs["default"] = param.default
            fields.append(python_type_to_field(param_name, annotation, **kwargs))

        return cls(fields)

    @property
    def fields(self) -> Tuple[Field, ...]:
        return self._fields

    def __iter__(self) -> Iterator[Field]:
        return iter(self._fields)

    def __len__(self) -> int:
        return len(self._fields)

    def __contains__(self, name: object) -> bool:
        return any(f.name == name for f in self._fields)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ArgumentShape):
            return NotImplemented
        return self._fields == other._fields

    def __hash__(self) -> int:
        return hash(self._fields)

    def __repr__(self) -> str:
        return f"ArgumentShape({[f.name for f in self._fields]!r})"

    def to_json_schema(self) -> Dict[str, Any]:
        """Convert the shape to a JSON Schema object.

        Returns:
            JSON Schema for the argument mapping
        """
        properties = {f.name: f.to_json_schema() for f in self._fields}
        required = [f.name for f in self._fields if not f.optional]

        schema: Dict[str, Any] = {
            "type": "object",
            "properties": properties
        }

        if required:
            schema["required"] = required

        return schema

    def summary(self) -> List[Dict[str, Any]]:
        """Project the shape to a prompt-style argument list."""
        return [
            {
                "name": f.name,
                "description": f.description,
                "required": not f.optional,
            }
            for f in self._fields
        ]


def python_type_to_field(name: str, python_type: Any, **kwargs: Any) -> Field:
    """Convert a Python annotation to a field declaration.

    Args:
        name: Field name
        python_type: Annotation to convert
        **kwargs: Extra field options (required, default, description)

    Returns:
        Field matching the annotation; unannotated parameters become strings
    """
    origin = get_origin(python_type)
    args = get_args(python_type)

    # Optional[T] is T with required=False
    if origin is Union and type(None) in args:
        non_none_args = [arg for arg in args if arg is not type(None)]
        if len(non_none_args) == 1:
            kwargs["required"] = False
            return python_type_to_field(name, non_none_args[0], **kwargs)

    if origin is Literal:
        return EnumField(name, choices=tuple(str(a) for a in args), **kwargs)

    if python_type is bool:
        return BooleanField(name, **kwargs)
    elif python_type is int:
        return NumberField(name, integer=True, **kwargs)
    elif python_type is float:
        return NumberField(name, **kwargs)

    return StringField(name, **kwargs)


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of validating a raw argument mapping."""

    arguments: Optional[Dict[str, Any]] = None
    error: Optional[ArgumentError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def validate_arguments(
    shape: Union[ArgumentShape, Sequence[Field]],
    raw: Optional[Mapping[str, Any]],
) -> ValidationResult:
    """Validate a raw argument mapping against a shape.

    Unknown keys are ignored. Missing optional fields take their default,
    or are left out when they have none.

    Args:
        shape: Declared argument shape
        raw: Raw arguments from the request; None is treated as empty

    Returns:
        ValidationResult holding either the validated mapping or the first
        field-level error in declaration order
    """
    if raw is None:
        raw = {}
    if not isinstance(raw, Mapping):
        return ValidationResult(error=ArgumentError(
            TYPE_MISMATCH, "arguments", expected="object", actual=_type_name(raw)
        ))

    validated: Dict[str, Any] = {}
    for f in shape:
        value = raw.get(f.name, _MISSING)
        if value is _MISSING or (value is None and f.optional):
            if f.has_default:
                validated[f.name] = f.default
            elif f.required:
                return ValidationResult(error=ArgumentError(MISSING_FIELD, f.name))
            continue
        try:
            validated[f.name] = f.check(value)
        except _Invalid as e:
            return ValidationResult(error=e.error)

    return ValidationResult(arguments=validated)
