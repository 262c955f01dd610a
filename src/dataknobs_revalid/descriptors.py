"""Structured error descriptors returned by failing rules.

Each rule kind has its own frozen dataclass carrying exactly the parameters
that rule was built with, plus the offending value. Descriptors are plain
data: the engine only checks whether a rule returned one, and callers branch
on ``descriptor.type`` to render messages.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from re import Pattern as RegexPattern
from typing import Any, ClassVar

from dataknobs_common import SerializationError


@dataclass(frozen=True)
class ErrorDescriptor:
    """Base class for all rule failures.

    Subclasses set the ``type`` tag and declare their rule-specific fields.
    The ``_keys`` map renames Python attribute names to the camelCase keys
    used by ``to_dict``.
    """

    type: ClassVar[str] = ""
    _keys: ClassVar[dict[str, str]] = {}
    _registry: ClassVar[dict[str, type[ErrorDescriptor]]] = {}

    value: Any

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        if cls.type:
            ErrorDescriptor._registry[cls.type] = cls

    def __bool__(self) -> bool:
        return True

    def to_dict(self) -> dict[str, Any]:
        """Render the descriptor as a ``{"type": ..., ...}`` mapping.

        Returns:
            Dictionary with the type tag, the rule parameters and the value
        """
        data: dict[str, Any] = {"type": self.type}
        for f in fields(self):
            data[self._keys.get(f.name, f.name)] = getattr(self, f.name)
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ErrorDescriptor:
        """Rebuild a descriptor from its ``to_dict`` form.

        Args:
            data: Mapping with a ``type`` tag and the rule's fields

        Returns:
            The matching ErrorDescriptor subclass instance

        Raises:
            SerializationError: If the type tag is unknown or fields are missing
        """
        tag = data.get("type")
        descriptor_cls = cls._registry.get(tag)  # type: ignore[arg-type]
        if descriptor_cls is None:
            raise SerializationError(
                f"Unknown error descriptor type: {tag!r}",
                context={"type": tag},
            )

        kwargs = {}
        for f in fields(descriptor_cls):
            key = descriptor_cls._keys.get(f.name, f.name)
            if key not in data:
                raise SerializationError(
                    f"Missing '{key}' for error descriptor type '{tag}'",
                    context={"type": tag, "key": key},
                )
            kwargs[f.name] = data[key]
        return descriptor_cls(**kwargs)


@dataclass(frozen=True)
class MinLengthError(ErrorDescriptor):
    type: ClassVar[str] = "minLength"
    _keys: ClassVar[dict[str, str]] = {"min_length": "minLength"}

    min_length: int = 0


@dataclass(frozen=True)
class MaxLengthError(ErrorDescriptor):
    type: ClassVar[str] = "maxLength"
    _keys: ClassVar[dict[str, str]] = {"max_length": "maxLength"}

    max_length: int = 0


@dataclass(frozen=True)
class MinError(ErrorDescriptor):
    type: ClassVar[str] = "min"

    min: float = 0


@dataclass(frozen=True)
class MaxError(ErrorDescriptor):
    type: ClassVar[str] = "max"

    max: float = 0


@dataclass(frozen=True)
class PatternError(ErrorDescriptor):
    """Value did not match ``pattern``; ``label`` is caller-supplied."""

    type: ClassVar[str] = "pattern"

    label: str | None = None
    pattern: RegexPattern[str] | None = None


@dataclass(frozen=True)
class EqualToError(ErrorDescriptor):
    type: ClassVar[str] = "equalTo"

    other: Any = None


@dataclass(frozen=True)
class OneOfError(ErrorDescriptor):
    type: ClassVar[str] = "oneOf"

    values: tuple[Any, ...] = ()


@dataclass(frozen=True)
class MatchesFieldError(ErrorDescriptor):
    """Value differs from the sibling field ``field_name`` (whose value is ``other``)."""

    type: ClassVar[str] = "matchesField"
    _keys: ClassVar[dict[str, str]] = {"field_name": "fieldName"}

    field_name: str = ""
    other: Any = None


DESCRIPTOR_TYPES: tuple[str, ...] = tuple(ErrorDescriptor._registry)
