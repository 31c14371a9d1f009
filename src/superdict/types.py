"""Type capabilities: the per-attribute validation/coercion contract and its pydantic adapter."""

from __future__ import annotations

import copy
from collections.abc import Callable
from typing import Any, Final, Optional, Protocol, runtime_checkable

from pydantic import TypeAdapter, ValidationError


class _Undefined:
    """Marker for "no value supplied", distinct from ``None``."""

    __slots__ = ()
    _instance: _Undefined | None = None

    def __new__(cls) -> _Undefined:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNDEFINED"

    def __bool__(self) -> bool:
        return False

    def __copy__(self) -> _Undefined:
        return self

    def __deepcopy__(self, memo: dict[int, object]) -> _Undefined:
        return self

    def __reduce__(self) -> str:
        return "UNDEFINED"


UNDEFINED: Final[_Undefined] = _Undefined()


class ConstraintError(ValueError):
    """Raised by a type capability when a value violates its constraints."""

    def __init__(
        self,
        message: str,
        *,
        value: object = UNDEFINED,
        errors: tuple[dict[str, Any], ...] = (),
    ) -> None:
        self.value = value
        self.errors = errors
        super().__init__(message)


@runtime_checkable
class TypeCapability(Protocol):
    """Opaque validator/coercer consulted on every write of an attribute."""

    def has_default(self) -> bool: ...

    def coerce(self, value: object) -> object: ...

    def coerce_undefined(self) -> object: ...


class PydanticType:
    """``TypeCapability`` backed by a ``pydantic.TypeAdapter``.

    ``default`` may be a literal (deep-copied on every use) or a zero-argument
    factory. ``strict`` is forwarded to pydantic validation.

    >>> PydanticType(int).coerce("3")
    3
    >>> PydanticType(str, default="Yoda").coerce_undefined()
    'Yoda'
    """

    __slots__ = ("_adapter", "_annotation", "_default", "_strict")

    def __init__(
        self,
        annotation: Any,
        *,
        default: object = UNDEFINED,
        strict: bool | None = None,
    ) -> None:
        self._annotation = annotation
        self._adapter: TypeAdapter[Any] = TypeAdapter(annotation)
        self._default = default
        self._strict = strict

    @property
    def annotation(self) -> Any:
        return self._annotation

    def has_default(self) -> bool:
        return self._default is not UNDEFINED

    def coerce(self, value: object) -> object:
        if value is UNDEFINED:
            return self.coerce_undefined()
        try:
            return self._adapter.validate_python(value, strict=self._strict)
        except ValidationError as exc:
            details = tuple(exc.errors(include_url=False))
            rendered = "; ".join(str(item.get("msg", "")) for item in details) or str(exc)
            raise ConstraintError(
                f"{value!r} violates constraints of {self!r}: {rendered}",
                value=value,
                errors=details,
            ) from exc

    def coerce_undefined(self) -> object:
        if not self.has_default():
            raise ConstraintError(f"{self!r} has no default for an undefined value")
        default = self._default
        if callable(default):
            produced = default()
        else:
            produced = copy.deepcopy(default)
        return self.coerce(produced)

    def optional(self) -> PydanticType:
        """Return a capability that additionally accepts ``None``."""

        return PydanticType(
            Optional[self._annotation],  # noqa: UP007
            default=self._default,
            strict=self._strict,
        )

    def with_default(self, default: object | Callable[[], object]) -> PydanticType:
        return PydanticType(self._annotation, default=default, strict=self._strict)

    def __call__(self, value: object) -> object:
        return self.coerce(value)

    def __repr__(self) -> str:
        name = getattr(self._annotation, "__name__", None) or repr(self._annotation)
        parts = [name]
        if self.has_default():
            parts.append(f"default={self._default!r}")
        if self._strict is not None:
            parts.append(f"strict={self._strict}")
        return f"PydanticType({', '.join(parts)})"


__all__ = [
    "UNDEFINED",
    "ConstraintError",
    "PydanticType",
    "TypeCapability",
]
