from __future__ import annotations

from typing import Optional, Type, TypeVar

from pydantic import BaseModel, Field, ValidationError

from .errors import ConfigCoercionError
from .models import ConfigurationEntry

T = TypeVar("T", bound=BaseModel)


class RuleConfigBase(BaseModel):
    """Typed view over a single configuration entry's opaque value."""


class LengthThresholdConfig(RuleConfigBase):
    # Character count; `len()` of the subject value is compared against it.
    threshold: int = Field(ge=0)


def get_rule_config(
    rule_id: str,
    entry: Optional[ConfigurationEntry],
    model: Type[T],
    *,
    field: str,
    default: T,
) -> T:
    """Coerce an entry's value into `model`.

    A missing entry or an unset value yields `default`. A value that cannot be
    coerced raises `ConfigCoercionError` instead of falling back.
    """
    if entry is None or entry.value is None:
        return default
    expected = model.model_fields[field].annotation
    expected_name = getattr(expected, "__name__", str(expected))
    # Text must be plain ASCII digits; pydantic alone also takes " 20 ", "20.0", "1_0", "+5".
    if isinstance(entry.value, str) and not _is_plain_digits(entry.value):
        raise ConfigCoercionError(rule_id, entry.value, f"non-negative {expected_name}")
    try:
        return model.model_validate({field: entry.value})
    except ValidationError as exc:
        raise ConfigCoercionError(rule_id, entry.value, f"non-negative {expected_name}") from exc


def _is_plain_digits(text: str) -> bool:
    return text.isascii() and text.isdecimal()
