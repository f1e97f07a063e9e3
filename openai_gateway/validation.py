"""Structural validation of domain records through pydantic rule models.

A rule model mirrors the attributes of a domain record and is validated with
``from_attributes=True``. pydantic reports every violation in one pass; they
are re-raised as a single ``InvalidFieldsError``.
"""

from collections.abc import Iterable, Mapping
from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, StringConstraints, ValidationError

from .errors import InvalidFieldsError

NonBlankText = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]


class RuleModel(BaseModel):
    model_config = ConfigDict(from_attributes=True, extra="ignore")


def field_name(loc: Iterable[str | int], root: str) -> str:
    """Render a pydantic location as ``messages[1].role``; an empty one is ``root``."""
    name = ""
    for part in loc:
        if isinstance(part, int):
            name += f"[{part}]"
        else:
            name += f".{part}" if name else part
    return name or root


def _message(error: Mapping[str, Any]) -> str:
    # ValueErrors raised by model validators keep their own text.
    if error["type"] == "value_error" and "error" in error.get("ctx", {}):
        return str(error["ctx"]["error"])
    return error["msg"]


def collect_field_errors(errors: Iterable[Mapping[str, Any]], root: str) -> dict[str, list[str]]:
    field_errors: dict[str, list[str]] = {}
    for error in errors:
        field_errors.setdefault(field_name(error["loc"], root), []).append(_message(error))
    return field_errors


def validate(entity: str, rules: type[RuleModel], value: Any, root: str) -> None:
    try:
        rules.model_validate(value, from_attributes=True)
    except ValidationError as error:
        raise InvalidFieldsError(entity, collect_field_errors(error.errors(), root)) from error
