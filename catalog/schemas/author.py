from collections.abc import Mapping
from datetime import date, datetime
import re
from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic_core import PydanticCustomError

from catalog.models.author import NAME_MAX_LENGTH

AUTHOR_FORM_FIELDS: tuple[str, ...] = (
    "first_name",
    "family_name",
    "date_of_birth",
    "date_of_death",
)

_CONTROL_CHARS = re.compile(r"[\x00-\x1f\x7f]")


def sanitize(value: str) -> str:
    """Trim surrounding whitespace and drop control characters."""
    return _CONTROL_CHARS.sub("", value.strip())


def parse_iso8601_date(value: str) -> date:
    """
    Accept a calendar date (YYYY-MM-DD) or a full ISO-8601 datetime
    and keep its date part. Raises ValueError otherwise.
    """
    value = value.strip()
    try:
        return date.fromisoformat(value)
    except ValueError:
        pass
    if "T" not in value and " " not in value:
        raise ValueError(f"not an ISO-8601 date: {value!r}")
    return datetime.fromisoformat(value).date()


def _required_name(value: Any, label: str) -> str:
    value = sanitize(value if isinstance(value, str) else "")
    if not value:
        raise PydanticCustomError("missing_name", f"{label} must be specified.")
    if len(value) > NAME_MAX_LENGTH:
        raise PydanticCustomError(
            "name_too_long",
            f"{label} must be {NAME_MAX_LENGTH} characters or fewer.",
        )
    return value


def _optional_date(value: Any, message: str) -> date | None:
    if value is None or isinstance(value, date):
        return value
    if not isinstance(value, str):
        raise PydanticCustomError("invalid_date", message)
    if not value.strip():
        return None
    try:
        return parse_iso8601_date(value)
    except ValueError:
        raise PydanticCustomError("invalid_date", message) from None


# Author form submitted on create and update
class AuthorForm(BaseModel):
    first_name: str = Field(default="", validate_default=True)
    family_name: str = Field(default="", validate_default=True)
    date_of_birth: date | None = None
    date_of_death: date | None = None

    model_config: ClassVar[ConfigDict] = ConfigDict(extra="ignore")

    @field_validator("first_name", mode="before")
    @classmethod
    def check_first_name(cls, v: Any) -> str:
        return _required_name(v, "First name")

    @field_validator("family_name", mode="before")
    @classmethod
    def check_family_name(cls, v: Any) -> str:
        return _required_name(v, "Last name")

    @field_validator("date_of_birth", mode="before")
    @classmethod
    def check_date_of_birth(cls, v: Any) -> date | None:
        return _optional_date(v, "Invalid date of birth.")

    @field_validator("date_of_death", mode="before")
    @classmethod
    def check_date_of_death(cls, v: Any) -> date | None:
        return _optional_date(v, "Invalid date of death.")


class FieldError(BaseModel):
    """One failed rule, keyed by the form field it belongs to."""
    param: str
    msg: str
    value: str | None = None


def validate_author_form(
    raw: Mapping[str, Any],
) -> tuple[AuthorForm | None, list[FieldError]]:
    """
    Run every author rule over a submitted form.
    Returns the typed form, or None with the field errors in form order.
    """
    data = {name: raw.get(name) for name in AUTHOR_FORM_FIELDS if raw.get(name) is not None}
    try:
        return AuthorForm.model_validate(data), []
    except ValidationError as exc:
        errors: list[FieldError] = []
        for err in exc.errors():
            param = str(err["loc"][0]) if err["loc"] else "__all__"
            value = raw.get(param)
            errors.append(
                FieldError(
                    param=param,
                    msg=err["msg"],
                    value=value if isinstance(value, str) else None,
                )
            )
        order = {name: i for i, name in enumerate(AUTHOR_FORM_FIELDS)}
        errors.sort(key=lambda e: order.get(e.param, len(order)))
        return None, errors
