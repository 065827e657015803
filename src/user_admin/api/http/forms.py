"""Decoding of submitted HTML forms into domain entities."""

from collections.abc import Mapping
from typing import Any

from src.user_admin.entities.core.user import User


def _text(form: Mapping[str, Any], key: str) -> str:
    value = form.get(key)
    if not isinstance(value, str):
        return ""
    return value.strip()


def _optional_text(form: Mapping[str, Any], key: str) -> str | None:
    return _text(form, key) or None


def user_from_form(form: Mapping[str, Any], user_id: int | None = None) -> User:
    """Build a User from submitted form fields.

    Every field is read explicitly: `name` defaults to an empty string and
    the contact fields to None when absent or blank. Any `id` in the form is
    ignored; the caller supplies the identity through `user_id`.
    """
    return User(
        id=user_id,
        name=_text(form, "name"),
        email=_optional_text(form, "email"),
        phone=_optional_text(form, "phone"),
        address=_optional_text(form, "address"),
    )
