"""Finalize-time validation of signer details and filled fields."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import date

from pydantic import BaseModel, Field, ValidationError, field_validator

from docsign.model.field import FieldKind, PlacedField

_EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


class SigningInputError(ValueError):
    """Raised when signing cannot start because user input is incomplete."""


class SignerDetails(BaseModel):
    name: str = Field(min_length=1)
    email: str = Field(pattern=_EMAIL_PATTERN)
    date: str = Field(default_factory=lambda: date.today().isoformat(), min_length=1)
    signature: str = ""

    @field_validator("name", "email", "date", mode="before")
    @classmethod
    def _strip(cls, value: object) -> object:
        return value.strip() if isinstance(value, str) else value


def _first_value(fields: Sequence[PlacedField], kind: FieldKind) -> str:
    for field in fields:
        if field.kind is kind and field.value:
            return field.value
    return ""


def signer_from_fields(fields: Sequence[PlacedField]) -> SignerDetails:
    """Collect signer details from the first filled field of each kind.

    Kinds without a placed field are left blank, so the summary page can
    still be produced for a partial set of fields.
    """
    return SignerDetails.model_construct(
        name=_first_value(fields, FieldKind.NAME),
        email=_first_value(fields, FieldKind.EMAIL),
        date=_first_value(fields, FieldKind.DATE),
        signature=_first_value(fields, FieldKind.SIGNATURE),
    )


def build_signer(name: str, email: str, signing_date: str, signature: str) -> SignerDetails:
    try:
        return SignerDetails(name=name, email=email, date=signing_date, signature=signature)
    except ValidationError as exc:
        problems = ", ".join(str(error["loc"][0]) for error in exc.errors())
        raise SigningInputError(f"Please check the following details: {problems}") from exc


def validate_for_finalize(
    fields: Sequence[PlacedField],
    signer: SignerDetails | None,
) -> SignerDetails:
    if not fields and signer is None:
        raise SigningInputError("Please add and fill some fields before downloading.")

    if any(not field.is_filled for field in fields):
        raise SigningInputError("Please fill in all fields before downloading.")

    return signer if signer is not None else signer_from_fields(fields)
