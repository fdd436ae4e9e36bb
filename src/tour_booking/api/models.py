"""Pydantic models for host shell request bodies."""

from pydantic import BaseModel, Field

FORM_FIELD_ALIASES = {
    "name": "full_name",
    "fullName": "full_name",
    "mobile": "mobile_number",
    "mobileNumber": "mobile_number",
    "numberOfPeople": "party_size",
    "partySize": "party_size",
}


class LoginForm(BaseModel):
    """Login form payload."""

    email: str
    password: str


class RegisterForm(BaseModel):
    """Registration form payload."""

    name: str
    email: str
    password: str


class FieldUpdate(BaseModel):
    """One or more booking form edits, keyed by field name."""

    fields: dict[str, str | int | None] = Field(min_length=1)

    def normalized(self) -> list[tuple[str, str | int | None]]:
        """Return edits with form field names mapped to draft field names."""
        return [
            (FORM_FIELD_ALIASES.get(name, name), value)
            for name, value in self.fields.items()
        ]


class PaymentChoice(BaseModel):
    """Selected payment method label."""

    method: str
