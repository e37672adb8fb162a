"""
Contact form models.

``ContactSubmission`` is the validated form payload, ``ContactMessage`` is
what gets persisted in the message store.
"""

from pydantic import BaseModel, ConfigDict, Field, StringConstraints, field_serializer, field_validator
from pydantic import ValidationError as SchemaError
from typing import Annotated, Any, Dict, List, Union
from dataclasses import dataclass, field
from datetime import datetime, timezone

REQUIRED_FIELDS = ("name", "email", "project")

RequiredText = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]


class ContactSubmission(BaseModel):
    name: RequiredText
    email: RequiredText
    project: RequiredText

    @field_validator("name", "email", "project", mode="before")
    @classmethod
    def coerce_form_value(cls, value: Any) -> str:
        # Browser form semantics: falsy values, objects and arrays count as empty
        if not value or isinstance(value, (dict, list)):
            return ""
        if isinstance(value, bool):
            return "true"
        if isinstance(value, float) and value.is_integer():
            return str(int(value))
        return str(value)


class ContactMessage(BaseModel):
    """A stored contact submission"""
    model_config = ConfigDict(populate_by_name=True)

    name: str
    email: str
    project: str
    received_at: datetime = Field(alias="receivedAt")

    @field_serializer("received_at")
    def serialize_received_at(self, value: datetime) -> str:
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        return value.strftime("%Y-%m-%dT%H:%M:%S.") + f"{value.microsecond // 1000:03d}Z"

    @classmethod
    def from_submission(cls, submission: ContactSubmission, received_at: datetime = None) -> "ContactMessage":
        return cls(
            name=submission.name,
            email=submission.email,
            project=submission.project,
            received_at=received_at or datetime.now(timezone.utc),
        )

    def to_record(self) -> Dict[str, Any]:
        """JSON-ready dict using the public field names"""
        return self.model_dump(mode="json", by_alias=True)


@dataclass
class Accepted:
    submission: ContactSubmission
    ok: bool = True


@dataclass
class Rejected:
    missing_fields: List[str] = field(default_factory=list)
    error: str = "Please fill out all fields."
    ok: bool = False


SubmissionResult = Union[Accepted, Rejected]


def validate_submission(payload: Any) -> SubmissionResult:
    """
    Validate a decoded JSON payload against the contact form schema.

    Anything that is not a JSON object is treated as an object without fields.

    Returns:
        Accepted with the trimmed submission, or Rejected naming the missing fields
    """
    if not isinstance(payload, dict):
        payload = {}
    try:
        return Accepted(submission=ContactSubmission.model_validate(payload))
    except SchemaError as e:
        missing = []
        for error in e.errors():
            name = str(error["loc"][0]) if error["loc"] else ""
            if name in REQUIRED_FIELDS and name not in missing:
                missing.append(name)
        return Rejected(missing_fields=[f for f in REQUIRED_FIELDS if f in missing])
