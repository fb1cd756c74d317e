"""
Prospector - Data models.

Prospects and generated emails are immutable snapshots: an update replaces the
stored record wholesale, it never edits one in place.
"""

import json
from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError, field_validator

from prospector.db.connection import gen_id


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _text(value):
    # Models sometimes emit phone numbers and similar fields as bare numbers
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return value


# ─── PROSPECTS ───────────────────────────────────────────────

class Contact(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    title: str
    email: str
    phone: str

    @field_validator("name", "title", "email", "phone", mode="before")
    @classmethod
    def _coerce_text(cls, v):
        return _text(v)


class Rating(BaseModel):
    model_config = ConfigDict(frozen=True)

    score: float = 0
    reviews: int = Field(default=0, validation_alias=AliasChoices("reviews", "review_count"))


class Prospect(BaseModel):
    """A business lead. Frozen: the id never changes once created."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=lambda: gen_id("prs"), min_length=1)
    company_name: str = Field(min_length=1)
    website: str
    contact: Contact
    location: str
    sector: str
    address: str
    needs_analysis: str
    hire_probability: int = Field(ge=0, le=100)
    rating: Optional[Rating] = None
    created_at: datetime = Field(default_factory=utc_now)

    @field_validator("id", "website", "location", "sector", "address",
                     "needs_analysis", mode="before")
    @classmethod
    def _coerce_text(cls, v):
        return _text(v)

    @field_validator("rating", mode="before")
    @classmethod
    def _drop_unreadable_rating(cls, v):
        # Rating is optional: a malformed one is discarded, it never rejects the prospect
        if v is None or isinstance(v, Rating):
            return v
        try:
            return Rating.model_validate(v)
        except ValidationError:
            return None

    @field_validator("company_name")
    @classmethod
    def _company_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("company_name must not be blank")
        return v

    @field_validator("created_at")
    @classmethod
    def _created_at_utc(cls, v: datetime) -> datetime:
        return _as_utc(v)

    @property
    def display_name(self) -> str:
        return self.company_name


# ─── SERVICES & PROFILE ──────────────────────────────────────

class Service(BaseModel):
    id: str = Field(default_factory=lambda: gen_id("svc"))
    name: str = Field(min_length=1)
    description: str = Field(min_length=1)
    website: Optional[str] = None


class UserProfile(BaseModel):
    name: str = ""
    email: str = ""
    website: str = ""

    @property
    def is_complete(self) -> bool:
        """Generation is only allowed once the sender has a name."""
        return bool(self.name.strip())


# ─── EMAILS ──────────────────────────────────────────────────

class EmailDraft(BaseModel):
    """A validated subject/body pair as returned by the model."""

    model_config = ConfigDict(frozen=True)

    subject: str = Field(validation_alias=AliasChoices("subject", "asunto"))
    body: str = Field(validation_alias=AliasChoices("body", "cuerpo"))

    @field_validator("subject", "body")
    @classmethod
    def _not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("must be a non-empty string")
        return v.strip()

    def serialize(self) -> str:
        return json.dumps({"subject": self.subject, "body": self.body}, ensure_ascii=False)


class GeneratedEmail(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=lambda: gen_id("eml"))
    recipient: Prospect
    service: Service
    body: str
    created_at: datetime = Field(default_factory=utc_now)

    @classmethod
    def from_draft(cls, recipient: Prospect, service: Service, draft: EmailDraft,
                   created_at: datetime = None) -> "GeneratedEmail":
        return cls(
            recipient=recipient,
            service=service,
            body=draft.serialize(),
            created_at=created_at or utc_now(),
        )

    @property
    def draft(self) -> EmailDraft:
        return EmailDraft.model_validate_json(self.body)


# ─── CALL LOG ────────────────────────────────────────────────

class CallOutcome(str, Enum):
    INTERESTED = "interested"
    NOT_INTERESTED = "not_interested"
    VOICEMAIL = "voicemail"
    FOLLOW_UP = "follow_up"
    CONTACTED = "contacted"
    OTHER = "other"


class CallLog(BaseModel):
    id: str = Field(default_factory=lambda: gen_id("call"))
    prospect_id: str = Field(min_length=1)
    called_at: datetime = Field(default_factory=utc_now)
    outcome: CallOutcome
    notes: str = ""

    @field_validator("called_at")
    @classmethod
    def _called_at_utc(cls, v: datetime) -> datetime:
        return _as_utc(v)
