"""Pydantic models shared across all codeproject modules.

The models fall into two groups:

**Credential models** -- built by the caller or from the token endpoint:
    :class:`Credentials`, :class:`UserCredential`, :class:`BearerToken`.

**Response models** -- shapes returned by the resource endpoints:
    :class:`Pagination`, :class:`PagedData`, :class:`ItemSummary`,
    :class:`NamedIdPair`, :class:`UserProfile`, :class:`Reputation`,
    :class:`ReputationType`, :class:`Notification` and
    :class:`NotificationList`.

The API speaks camelCase JSON. Response models map it onto snake_case
field names through an alias generator and ignore keys they do not know,
so new server-side fields never break deserialisation.
"""

from __future__ import annotations

import enum
from datetime import datetime, timezone
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator
from pydantic.alias_generators import to_camel


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _as_utc(value: datetime) -> datetime:
    """Return *value* as aware UTC. Naive values are taken as local time."""
    return value.astimezone(timezone.utc)


def _is_blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


# --- Credentials & tokens ---


class Credentials(BaseModel):
    """Client id and secret issued for an application.

    Both values must be non-empty and contain something other than
    whitespace. They are validated once and never change afterwards.
    """

    model_config = ConfigDict(frozen=True)

    client_id: str
    client_secret: str = Field(repr=False)

    @field_validator("client_id", "client_secret")
    @classmethod
    def _not_blank(cls, value: str, info: ValidationInfo) -> str:
        if _is_blank(value):
            raise ValueError(f"A valid {info.field_name.replace('_', ' ')} is required.")
        return value


class UserCredential(BaseModel):
    """End-user name and password for the OAuth2 password grant."""

    model_config = ConfigDict(frozen=True)

    username: str
    password: str = Field(repr=False)


class BearerToken(BaseModel):
    """A single access token, either a client token or a user token.

    Built from the token endpoint response (``access_token``,
    ``token_type``, ``expires_in``) and stamped with the moment it was
    received. A token is never updated in place; a refresh produces a new
    instance.

    Example::

        token = BearerToken(token="abc", expires_in=3600)
        token.is_valid()  # True
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    token: str = Field(default="", alias="access_token", repr=False)
    token_type: str = "bearer"
    expires_in: int = 0
    requested_at: datetime = Field(default_factory=_utcnow)

    @field_validator("token", "token_type", mode="before")
    @classmethod
    def _none_as_empty(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("requested_at")
    @classmethod
    def _requested_at_utc(cls, value: datetime) -> datetime:
        return _as_utc(value)

    def is_valid(self, now: Optional[datetime] = None) -> bool:
        """Return True when the token has contents and has not expired.

        Elapsed time is truncated to whole seconds and compared with a
        strict ``<``, so a token reports itself expired up to one second
        before the server would.

        Args:
            now: Reference time. Defaults to the current UTC time. A naive
                value is taken as local time.
        """
        if _is_blank(self.token):
            return False
        now = _as_utc(now) if now is not None else _utcnow()
        elapsed = int((now - self.requested_at).total_seconds())
        return elapsed < self.expires_in

    def authorization_header(self) -> str:
        """Return the value for the ``Authorization`` request header."""
        return f"Bearer {self.token}"


# --- Response models ---


class ApiModel(BaseModel):
    """Base for response models: camelCase aliases, unknown keys ignored."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        coerce_numbers_to_str=True,
        extra="ignore",
    )


class ForumDisplayMode(str, enum.Enum):
    """How forum messages are grouped. The value is used in request URLs."""

    MESSAGES = "Messages"
    THREADS = "Threads"


class QuestionMode(str, enum.Enum):
    """Question listing filter. The value is used in request URLs."""

    DEFAULT = "Default"
    UNANSWERED = "Unanswered"
    ACTIVE = "Active"
    NEW = "New"


class NamedIdPair(ApiModel):
    id: int = 0
    name: Optional[str] = None


class Pagination(ApiModel):
    """Paging information accompanying a page of items."""

    page: int = 0
    page_size: int = 0
    total_pages: int = 0
    total_items: int = 0


class ItemSummary(ApiModel):
    """A single entry of a paged listing (article, question, message, forum...).

    Message specific fields (``parent_id``, ``thread_id``,
    ``indent_level``) are zero for other item kinds.
    """

    id: Optional[str] = None
    title: Optional[str] = None
    authors: list[NamedIdPair] = Field(default_factory=list)
    summary: Optional[str] = None
    content_type: Optional[str] = None
    doc_type: Optional[NamedIdPair] = None
    categories: list[NamedIdPair] = Field(default_factory=list)
    tags: list[NamedIdPair] = Field(default_factory=list)
    license: Optional[NamedIdPair] = None
    created_date: Optional[datetime] = None
    modified_date: Optional[datetime] = None
    thread_editor: Optional[NamedIdPair] = None
    thread_modified_date: Optional[datetime] = None
    rating: float = 0.0
    votes: int = 0
    popularity: float = 0.0
    website_link: Optional[str] = None
    api_link: Optional[str] = None
    parent_id: int = 0
    thread_id: int = 0
    indent_level: int = 0

    @field_validator("authors", "categories", "tags", mode="before")
    @classmethod
    def _none_as_empty_list(cls, value: Any) -> Any:
        return [] if value is None else value


class PagedData(ApiModel):
    """A page of :class:`ItemSummary` objects plus its :class:`Pagination`."""

    pagination: Pagination = Field(default_factory=Pagination)
    items: list[ItemSummary] = Field(default_factory=list)

    @field_validator("items", mode="before")
    @classmethod
    def _none_as_empty_list(cls, value: Any) -> Any:
        return [] if value is None else value

    @classmethod
    def single_page(cls, items: list[ItemSummary]) -> PagedData:
        """Wrap *items* as page 1 of 1."""
        count = len(items)
        return cls(
            pagination=Pagination(page=1, page_size=count, total_pages=1, total_items=count),
            items=items,
        )


class UserProfile(ApiModel):
    id: int = 0
    user_name: Optional[str] = None
    display_name: Optional[str] = None
    avatar: Optional[str] = None
    email: Optional[str] = Field(default=None, alias="eMail")
    html_emails: bool = False
    country: Optional[str] = None
    home_page: Optional[str] = None
    code_project_member_id: int = 0
    member_profile_page_url: Optional[str] = None
    twitter_name: Optional[str] = None
    google_plus_profile: Optional[str] = None
    linked_in_profile_url: Optional[str] = None
    biography: Optional[str] = None
    company: Optional[str] = None
    job_title: Optional[str] = None


class ReputationType(ApiModel):
    name: Optional[str] = None
    points: int = 0
    level: Optional[str] = None
    designation: Optional[str] = None


class Reputation(ApiModel):
    total_points: int = 0
    reputation_types: list[ReputationType] = Field(default_factory=list)
    graph_url: Optional[str] = None


class Notification(ApiModel):
    id: int = 0
    object_type_name: Optional[str] = None
    object_id: int = 0
    subject: Optional[str] = None
    topic: Optional[str] = None
    notification_date: Optional[datetime] = None
    un_read: bool = False
    content: Optional[str] = None
    link: Optional[str] = None


class NotificationList(ApiModel):
    notifications: list[Notification] = Field(default_factory=list)
