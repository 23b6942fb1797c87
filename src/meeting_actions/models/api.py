"""
Request and response payloads for the HTTP API.

Wire field names follow the camelCase used by the web client
(``actionCount``, ``shareId``); Python attributes are snake_case.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from .action_item import ActionItem


class _CamelModel(BaseModel):
    """Accepts either the alias or the attribute name on input."""

    model_config = ConfigDict(populate_by_name=True)


class ExtractRequest(BaseModel):
    """Body of POST /api/actions/extract."""

    text: str = Field(..., description='Transcript text to extract action items from')


class ExtractResponse(_CamelModel):
    """Action items extracted from submitted text."""

    success: bool = True
    actions: list[ActionItem] = Field(default_factory=list)
    action_count: int = Field(default=0, alias='actionCount')

    @classmethod
    def from_actions(cls, actions: list[ActionItem]) -> 'ExtractResponse':
        return cls(actions=actions, action_count=len(actions))


class UploadResponse(ExtractResponse):
    """Action items extracted from an uploaded transcript or recording."""

    transcript: str = Field(..., description='Text read from the file or returned by transcription')

    @classmethod
    def from_transcript(cls, transcript: str, actions: list[ActionItem]) -> 'UploadResponse':
        return cls(transcript=transcript, actions=actions, action_count=len(actions))


class ShareEmailRequest(BaseModel):
    """Body of POST /api/share/email."""

    actions: list[ActionItem] = Field(..., min_length=1)
    recipients: list[str] = Field(..., min_length=1)
    subject: str | None = None
    message: str | None = None


class ShareEmailResponse(BaseModel):
    """Outcome of sending action items by e-mail."""

    success: bool
    message: str
    recipients: list[str]
    failed: list[str] = Field(default_factory=list)


class ShareLinkRequest(BaseModel):
    """Body of POST /api/share/link."""

    actions: list[ActionItem] = Field(..., min_length=1)


class ShareLinkResponse(_CamelModel):
    """A newly created share link."""

    success: bool = True
    share_id: str = Field(..., alias='shareId')
    share_link: str = Field(..., alias='shareLink')


class SharedActions(_CamelModel):
    """Action items stored behind a share link."""

    success: bool = True
    actions: list[ActionItem]
    created_at: datetime = Field(..., alias='createdAt')


class EmailQuota(_CamelModel):
    """Daily e-mail quota snapshot."""

    available: bool
    limit: int | None = None
    used: int | None = None
    remaining: int | None = None
    reset_date: str | None = Field(default=None, alias='resetDate')
    message: str | None = None
