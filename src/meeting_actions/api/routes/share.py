"""Sharing endpoints: e-mail delivery, share links, quota."""

from typing import Any

import structlog
from fastapi import APIRouter, Body, Depends, HTTPException, Request
from pydantic import ValidationError

from meeting_actions.errors import (
    EmailQuotaExceededError,
    ServiceNotConfiguredError,
    ShareNotFoundError,
)
from meeting_actions.models.api import (
    EmailQuota,
    SharedActions,
    ShareEmailRequest,
    ShareEmailResponse,
    ShareLinkRequest,
    ShareLinkResponse,
)
from meeting_actions.services.transcripts import is_valid_email

from ..config import Settings, get_settings

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/api/share")


@router.post("/email", response_model=ShareEmailResponse)
async def share_by_email(request: Request, payload: dict[str, Any] = Body(...)):
    """E-mail the action list to every recipient, within the daily quota."""
    _require_list(payload, "actions", "Actions are required")
    _require_list(payload, "recipients", "At least one recipient email is required")
    body = _validate(ShareEmailRequest, payload)

    invalid = [r for r in body.recipients if not is_valid_email(r)]
    if invalid:
        raise HTTPException(
            status_code=400,
            detail=f"Invalid recipient email address: {', '.join(invalid)}",
        )

    try:
        result = await request.app.state.email.send_actions(
            body.actions,
            body.recipients,
            subject=body.subject,
            message=body.message,
        )
    except ServiceNotConfiguredError as e:
        raise HTTPException(status_code=503, detail=e.message)
    except EmailQuotaExceededError as e:
        raise HTTPException(status_code=429, detail=e.message)

    sent = [r.item_id for r in result.succeeded]
    failed = [r.item_id for r in result.failed]

    if result.all_failed:
        logger.error("share.email_failed", failures=result.to_dict()["errors"])
        raise HTTPException(status_code=502, detail="Failed to send email to any recipient")

    message = "Email sent successfully" if result.all_succeeded else "Email sent to some recipients"
    return ShareEmailResponse(
        success=result.all_succeeded,
        message=message,
        recipients=sent,
        failed=failed,
    )


@router.post("/link", response_model=ShareLinkResponse)
async def create_share_link(
    request: Request,
    payload: dict[str, Any] = Body(...),
    settings: Settings = Depends(get_settings),
):
    """Store the action list and return a link that serves it."""
    _require_list(payload, "actions", "Actions are required")
    body = _validate(ShareLinkRequest, payload)

    shared = request.app.state.shares.create(body.actions)
    link = f"{settings.BASE_URL.rstrip('/')}/api/share/{shared.share_id}"
    logger.info("share.link_created", share_id=shared.share_id, action_count=len(shared.actions))
    return ShareLinkResponse(share_id=shared.share_id, share_link=link)


@router.get("/email/quota", response_model=EmailQuota, response_model_exclude_none=True)
async def email_quota(request: Request):
    """Report today's e-mail usage."""
    email = request.app.state.email
    if not email.is_available:
        return EmailQuota(available=False, message="Email service is not configured")

    snapshot = email.quota.snapshot()
    return EmailQuota(
        available=True,
        limit=snapshot["limit"],
        used=snapshot["used"],
        remaining=snapshot["remaining"],
        reset_date=snapshot["reset_date"],
    )


@router.get("/{share_id}", response_model=SharedActions)
async def get_shared_actions(share_id: str, request: Request):
    """Serve a previously shared action list."""
    try:
        shared = request.app.state.shares.get(share_id)
    except ShareNotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)
    return SharedActions(actions=shared.actions, created_at=shared.created_at)


def _require_list(payload: dict[str, Any], key: str, detail: str) -> None:
    value = payload.get(key)
    if not isinstance(value, list) or not value:
        raise HTTPException(status_code=400, detail=detail)


def _validate(model, payload: dict[str, Any]):
    try:
        return model.model_validate(payload)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
