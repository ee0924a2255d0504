"""
Notifications API endpoints.

Presentation-facing surface of the notification service: permission,
pending set, scheduling, cancellation and the transient error message.
"""

from typing import Any, Optional

from fastapi import APIRouter, HTTPException, status
from pydantic import BaseModel, Field

from local_notifications.api.deps import NotificationServiceDep
from local_notifications.core.exceptions import (
    AuthorizationDeniedError,
    InvalidDateError,
    NotificationError,
)
from local_notifications.models.enums import NotificationActionIdentifier
from local_notifications.models.notification import (
    NotificationRequest,
    NotificationResponseOutcome,
)
from local_notifications.services.notification_service import NotificationService

router = APIRouter()


# ===========================================
# Request / Response Models
# ===========================================


class AuthorizationStatusResponse(BaseModel):
    """Current permission state."""

    authorization_status: str
    can_schedule: bool

    @classmethod
    def from_service(cls, service: NotificationService) -> "AuthorizationStatusResponse":
        return cls(
            authorization_status=service.authorization_status.value,
            can_schedule=service.authorization_status.can_schedule,
        )


class AuthorizationRequestResponse(AuthorizationStatusResponse):
    """Outcome of a permission prompt."""

    granted: bool


class PendingNotificationsResponse(BaseModel):
    """Pending notifications, ascending by fire date."""

    notifications: list[NotificationRequest]
    total: int

    @classmethod
    def from_service(cls, service: NotificationService) -> "PendingNotificationsResponse":
        pending = service.pending_notifications
        return cls(notifications=pending, total=len(pending))


class LastErrorResponse(BaseModel):
    """Transient error message (None once cleared)."""

    message: Optional[str]


class NotificationInteraction(BaseModel):
    """User interaction with a delivered notification."""

    identifier: str
    action_identifier: str = NotificationActionIdentifier.DEFAULT.value
    user_info: dict[str, Any] = Field(default_factory=dict)


def _to_http_exception(error: NotificationError) -> HTTPException:
    if isinstance(error, AuthorizationDeniedError):
        code = status.HTTP_403_FORBIDDEN
    elif isinstance(error, InvalidDateError):
        code = status.HTTP_400_BAD_REQUEST
    else:
        code = status.HTTP_502_BAD_GATEWAY
    return HTTPException(status_code=code, detail=error.message)


# ===========================================
# Authorization
# ===========================================


@router.get("/status", response_model=AuthorizationStatusResponse)
async def get_authorization_status(service: NotificationServiceDep):
    """
    Get the cached permission status.
    """
    return AuthorizationStatusResponse.from_service(service)


@router.post("/status/refresh", response_model=AuthorizationStatusResponse)
async def refresh_authorization_status(service: NotificationServiceDep):
    """
    Re-query the permission status (also reloads the pending set).
    """
    await service.check_authorization_status()
    return AuthorizationStatusResponse.from_service(service)


@router.post("/authorization", response_model=AuthorizationRequestResponse)
async def request_authorization(service: NotificationServiceDep):
    """
    Ask the user for permission to show notifications.
    """
    granted = await service.request_authorization()
    return AuthorizationRequestResponse(
        granted=granted,
        authorization_status=service.authorization_status.value,
        can_schedule=service.authorization_status.can_schedule,
    )


# ===========================================
# Pending notifications
# ===========================================


@router.get("/pending", response_model=PendingNotificationsResponse)
async def list_pending_notifications(service: NotificationServiceDep):
    """
    List pending notifications as last loaded.
    """
    return PendingNotificationsResponse.from_service(service)


@router.post("/pending/reload", response_model=PendingNotificationsResponse)
async def reload_pending_notifications(service: NotificationServiceDep):
    """
    Reload pending notifications from the backend.
    """
    await service.load_pending_notifications()
    return PendingNotificationsResponse.from_service(service)


@router.post(
    "",
    response_model=PendingNotificationsResponse,
    status_code=status.HTTP_201_CREATED,
)
async def schedule_notification(
    request: NotificationRequest,
    service: NotificationServiceDep,
):
    """
    Schedule a notification.
    """
    try:
        await service.schedule_notification(request)
    except NotificationError as e:
        raise _to_http_exception(e)
    return PendingNotificationsResponse.from_service(service)


@router.delete("/{notification_id}", status_code=status.HTTP_204_NO_CONTENT)
async def cancel_notification(
    notification_id: str,
    service: NotificationServiceDep,
):
    """
    Cancel a pending notification. Unknown ids succeed.
    """
    try:
        await service.cancel_notification(notification_id)
    except NotificationError as e:
        raise _to_http_exception(e)


@router.delete("", status_code=status.HTTP_204_NO_CONTENT)
async def cancel_all_notifications(service: NotificationServiceDep):
    """
    Cancel all pending notifications.
    """
    try:
        await service.cancel_all_notifications()
    except NotificationError as e:
        raise _to_http_exception(e)


# ===========================================
# Errors / interactions
# ===========================================


@router.get("/error", response_model=LastErrorResponse)
async def get_last_error(service: NotificationServiceDep):
    """
    Get the transient error message, if one is showing.
    """
    return LastErrorResponse(message=service.last_error)


@router.post("/responses", response_model=NotificationResponseOutcome)
async def handle_notification_response(
    interaction: NotificationInteraction,
    service: NotificationServiceDep,
):
    """
    Report a tap on a delivered notification; returns its deep link, if any.
    """
    return service.handle_notification_response(
        identifier=interaction.identifier,
        action_identifier=interaction.action_identifier,
        user_info=interaction.user_info,
    )
