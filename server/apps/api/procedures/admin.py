"""Administration procedures; every one requires the admin role."""

from typing import Any

from server.apps.api.rpc import CallContext, Router
from server.apps.api.serializers import (
    serialize_admin_log,
    serialize_announcement,
    serialize_user,
)
from server.apps.moderation import schemas
from server.apps.moderation.logic import admin_operations
from server.common.schemas import Pagination

router = Router('admin')


@router.query('getAnnouncements', schemas.AnnouncementPage)
def get_announcements(
    context: CallContext,
    data: schemas.AnnouncementPage,
) -> list[dict[str, Any]]:
    announcements = admin_operations.list_announcements(
        context.repos.moderation,
        context.require_user(),
        data.limit,
        data.offset,
    )
    return [serialize_announcement(item) for item in announcements]


@router.mutation('createAnnouncement', schemas.AnnouncementCreate)
def create_announcement(
    context: CallContext,
    data: schemas.AnnouncementCreate,
) -> dict[str, Any]:
    announcement = admin_operations.create_announcement(
        context.repos.moderation,
        context.require_user(),
        data.title,
        data.content,
    )
    return {'success': True, 'announcementId': announcement.id}


@router.mutation('updateAnnouncement', schemas.AnnouncementUpdate)
def update_announcement(
    context: CallContext,
    data: schemas.AnnouncementUpdate,
) -> dict[str, bool]:
    admin_operations.update_announcement(
        context.repos.moderation,
        context.require_user(),
        data.id,
        {'title': data.title, 'content': data.content},
    )
    return {'success': True}


@router.mutation('publishAnnouncement', schemas.AnnouncementRef)
def publish_announcement(
    context: CallContext,
    data: schemas.AnnouncementRef,
) -> dict[str, bool]:
    admin_operations.publish_announcement(
        context.repos.moderation,
        context.require_user(),
        data.id,
    )
    return {'success': True}


@router.mutation('deleteAnnouncement', schemas.AnnouncementRef)
def delete_announcement(
    context: CallContext,
    data: schemas.AnnouncementRef,
) -> dict[str, bool]:
    admin_operations.delete_announcement(
        context.repos.moderation,
        context.require_user(),
        data.id,
    )
    return {'success': True}


@router.query('getAllUsers', Pagination)
def get_all_users(context: CallContext, data: Pagination) -> list[dict[str, Any]]:
    users = admin_operations.list_users(
        context.repos.users,
        context.require_user(),
        data.limit,
        data.offset,
    )
    return [serialize_user(user) for user in users]


@router.mutation('disableUser', schemas.UserRef)
def disable_user(context: CallContext, data: schemas.UserRef) -> dict[str, bool]:
    admin_operations.disable_user(
        context.repos.moderation,
        context.repos.users,
        context.require_user(),
        data.user_id,
    )
    return {'success': True}


@router.mutation('enableUser', schemas.UserRef)
def enable_user(context: CallContext, data: schemas.UserRef) -> dict[str, bool]:
    admin_operations.enable_user(
        context.repos.moderation,
        context.repos.users,
        context.require_user(),
        data.user_id,
    )
    return {'success': True}


@router.query('getAdminLogs', Pagination)
def get_admin_logs(context: CallContext, data: Pagination) -> list[dict[str, Any]]:
    entries = admin_operations.list_admin_logs(
        context.repos.moderation,
        context.require_user(),
        data.limit,
        data.offset,
    )
    return [serialize_admin_log(entry) for entry in entries]
