"""Circle lifecycle and membership procedures."""

from typing import Any

from server.apps.api.rpc import CallContext, Router
from server.apps.api.serializers import (
    serialize_circle,
    serialize_file,
    serialize_member,
)
from server.apps.circles import schemas
from server.apps.circles.logic import circle_operations

router = Router('circles')


@router.mutation('create', schemas.CircleCreate)
def create(context: CallContext, data: schemas.CircleCreate) -> dict[str, int]:
    circle = circle_operations.create_circle(
        context.repos.circles,
        context.require_user(),
        name=data.name,
        description=data.description,
        is_public=data.is_public,
    )
    return {'circleId': circle.id}


@router.query('list')
def list_circles(context: CallContext, _: None) -> list[dict[str, Any]]:
    circles = circle_operations.list_user_circles(
        context.repos.circles,
        context.require_user(),
    )
    return [serialize_circle(circle) for circle in circles]


@router.query('listPublic', protected=False)
def list_public(context: CallContext, _: None) -> list[dict[str, Any]]:
    circles = circle_operations.list_public_circles(context.repos.circles)
    return [serialize_circle(circle) for circle in circles]


@router.query('searchByInvitationCode', schemas.InvitationCodeRef)
def search_by_invitation_code(
    context: CallContext,
    data: schemas.InvitationCodeRef,
) -> dict[str, Any]:
    context.require_user()
    circle = circle_operations.find_by_invitation_code(
        context.repos.circles,
        data.code,
    )
    return serialize_circle(circle, include_code=True)


@router.mutation('joinByInvitationCode', schemas.InvitationCodeRef)
def join_by_invitation_code(
    context: CallContext,
    data: schemas.InvitationCodeRef,
) -> dict[str, int]:
    circle = circle_operations.join_by_invitation_code(
        context.repos.circles,
        context.require_user(),
        data.code,
    )
    return {'circleId': circle.id}


@router.query('get', schemas.CircleRef)
def get(context: CallContext, data: schemas.CircleRef) -> dict[str, Any]:
    """Circle row with members, files and the caller's role."""
    detail = circle_operations.get_circle_detail(
        context.repos.circles,
        context.require_user(),
        data.circle_id,
    )
    return {
        **serialize_circle(detail.circle, include_code=True),
        'members': [serialize_member(member) for member in detail.members],
        'files': [
            serialize_file(file_instance, with_uploader=True)
            for file_instance in detail.files
        ],
        'userRole': detail.user_role,
    }


@router.mutation('update', schemas.CircleUpdate)
def update(context: CallContext, data: schemas.CircleUpdate) -> dict[str, bool]:
    # Only fields present in the payload are changed
    changes = {
        field: getattr(data, field)
        for field in ('name', 'description')
        if field in data.model_fields_set
    }
    circle_operations.update_circle(
        context.repos.circles,
        context.require_user(),
        data.circle_id,
        changes,
    )
    return {'success': True}


@router.mutation('delete', schemas.CircleRef)
def delete(context: CallContext, data: schemas.CircleRef) -> dict[str, bool]:
    circle_operations.delete_circle(
        context.repos.circles,
        context.require_user(),
        data.circle_id,
    )
    return {'success': True}


@router.mutation('addMember', schemas.MemberAdd)
def add_member(context: CallContext, data: schemas.MemberAdd) -> dict[str, bool]:
    circle_operations.add_member_by_email(
        context.repos.circles,
        context.require_user(),
        data.circle_id,
        data.user_email,
    )
    return {'success': True}


@router.mutation('join', schemas.CircleRef)
def join(context: CallContext, data: schemas.CircleRef) -> dict[str, bool]:
    circle_operations.join_circle(
        context.repos.circles,
        context.require_user(),
        data.circle_id,
    )
    return {'success': True}


@router.mutation('leave', schemas.CircleRef)
def leave(context: CallContext, data: schemas.CircleRef) -> dict[str, bool]:
    circle_operations.leave_circle(
        context.repos.circles,
        context.require_user(),
        data.circle_id,
    )
    return {'success': True}


@router.mutation('removeMember', schemas.MemberRemove)
def remove_member(
    context: CallContext,
    data: schemas.MemberRemove,
) -> dict[str, bool]:
    circle_operations.remove_member(
        context.repos.circles,
        context.require_user(),
        data.circle_id,
        data.user_id,
    )
    return {'success': True}
