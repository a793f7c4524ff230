"""Business logic for circle lifecycle and membership."""

import logging
import secrets
import string
from dataclasses import dataclass
from typing import Final, final

from django.conf import settings
from django.db import IntegrityError

from server.apps.accounts.models import User
from server.apps.circles.exceptions import InvitationCodeAllocationError
from server.apps.circles.logic.access import require_circle, require_owner
from server.apps.circles.models import (
    Circle,
    CircleActivityLog,
    CircleMember,
    File,
)
from server.apps.circles.repository import CircleRepository
from server.common.exceptions import (
    BadRequestError,
    ForbiddenError,
    NotFoundError,
    NotImplementedFeatureError,
)

_INVITATION_ALPHABET: Final = string.ascii_uppercase + string.digits

logger = logging.getLogger(__name__)


@final
@dataclass(frozen=True)
class CircleDetail:
    """Circle with its members, files and the caller's role."""

    circle: Circle
    members: list[CircleMember]
    files: list[File]
    user_role: str


def generate_invitation_code() -> str:
    """Generate a random invitation code.

    Returns:
        Code of ``CIRCLES_INVITATION_CODE_LENGTH`` chars from A-Z and 0-9.
    """
    length = settings.CIRCLES_INVITATION_CODE_LENGTH
    return ''.join(secrets.choice(_INVITATION_ALPHABET) for _ in range(length))


def _insert_circle_with_owner(
    circles: CircleRepository,
    user: User,
    name: str,
    description: str | None,
    invitation_code: str | None,
) -> Circle:
    with circles.atomic():
        circle = circles.create_circle(
            name=name,
            description=description,
            creator_id=user.id,
            invitation_code=invitation_code,
        )
        circles.add_member(circle.id, user.id, CircleMember.Role.OWNER)
    return circle


def create_circle(
    circles: CircleRepository,
    user: User,
    name: str,
    description: str | None = None,
    is_public: bool = True,
) -> Circle:
    """Create a circle owned by the caller.

    The circle and the owner membership are written in one transaction.
    Private circles get a fresh invitation code; on a code collision the
    insert is retried with a new code.

    Args:
        circles: Circle repository.
        user: Creator, becomes the owner.
        name: Circle name.
        description: Optional description, empty means none.
        is_public: Whether the circle is discoverable and freely joinable.

    Returns:
        Created circle.

    Raises:
        InvitationCodeAllocationError: If every attempted code collided.
    """
    description = description or None
    if is_public:
        circle = _insert_circle_with_owner(circles, user, name, description, None)
        logger.info('Circle created: %s (ID: %d)', name, circle.id)
        return circle

    attempts = settings.CIRCLES_INVITATION_CODE_ATTEMPTS
    for attempt in range(1, attempts + 1):
        code = generate_invitation_code()
        try:
            circle = _insert_circle_with_owner(
                circles,
                user,
                name,
                description,
                code,
            )
        except IntegrityError:
            logger.warning(
                'Invitation code collision (attempt %d/%d)',
                attempt,
                attempts,
            )
            continue
        logger.info('Private circle created: %s (ID: %d)', name, circle.id)
        return circle

    logger.error('Could not allocate invitation code after %d attempts', attempts)
    raise InvitationCodeAllocationError(attempts)


def list_user_circles(circles: CircleRepository, user: User) -> list[Circle]:
    """Circles the caller belongs to, annotated with role and member count."""
    return circles.list_circles_for_user(user.id)


def list_public_circles(circles: CircleRepository) -> list[Circle]:
    """Public circles annotated with member count."""
    return circles.list_public_circles()


def find_by_invitation_code(circles: CircleRepository, code: str) -> Circle:
    """Resolve an invitation code.

    Raises:
        NotFoundError: If no circle carries the code.
    """
    circle = circles.get_circle_by_invitation_code(code)
    if circle is None:
        raise NotFoundError('Invalid invitation code')
    return circle


def get_circle_detail(
    circles: CircleRepository,
    user: User,
    circle_id: int,
) -> CircleDetail:
    """Load a circle with members and files for one of its members.

    Args:
        circles: Circle repository.
        user: Caller.
        circle_id: Circle ID.

    Returns:
        Circle detail including the caller's role.

    Raises:
        NotFoundError: If the circle does not exist.
        ForbiddenError: If the caller is not a member.
    """
    circle = require_circle(circles, circle_id)
    member = circles.get_member(circle_id, user.id)
    if member is None:
        raise ForbiddenError('You are not a member of this circle')
    return CircleDetail(
        circle=circle,
        members=circles.list_members(circle_id),
        files=circles.list_files_by_circle(circle_id),
        user_role=member.role,
    )


def _add_member_with_log(
    circles: CircleRepository,
    circle: Circle,
    user: User,
) -> CircleMember:
    with circles.atomic():
        member = circles.add_member(circle.id, user.id, CircleMember.Role.MEMBER)
        circles.log_activity(
            circle.id,
            user.id,
            CircleActivityLog.Action.MEMBER_JOINED,
            target_id=user.id,
            target_type='user',
        )
    logger.info('User %d joined circle %d', user.id, circle.id)
    return member


def join_circle(circles: CircleRepository, user: User, circle_id: int) -> None:
    """Join a circle by ID as a plain member.

    Raises:
        NotFoundError: If the circle does not exist.
        BadRequestError: If the caller is already a member.
    """
    circle = require_circle(circles, circle_id)
    if circles.get_member(circle_id, user.id) is not None:
        raise BadRequestError('Already a member')
    _add_member_with_log(circles, circle, user)


def join_by_invitation_code(
    circles: CircleRepository,
    user: User,
    code: str,
) -> Circle:
    """Join a private circle with its invitation code.

    Returns:
        Joined circle.

    Raises:
        NotFoundError: If the code is unknown.
        BadRequestError: If the caller is already a member.
    """
    circle = find_by_invitation_code(circles, code)
    if circles.get_member(circle.id, user.id) is not None:
        raise BadRequestError('Already a member of this circle')
    _add_member_with_log(circles, circle, user)
    return circle


def leave_circle(circles: CircleRepository, user: User, circle_id: int) -> None:
    """Leave a circle; owners must delete it instead.

    Raises:
        NotFoundError: If the caller is not a member.
        BadRequestError: If the caller is the owner.
    """
    member = circles.get_member(circle_id, user.id)
    if member is None:
        raise NotFoundError('Not a member')
    if member.is_owner:
        raise BadRequestError('Owner cannot leave. Delete the circle instead.')

    with circles.atomic():
        circles.remove_member(circle_id, user.id)
        circles.log_activity(
            circle_id,
            user.id,
            CircleActivityLog.Action.MEMBER_LEFT,
            target_id=user.id,
            target_type='user',
        )
    logger.info('User %d left circle %d', user.id, circle_id)


def remove_member(
    circles: CircleRepository,
    user: User,
    circle_id: int,
    member_user_id: int,
) -> None:
    """Remove another member from a circle the caller owns.

    Raises:
        ForbiddenError: If the caller is not the owner.
        NotFoundError: If the target is not a member.
        BadRequestError: If the target is the owner.
    """
    require_owner(
        circles,
        circle_id,
        user,
        'Only circle owner can remove members',
    )
    target = circles.get_member(circle_id, member_user_id)
    if target is None:
        raise NotFoundError('Member not found')
    if target.is_owner:
        raise BadRequestError('Cannot remove owner')

    with circles.atomic():
        circles.remove_member(circle_id, member_user_id)
        circles.log_activity(
            circle_id,
            user.id,
            CircleActivityLog.Action.MEMBER_REMOVED,
            target_id=member_user_id,
            target_type='user',
        )
    logger.info(
        'User %d removed from circle %d by %d',
        member_user_id,
        circle_id,
        user.id,
    )


def add_member_by_email(
    circles: CircleRepository,
    user: User,
    circle_id: int,
    user_email: str,
) -> None:
    """Invite a user by email address.

    Raises:
        ForbiddenError: If the caller is not the owner.
        NotImplementedFeatureError: Always, for owners.
    """
    require_owner(circles, circle_id, user, 'Only circle owner can add members')
    raise NotImplementedFeatureError(
        'User lookup by email not yet implemented. Use join link instead.',
    )


def update_circle(
    circles: CircleRepository,
    user: User,
    circle_id: int,
    changes: dict[str, str | None],
) -> Circle:
    """Rename or re-describe a circle the caller owns.

    Args:
        circles: Circle repository.
        user: Caller.
        circle_id: Circle ID.
        changes: Subset of ``name`` and ``description``; an empty
            description clears it.

    Returns:
        Updated circle.

    Raises:
        ForbiddenError: If the caller is not the owner.
    """
    require_owner(circles, circle_id, user, 'Only circle owner can update')
    circle = require_circle(circles, circle_id)

    values: dict[str, object] = {}
    if changes.get('name') is not None:
        values['name'] = changes['name']
    if 'description' in changes:
        values['description'] = changes['description'] or None
    if not values:
        return circle

    with circles.atomic():
        circle = circles.update_circle(circle, values)
        circles.log_activity(
            circle_id,
            user.id,
            CircleActivityLog.Action.CIRCLE_UPDATED,
            target_id=circle_id,
            target_type='circle',
            details=', '.join(sorted(values)),
        )
    logger.info('Circle updated: ID=%d fields=%s', circle_id, sorted(values))
    return circle


def delete_circle(circles: CircleRepository, user: User, circle_id: int) -> None:
    """Delete a circle the caller owns with everything in it.

    Stored objects of cascaded files are removed by the ``post_delete``
    signal.

    Raises:
        ForbiddenError: If the caller is not the owner.
    """
    require_owner(circles, circle_id, user, 'Only circle owner can delete')
    with circles.atomic():
        circles.delete_circle(circle_id)
    logger.info('Circle deleted: ID=%d by user %d', circle_id, user.id)
