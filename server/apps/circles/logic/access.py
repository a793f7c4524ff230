"""Membership and ownership checks shared by circle operations."""

import logging
from typing import Final

from server.apps.accounts.models import User
from server.apps.circles.models import Circle, CircleMember
from server.apps.circles.repository import CircleRepository
from server.common.exceptions import ForbiddenError, NotFoundError

NOT_A_MEMBER: Final = 'Not a member of this circle'

logger = logging.getLogger(__name__)


def require_circle(circles: CircleRepository, circle_id: int) -> Circle:
    """Get a circle or fail with NOT_FOUND.

    Args:
        circles: Circle repository.
        circle_id: Circle ID.

    Returns:
        Existing circle.

    Raises:
        NotFoundError: If the circle does not exist.
    """
    circle = circles.get_circle(circle_id)
    if circle is None:
        raise NotFoundError('Circle not found')
    return circle


def require_membership(
    circles: CircleRepository,
    circle_id: int,
    user: User,
    message: str = NOT_A_MEMBER,
) -> CircleMember:
    """Get the caller's membership or fail with FORBIDDEN.

    Args:
        circles: Circle repository.
        circle_id: Circle ID.
        user: Caller.
        message: Error message for non-members.

    Returns:
        Caller's membership row.

    Raises:
        ForbiddenError: If the caller is not a member.
    """
    member = circles.get_member(circle_id, user.id)
    if member is None:
        logger.warning(
            'Denied non-member access: user=%d circle=%d',
            user.id,
            circle_id,
        )
        raise ForbiddenError(message)
    return member


def require_owner(
    circles: CircleRepository,
    circle_id: int,
    user: User,
    message: str,
) -> CircleMember:
    """Get the caller's owner membership or fail with FORBIDDEN.

    Args:
        circles: Circle repository.
        circle_id: Circle ID.
        user: Caller.
        message: Error message for non-owners.

    Returns:
        Caller's owner membership row.

    Raises:
        ForbiddenError: If the caller is not the circle owner.
    """
    member = circles.get_member(circle_id, user.id)
    if member is None or not member.is_owner:
        logger.warning(
            'Denied owner-only action: user=%d circle=%d',
            user.id,
            circle_id,
        )
        raise ForbiddenError(message)
    return member
