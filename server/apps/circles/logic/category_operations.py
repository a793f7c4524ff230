"""Business logic for circle category tags."""

import logging

from django.db import IntegrityError

from server.apps.accounts.models import User
from server.apps.circles.logic.access import require_membership
from server.apps.circles.models import CircleCategory
from server.apps.circles.repository import CircleRepository
from server.common.exceptions import BadRequestError

logger = logging.getLogger(__name__)


def add_category(
    circles: CircleRepository,
    user: User,
    circle_id: int,
    category: str,
) -> CircleCategory:
    """Tag a circle the caller belongs to.

    Raises:
        ForbiddenError: If the caller is not a member.
        BadRequestError: If the circle already carries the tag.
    """
    require_membership(circles, circle_id, user)
    if circles.category_exists(circle_id, category):
        raise BadRequestError('Category already exists')
    try:
        with circles.atomic():
            tag = circles.add_category(circle_id, category)
    except IntegrityError as error:
        # Same tag inserted concurrently
        raise BadRequestError('Category already exists') from error
    logger.info('Category added: %s to circle %d', category, circle_id)
    return tag


def list_categories(circles: CircleRepository, circle_id: int) -> list[CircleCategory]:
    """Tags of a circle; readable by anyone."""
    return circles.list_categories(circle_id)


def remove_category(
    circles: CircleRepository,
    user: User,
    circle_id: int,
    category: str,
) -> None:
    """Remove a tag from a circle the caller belongs to.

    Raises:
        ForbiddenError: If the caller is not a member.
    """
    require_membership(circles, circle_id, user)
    removed = circles.remove_category(circle_id, category)
    logger.info(
        'Category removed: %s from circle %d (%d rows)',
        category,
        circle_id,
        removed,
    )
