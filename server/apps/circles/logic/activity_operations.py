"""Business logic for reading circle activity."""

from server.apps.accounts.models import User
from server.apps.circles.logic.access import require_circle, require_membership
from server.apps.circles.models import CircleActivityLog
from server.apps.circles.repository import CircleRepository
from server.common.exceptions import ForbiddenError


def get_circle_activity(
    circles: CircleRepository,
    user: User | None,
    circle_id: int,
    limit: int = 50,
) -> list[CircleActivityLog]:
    """Latest activity of a circle, newest first.

    Public circles are readable by anyone, private ones by members only.

    Args:
        circles: Circle repository.
        user: Caller, None when anonymous.
        circle_id: Circle ID.
        limit: Maximum entries.

    Returns:
        Activity entries with their users.

    Raises:
        NotFoundError: If the circle does not exist.
        ForbiddenError: If the circle is private and the caller is not
            a member.
    """
    circle = require_circle(circles, circle_id)
    if not circle.is_public:
        if user is None:
            raise ForbiddenError('Not a member of this circle')
        require_membership(circles, circle_id, user)
    return circles.list_activity(circle_id, limit)
