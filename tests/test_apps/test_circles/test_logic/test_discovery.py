"""Tests for categories, activity and public search."""

import pytest

from server.apps.circles.logic.activity_operations import get_circle_activity
from server.apps.circles.logic.category_operations import (
    add_category,
    list_categories,
    remove_category,
)
from server.apps.circles.logic.circle_operations import create_circle, join_circle
from server.apps.circles.logic.search_operations import (
    search_by_category,
    search_circles,
)
from server.apps.circles.models import CircleActivityLog, CircleCategory
from server.common.exceptions import BadRequestError, ForbiddenError, NotFoundError


@pytest.mark.django_db
class TestCategories:
    """Tests for category tags."""

    def test_add_and_list(self, circles, public_circle, user):
        """Test tags are listed alphabetically."""
        add_category(circles, user, public_circle.id, 'travel')
        add_category(circles, user, public_circle.id, 'family')

        tags = list_categories(circles, public_circle.id)

        assert [tag.category for tag in tags] == ['family', 'travel']

    def test_duplicate_rejected(self, circles, public_circle, user):
        """Test a circle carries each tag once."""
        add_category(circles, user, public_circle.id, 'travel')

        with pytest.raises(BadRequestError, match='Category already exists'):
            add_category(circles, user, public_circle.id, 'travel')

    def test_concurrent_duplicate_rejected(
        self,
        circles,
        public_circle,
        user,
        monkeypatch,
    ):
        """Test a tag inserted after the existence check is still refused."""
        add_category(circles, user, public_circle.id, 'travel')
        monkeypatch.setattr(circles, 'category_exists', lambda *args: False)

        with pytest.raises(BadRequestError, match='Category already exists'):
            add_category(circles, user, public_circle.id, 'travel')

        assert CircleCategory.objects.filter(circle=public_circle).count() == 1

    def test_add_requires_membership(self, circles, public_circle, other_user):
        """Test non-members cannot tag."""
        with pytest.raises(ForbiddenError):
            add_category(circles, other_user, public_circle.id, 'travel')

    def test_remove(self, circles, public_circle, user):
        """Test tag removal."""
        add_category(circles, user, public_circle.id, 'travel')

        remove_category(circles, user, public_circle.id, 'travel')

        assert list_categories(circles, public_circle.id) == []

    def test_remove_requires_membership(self, circles, public_circle, user, other_user):
        """Test non-members cannot untag."""
        add_category(circles, user, public_circle.id, 'travel')

        with pytest.raises(ForbiddenError):
            remove_category(circles, other_user, public_circle.id, 'travel')


@pytest.mark.django_db
class TestSearch:
    """Tests for public discovery."""

    def test_search_by_name_ignores_case(self, circles, public_circle, user):
        """Test substring match on public names only."""
        create_circle(circles, user, 'Secret Holiday', is_public=False)

        found = search_circles(circles, 'HOLIDAY')

        assert [circle.id for circle in found] == [public_circle.id]
        assert found[0].member_count == 1

    def test_search_by_category(self, circles, public_circle, private_circle, user):
        """Test exact category match on public circles only."""
        add_category(circles, user, public_circle.id, 'travel')
        add_category(circles, user, private_circle.id, 'travel')

        found = search_by_category(circles, 'travel')

        assert [circle.id for circle in found] == [public_circle.id]
        assert search_by_category(circles, 'trav') == []


@pytest.mark.django_db
class TestActivity:
    """Tests for activity feed access."""

    def test_public_activity_is_open(self, circles, public_circle, other_user):
        """Test anyone reads a public circle's feed, newest first."""
        join_circle(circles, other_user, public_circle.id)

        entries = get_circle_activity(circles, None, public_circle.id)

        assert entries[0].action == CircleActivityLog.Action.MEMBER_JOINED
        assert entries[0].user == other_user

    def test_limit(self, circles, public_circle, user):
        """Test feed length is capped."""
        for index in range(3):
            circles.log_activity(
                public_circle.id,
                user.id,
                CircleActivityLog.Action.CIRCLE_UPDATED,
                details=str(index),
            )

        entries = get_circle_activity(circles, user, public_circle.id, limit=2)

        assert [entry.details for entry in entries] == ['2', '1']

    def test_private_activity_requires_membership(
        self,
        circles,
        private_circle,
        user,
        other_user,
    ):
        """Test private feeds are member-only."""
        assert get_circle_activity(circles, user, private_circle.id) == []

        with pytest.raises(ForbiddenError):
            get_circle_activity(circles, other_user, private_circle.id)
        with pytest.raises(ForbiddenError):
            get_circle_activity(circles, None, private_circle.id)

    def test_missing_circle(self, circles):
        """Test unknown circle."""
        with pytest.raises(NotFoundError, match='Circle not found'):
            get_circle_activity(circles, None, 99999)
