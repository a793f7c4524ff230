"""Tests for folder operations."""

import pytest

from server.apps.circles.logic.file_operations import upload_file
from server.apps.circles.logic.folder_operations import (
    create_folder,
    delete_folder,
    list_folders,
    rename_folder,
)
from server.apps.circles.models import CircleActivityLog, File, Folder
from server.common.exceptions import ForbiddenError, NotFoundError


@pytest.mark.django_db
def test_create_folder(circles, public_circle, user):
    """Test member creates a folder and it is logged."""
    folder = create_folder(circles, user, public_circle.id, 'Beach', '')

    assert folder.name == 'Beach'
    assert folder.description is None
    assert folder.created_by == user
    assert CircleActivityLog.objects.filter(
        action=CircleActivityLog.Action.FOLDER_CREATED,
        target_id=folder.id,
    ).exists()


@pytest.mark.django_db
def test_create_folder_non_member(circles, public_circle, other_user):
    """Test membership is required."""
    with pytest.raises(ForbiddenError, match='Not a member of this circle'):
        create_folder(circles, other_user, public_circle.id, 'Beach')


@pytest.mark.django_db
def test_list_folders(circles, public_circle, user):
    """Test newest first with creators."""
    first = create_folder(circles, user, public_circle.id, 'One')
    second = create_folder(circles, user, public_circle.id, 'Two')

    listed = list_folders(circles, user, public_circle.id)

    assert [folder.id for folder in listed] == [second.id, first.id]
    assert listed[0].created_by.name == user.name


@pytest.mark.django_db
def test_rename_folder(circles, public_circle, user):
    """Test rename."""
    folder = create_folder(circles, user, public_circle.id, 'Old')

    rename_folder(circles, user, folder.id, 'New')

    folder.refresh_from_db()
    assert folder.name == 'New'


@pytest.mark.django_db
def test_rename_missing_folder(circles, user):
    """Test unknown folder."""
    with pytest.raises(NotFoundError, match='Folder not found'):
        rename_folder(circles, user, 99999, 'New')


@pytest.mark.django_db
def test_rename_folder_non_member(circles, public_circle, user, other_user):
    """Test membership in the folder's circle is required."""
    folder = create_folder(circles, user, public_circle.id, 'Old')

    with pytest.raises(ForbiddenError):
        rename_folder(circles, other_user, folder.id, 'New')


@pytest.mark.django_db
def test_delete_folder_keeps_files(circles, public_circle, user, mock_s3, png_data):
    """Test files survive folder deletion at the circle root."""
    folder = create_folder(circles, user, public_circle.id, 'Beach')
    file_instance = upload_file(
        circles,
        user,
        circle_id=public_circle.id,
        filename='sea.png',
        file_data=png_data,
        mime_type='image/png',
        file_size=10,
        folder_id=folder.id,
    )

    delete_folder(circles, user, folder.id)

    assert not Folder.objects.filter(id=folder.id).exists()
    file_instance.refresh_from_db()
    assert file_instance.folder_id is None
    assert File.objects.count() == 1
    assert CircleActivityLog.objects.filter(
        action=CircleActivityLog.Action.FOLDER_DELETED,
    ).exists()


@pytest.mark.django_db
def test_delete_folder_non_member(circles, public_circle, user, other_user):
    """Test membership is required."""
    folder = create_folder(circles, user, public_circle.id, 'Beach')

    with pytest.raises(ForbiddenError):
        delete_folder(circles, other_user, folder.id)

    assert Folder.objects.filter(id=folder.id).exists()
