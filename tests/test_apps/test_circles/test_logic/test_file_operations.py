"""Tests for file operations business logic."""

from decimal import Decimal

import pytest
from django.db import DatabaseError

from server.apps.circles.exceptions import UnsupportedFileTypeError
from server.apps.circles.logic.circle_operations import (
    create_circle,
    delete_circle,
    join_circle,
)
from server.apps.circles.logic.file_operations import (
    delete_file,
    list_circle_files,
    list_user_uploads,
    upload_file,
)
from server.apps.circles.logic.folder_operations import create_folder
from server.apps.circles.models import CircleActivityLog, File
from server.common.exceptions import BadRequestError, ForbiddenError, NotFoundError


def _bucket_keys(mock_s3):
    return [obj.key for obj in mock_s3.Bucket('circles').objects.all()]


def _upload(circles, user, circle, png_data, **kwargs):
    return upload_file(
        circles,
        user,
        circle_id=circle.id,
        filename=kwargs.pop('filename', 'test-image.png'),
        file_data=png_data,
        mime_type=kwargs.pop('mime_type', 'image/png'),
        file_size=kwargs.pop('file_size', 1024),
        **kwargs,
    )


@pytest.mark.django_db
class TestUploadFile:
    """Tests for file upload."""

    def test_upload_image(self, circles, public_circle, user, mock_s3, png_data):
        """Test successful upload (S3 + DB)."""
        file_instance = _upload(circles, user, public_circle, png_data)

        assert file_instance.id is not None
        assert file_instance.file_type == File.FileType.IMAGE
        assert file_instance.file_key.startswith(
            f'circles/{public_circle.id}/{user.id}-',
        )
        assert file_instance.file_key.endswith('.png')
        assert file_instance.file_key in file_instance.file_url
        assert file_instance.file_size == 1024
        assert not file_instance.is_paid

        stored = mock_s3.Object('circles', file_instance.file_key).get()
        assert stored['Body'].read().startswith(b'\x89PNG')
        assert stored['ContentType'] == 'image/png'

        assert CircleActivityLog.objects.filter(
            action=CircleActivityLog.Action.FILE_UPLOADED,
            target_id=file_instance.id,
        ).exists()

    @pytest.mark.parametrize(('mime_type', 'expected'), [
        ('video/mp4', File.FileType.VIDEO),
        ('audio/mpeg', File.FileType.AUDIO),
        ('image/jpeg', File.FileType.IMAGE),
    ])
    def test_file_type_from_mime_prefix(
        self,
        circles,
        public_circle,
        user,
        mock_s3,
        png_data,
        mime_type,
        expected,
    ):
        """Test media family is derived from the MIME prefix."""
        file_instance = _upload(
            circles,
            user,
            public_circle,
            png_data,
            mime_type=mime_type,
        )

        assert file_instance.file_type == expected

    def test_unsupported_type(self, circles, public_circle, user, mock_s3, png_data):
        """Test non-media uploads are rejected before storage."""
        with pytest.raises(UnsupportedFileTypeError, match='Unsupported file type'):
            _upload(
                circles,
                user,
                public_circle,
                png_data,
                filename='doc.pdf',
                mime_type='application/pdf',
            )

        assert File.objects.count() == 0
        assert _bucket_keys(mock_s3) == []

    def test_invalid_base64(self, circles, public_circle, user, mock_s3):
        """Test undecodable payload."""
        with pytest.raises(BadRequestError, match='Invalid file data'):
            _upload(circles, user, public_circle, '***not base64***')

    def test_extension_fallback(
        self,
        circles,
        public_circle,
        user,
        mock_s3,
        png_data,
    ):
        """Test filenames without a dot get the bin extension."""
        file_instance = _upload(
            circles,
            user,
            public_circle,
            png_data,
            filename='snapshot',
        )

        assert file_instance.file_key.endswith('.bin')

    def test_non_member_cannot_upload(
        self,
        circles,
        public_circle,
        other_user,
        mock_s3,
        png_data,
    ):
        """Test membership is required."""
        with pytest.raises(ForbiddenError, match='Not a member of this circle'):
            _upload(circles, other_user, public_circle, png_data)

        assert _bucket_keys(mock_s3) == []

    def test_upload_into_folder(
        self,
        circles,
        public_circle,
        user,
        mock_s3,
        png_data,
    ):
        """Test upload into a folder of the same circle."""
        folder = create_folder(circles, user, public_circle.id, 'Beach')

        file_instance = _upload(
            circles,
            user,
            public_circle,
            png_data,
            folder_id=folder.id,
        )

        assert file_instance.folder_id == folder.id

    def test_upload_into_foreign_folder(
        self,
        circles,
        public_circle,
        user,
        mock_s3,
        png_data,
    ):
        """Test folders of other circles are not visible."""
        other_circle = create_circle(circles, user, 'Other')
        folder = create_folder(circles, user, other_circle.id, 'Elsewhere')

        with pytest.raises(NotFoundError, match='Folder not found'):
            _upload(
                circles,
                user,
                public_circle,
                png_data,
                folder_id=folder.id,
            )

    def test_paid_upload(self, circles, public_circle, user, mock_s3, png_data):
        """Test a price puts the file up for sale."""
        file_instance = _upload(
            circles,
            user,
            public_circle,
            png_data,
            price=Decimal('9.99'),
        )

        assert file_instance.is_paid
        assert file_instance.price == Decimal('9.99')

    def test_db_failure_rolls_back_storage(
        self,
        circles,
        public_circle,
        user,
        mock_s3,
        png_data,
        monkeypatch,
    ):
        """Test stored object is removed when the insert fails."""
        def failing_create(**kwargs):
            raise DatabaseError('insert failed')

        monkeypatch.setattr(circles, 'create_file', failing_create)

        with pytest.raises(DatabaseError):
            _upload(circles, user, public_circle, png_data)

        assert File.objects.count() == 0
        assert _bucket_keys(mock_s3) == []


@pytest.mark.django_db
class TestListFiles:
    """Tests for file listings."""

    def test_list_circle_files(
        self,
        circles,
        public_circle,
        user,
        mock_s3,
        png_data,
    ):
        """Test newest first."""
        first = _upload(circles, user, public_circle, png_data)
        second = _upload(circles, user, public_circle, png_data)

        listed = list_circle_files(circles, user, public_circle.id)

        assert [item.id for item in listed] == [second.id, first.id]
        assert listed[0].uploader == user

    def test_non_member_cannot_list(self, circles, public_circle, other_user):
        """Test membership is required."""
        with pytest.raises(ForbiddenError, match='Not a member of this circle'):
            list_circle_files(circles, other_user, public_circle.id)

    def test_my_uploads(
        self,
        circles,
        public_circle,
        user,
        other_user,
        mock_s3,
        png_data,
    ):
        """Test only the caller's uploads are returned."""
        join_circle(circles, other_user, public_circle.id)
        mine = _upload(circles, user, public_circle, png_data)
        _upload(circles, other_user, public_circle, png_data)

        uploads = list_user_uploads(circles, user)

        assert [item.id for item in uploads] == [mine.id]
        assert uploads[0].circle.name == public_circle.name


@pytest.mark.django_db
class TestDeleteFile:
    """Tests for file deletion."""

    def test_uploader_deletes(
        self,
        circles,
        public_circle,
        user,
        mock_s3,
        png_data,
    ):
        """Test DB row and stored object are removed."""
        file_instance = _upload(circles, user, public_circle, png_data)

        delete_file(circles, user, file_instance.id)

        assert not File.objects.filter(id=file_instance.id).exists()
        assert _bucket_keys(mock_s3) == []
        assert CircleActivityLog.objects.filter(
            action=CircleActivityLog.Action.FILE_DELETED,
        ).exists()

    def test_owner_deletes_member_upload(
        self,
        circles,
        public_circle,
        user,
        other_user,
        mock_s3,
        png_data,
    ):
        """Test circle owner may delete any file."""
        join_circle(circles, other_user, public_circle.id)
        file_instance = _upload(circles, other_user, public_circle, png_data)

        delete_file(circles, user, file_instance.id)

        assert not File.objects.filter(id=file_instance.id).exists()

    def test_member_cannot_delete_others(
        self,
        circles,
        public_circle,
        user,
        other_user,
        mock_s3,
        png_data,
    ):
        """Test plain members only delete their own files."""
        join_circle(circles, other_user, public_circle.id)
        file_instance = _upload(circles, user, public_circle, png_data)

        with pytest.raises(ForbiddenError, match='Only uploader or circle owner'):
            delete_file(circles, other_user, file_instance.id)

    def test_non_member_cannot_delete(
        self,
        circles,
        public_circle,
        user,
        other_user,
        mock_s3,
        png_data,
    ):
        """Test membership is checked first."""
        file_instance = _upload(circles, user, public_circle, png_data)

        with pytest.raises(ForbiddenError, match='Not a member of this circle'):
            delete_file(circles, other_user, file_instance.id)

    def test_delete_missing_file(self, circles, user):
        """Test unknown file."""
        with pytest.raises(NotFoundError, match='File not found'):
            delete_file(circles, user, 99999)

    def test_circle_delete_removes_objects(
        self,
        circles,
        public_circle,
        user,
        mock_s3,
        png_data,
    ):
        """Test cascaded files lose their stored objects."""
        _upload(circles, user, public_circle, png_data)

        delete_circle(circles, user, public_circle.id)

        assert File.objects.count() == 0
        assert _bucket_keys(mock_s3) == []
