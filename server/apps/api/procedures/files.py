"""File upload, listing and deletion procedures."""

from typing import Any

from server.apps.api.rpc import CallContext, Router
from server.apps.api.serializers import serialize_file
from server.apps.circles import schemas
from server.apps.circles.logic import file_operations

router = Router('files')


@router.mutation('upload', schemas.FileUpload)
def upload(context: CallContext, data: schemas.FileUpload) -> dict[str, Any]:
    file_instance = file_operations.upload_file(
        context.repos.circles,
        context.require_user(),
        circle_id=data.circle_id,
        filename=data.filename,
        file_data=data.file_data,
        mime_type=data.mime_type,
        file_size=data.file_size,
        folder_id=data.folder_id,
        price=data.price,
    )
    return {
        'fileId': file_instance.id,
        'fileUrl': file_instance.file_url,
        'fileType': file_instance.file_type,
    }


@router.query('list', schemas.CircleRef)
def list_files(context: CallContext, data: schemas.CircleRef) -> list[dict[str, Any]]:
    files = file_operations.list_circle_files(
        context.repos.circles,
        context.require_user(),
        data.circle_id,
    )
    return [serialize_file(item, with_uploader=True) for item in files]


@router.mutation('delete', schemas.FileRef)
def delete(context: CallContext, data: schemas.FileRef) -> dict[str, bool]:
    file_operations.delete_file(
        context.repos.circles,
        context.require_user(),
        data.file_id,
    )
    return {'success': True}


@router.query('myUploads')
def my_uploads(context: CallContext, _: None) -> list[dict[str, Any]]:
    files = file_operations.list_user_uploads(
        context.repos.circles,
        context.require_user(),
    )
    return [serialize_file(item, with_circle=True) for item in files]
