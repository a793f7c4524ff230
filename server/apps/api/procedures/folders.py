"""Folder procedures."""

from typing import Any

from server.apps.api.rpc import CallContext, Router
from server.apps.api.serializers import serialize_folder
from server.apps.circles import schemas
from server.apps.circles.logic import folder_operations

router = Router('folders')


@router.mutation('create', schemas.FolderCreate)
def create(context: CallContext, data: schemas.FolderCreate) -> dict[str, int]:
    folder = folder_operations.create_folder(
        context.repos.circles,
        context.require_user(),
        data.circle_id,
        data.name,
        data.description,
    )
    return {'folderId': folder.id}


@router.query('list', schemas.CircleRef)
def list_folders(context: CallContext, data: schemas.CircleRef) -> list[dict[str, Any]]:
    folders = folder_operations.list_folders(
        context.repos.circles,
        context.require_user(),
        data.circle_id,
    )
    return [serialize_folder(folder) for folder in folders]


@router.mutation('rename', schemas.FolderRename)
def rename(context: CallContext, data: schemas.FolderRename) -> dict[str, bool]:
    folder_operations.rename_folder(
        context.repos.circles,
        context.require_user(),
        data.folder_id,
        data.name,
    )
    return {'success': True}


@router.mutation('delete', schemas.FolderRef)
def delete(context: CallContext, data: schemas.FolderRef) -> dict[str, bool]:
    folder_operations.delete_folder(
        context.repos.circles,
        context.require_user(),
        data.folder_id,
    )
    return {'success': True}
