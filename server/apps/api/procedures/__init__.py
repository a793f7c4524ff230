"""Root router merging every resource's procedures."""

from server.apps.api.procedures import (
    activity,
    admin,
    announcements,
    auth,
    categories,
    circles,
    file_share,
    files,
    folders,
    payment,
    search,
)
from server.apps.api.rpc import Router

router = Router()

for _module in (  # noqa: WPS352
    auth,
    circles,
    files,
    folders,
    search,
    file_share,
    activity,
    categories,
    announcements,
    admin,
    payment,
):
    router.include(_module.router)
