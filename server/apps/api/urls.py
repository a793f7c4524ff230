"""URL routes of the api app."""

from django.urls import path

from server.apps.api import views

app_name = 'api'

urlpatterns = [
    path('rpc/<str:procedure>', views.rpc_view, name='rpc'),
    path('download/<int:file_id>', views.download_file, name='download'),
    path(
        'share/<str:token>/download',
        views.download_shared_file,
        name='share-download',
    ),
]
