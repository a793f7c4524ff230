"""Root URL configuration."""

from django.contrib import admin
from django.urls import include, path

admin.autodiscover()

urlpatterns = [
    path('api/', include('server.apps.api.urls', namespace='api')),
    path('admin/', admin.site.urls),
]
