from django.conf import settings
from django.contrib import admin
from django.urls import include, path

urlpatterns = [
    path('admin/', admin.site.urls),
    path(f'{settings.API_PREFIX}dashboard/', include('dashboard.urls')),
    path(settings.API_PREFIX, include('congregations.urls')),
]
