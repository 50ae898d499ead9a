from django.contrib import admin
from django.urls import path, include
from rest_framework.authtoken.views import obtain_auth_token

admin.site.site_header = 'luc sam admin'

urlpatterns = [
    path('admin/', admin.site.urls),
    path('api/', include('blog.urls')),    # Posts API
    path('api/', include('kanban.urls')),  # Projects / columns / tasks API
    path('api/auth/token/', obtain_auth_token, name='api-token'),
    path('api-auth/', include('rest_framework.urls')),
]
