"""
URL configuration for the Tote Bag Co. API.

Every public route lives under `api/`; the first segment after that prefix
names the entity recorded by the audit trail.
"""
from django.contrib import admin
from django.urls import path, include
from django.conf import settings
from django.conf.urls.static import static
from django.http import JsonResponse
from drf_spectacular.views import SpectacularAPIView, SpectacularSwaggerView


# Simple health check view - no database required
def health_check(request):
    """Health check endpoint for container orchestration.
    Returns 200 OK without database queries for fast response.
    """
    return JsonResponse({
        'status': 'healthy',
        'service': 'totebag-api'
    })


urlpatterns = [
    # Health check endpoint (no auth required, no DB queries)
    path('api/health/', health_check, name='health-check'),

    path('admin/', admin.site.urls),

    # OAuth2 identity provider
    path('o/', include('oauth2_provider.urls', namespace='oauth2_provider')),

    # API Documentation
    path('api/schema/', SpectacularAPIView.as_view(), name='schema'),
    path('api/docs/', SpectacularSwaggerView.as_view(url_name='schema'), name='swagger-ui'),

    # API endpoints
    path('api/profiles/', include('users.urls')),
    path('api/locations/', include('locations.urls')),
    path('api/addresses/', include('addresses.urls')),
    path('api/', include('catalog.urls')),
    path('api/orders/', include('orders.urls')),
    path('api/audit/', include('audit.urls')),
    path('api/b2b/', include('b2b.urls')),
    path('api/dashboard/', include('dashboard.urls')),
]

# Serve uploaded files in development
if settings.DEBUG:
    urlpatterns += static(settings.MEDIA_URL, document_root=settings.MEDIA_ROOT)
