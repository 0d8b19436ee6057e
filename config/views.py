from django.http import JsonResponse

from apps.core.responses import envelope


def health_check(request):
    """Liveness probe."""
    return JsonResponse(envelope(200))


def error_404(request, exception):
    """Custom 404 handler."""
    return JsonResponse(envelope(404), status=404)


def error_500(request):
    """Custom 500 handler."""
    return JsonResponse(envelope(500), status=500)
