def identity(request):
    """Expose the request identity to templates for role-aware navigation."""
    return {'identity': getattr(request, 'identity', None)}
