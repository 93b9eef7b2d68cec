"""
handlers/ - Presentation Layer
================================
FastAPI routers. Each handler parses the HTTP request, delegates to
the TaskService, and maps the result or error to a JSON response.
No business logic lives here.
"""
