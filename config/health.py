from django.db import DatabaseError, connection
from drf_spectacular.utils import extend_schema
from rest_framework.decorators import api_view
from rest_framework.response import Response


@extend_schema(tags=["Health Endpoint"], summary="Health check")
@api_view(["GET"])
def health(request):
    try:
        with connection.cursor() as cursor:
            cursor.execute("SELECT 1")
        db_status = "ok"
    except DatabaseError:
        db_status = "unavailable"
    code = 200 if db_status == "ok" else 503
    return Response({"status": "ok" if code == 200 else "degraded", "database": db_status}, status=code)
