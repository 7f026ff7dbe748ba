from django.http import JsonResponse
from django.db import connection, DatabaseError
from django.conf import settings
import redis


def health_check(request):
    status = {"db": False, "redis": False}

    # DB
    try:
        with connection.cursor() as c:
            c.execute("SELECT 1")
        status["db"] = True
    except DatabaseError:
        pass

    # Redis (only the public rate limiter depends on it)
    try:
        r = redis.Redis.from_url(settings.REDIS_URL, socket_connect_timeout=1)
        r.ping()
        status["redis"] = True
    except redis.RedisError:
        pass

    http_status = 200 if status["db"] else 503
    return JsonResponse(status, status=http_status)


def not_found(request, exception=None):
    return JsonResponse({"error": "Not found", "code": "NOT_FOUND"}, status=404)


def server_error(request):
    return JsonResponse({"error": "Internal server error", "code": "INTERNAL_ERROR"}, status=500)
