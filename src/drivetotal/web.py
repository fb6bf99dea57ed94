"""aiohttp JSON API around :class:`~drivetotal.service.StatsService`.

Routes::

    GET /health
    GET /api/dashboard/stats
    GET /api/vehicles/{vehicle_id}

Every ``/api`` request is rate limited per client address and requires an
``Authorization: Bearer`` token.  Engine results are serialized as-is.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Awaitable, Callable

from aiohttp import web

from drivetotal._redact import redact_headers
from drivetotal.auth import TokenAuthority
from drivetotal.config import DriveTotalConfig
from drivetotal.exceptions import DriveTotalAuthError, DriveTotalNotFoundError, DriveTotalRateLimitError
from drivetotal.ratelimit import InMemoryRateLimiter, RateLimiter
from drivetotal.service import StatsService
from drivetotal.store import InMemoryRecordStore, RecordStore

_logger = logging.getLogger(__name__)

CONFIG_KEY = web.AppKey("config", DriveTotalConfig)
SERVICE_KEY = web.AppKey("service", StatsService)
AUTHORITY_KEY = web.AppKey("authority", TokenAuthority)
API_LIMITER_KEY = web.AppKey("api_limiter", RateLimiter)
AUTH_LIMITER_KEY = web.AppKey("auth_limiter", RateLimiter)

_Handler = Callable[[web.Request], Awaitable[web.StreamResponse]]

_CORS_METHODS = "GET,OPTIONS"
_CORS_HEADERS = "Accept, Content-Type, Authorization"


def client_identity(request: web.Request) -> str:
    """First ``X-Forwarded-For`` hop, else ``X-Real-IP``, else the peer address."""
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        first = forwarded.split(",")[0].strip()
        if first:
            return first
    real_ip = request.headers.get("X-Real-IP")
    if real_ip:
        return real_ip
    return request.remote or "unknown"


def _error(status: int, message: str, **headers: str) -> web.Response:
    return web.json_response({"error": message}, status=status, headers=headers or None)


def _enforce(limiter: RateLimiter, identifier: str) -> int:
    result = limiter.check(identifier)
    if not result.allowed:
        raise DriveTotalRateLimitError("Too many requests", identifier=identifier, retry_after=result.reset_in)
    return result.remaining


# ------------------------------------------------------------------
# Middlewares
# ------------------------------------------------------------------


@web.middleware
async def cors_middleware(request: web.Request, handler: _Handler) -> web.StreamResponse:
    config = request.app[CONFIG_KEY]
    origin = request.headers.get("Origin")

    if request.method == "OPTIONS":
        response: web.StreamResponse = web.Response(status=200)
    else:
        response = await handler(request)

    if config.is_origin_allowed(origin):
        allow = origin or (config.allowed_origins[0] if config.allowed_origins else None)
        if allow:
            response.headers["Access-Control-Allow-Origin"] = allow
    response.headers["Access-Control-Allow-Credentials"] = "true"
    response.headers["Access-Control-Allow-Methods"] = _CORS_METHODS
    response.headers["Access-Control-Allow-Headers"] = _CORS_HEADERS
    return response


@web.middleware
async def error_middleware(request: web.Request, handler: _Handler) -> web.StreamResponse:
    try:
        return await handler(request)
    except DriveTotalAuthError:
        return _error(401, "Unauthorized")
    except DriveTotalNotFoundError as exc:
        return _error(404, str(exc))
    except DriveTotalRateLimitError as exc:
        return _error(429, "Too many requests", **{"Retry-After": str(max(1, math.ceil(exc.retry_after)))})
    except web.HTTPException:
        raise
    except Exception:
        _logger.exception("Unhandled error on %s %s", request.method, request.path)
        return _error(500, "Failed to process request")


@web.middleware
async def rate_limit_middleware(request: web.Request, handler: _Handler) -> web.StreamResponse:
    config = request.app[CONFIG_KEY]
    if not config.rate_limit_enabled or not request.path.startswith("/api/"):
        return await handler(request)

    remaining = _enforce(request.app[API_LIMITER_KEY], f"api:{client_identity(request)}")
    response = await handler(request)
    response.headers["X-RateLimit-Remaining"] = str(remaining)
    return response


def current_user(request: web.Request) -> str:
    """Resolve the requesting user, counting failures against the auth budget."""
    if _logger.isEnabledFor(logging.DEBUG):
        _logger.debug("%s %s headers=%s", request.method, request.path, redact_headers(request.headers))
    try:
        return request.app[AUTHORITY_KEY].user_from_headers(request.headers)
    except DriveTotalAuthError:
        if request.app[CONFIG_KEY].rate_limit_enabled:
            _enforce(request.app[AUTH_LIMITER_KEY], f"auth:{client_identity(request)}")
        raise


# ------------------------------------------------------------------
# Handlers
# ------------------------------------------------------------------


async def health(request: web.Request) -> web.Response:
    return web.json_response({"status": "ok"})


async def dashboard_stats(request: web.Request) -> web.Response:
    user_id = current_user(request)
    stats = await request.app[SERVICE_KEY].dashboard_stats(user_id)
    return web.json_response(stats.to_dict())


async def vehicle_detail(request: web.Request) -> web.Response:
    user_id = current_user(request)
    detail = await request.app[SERVICE_KEY].vehicle_detail(user_id, request.match_info["vehicle_id"])
    return web.json_response(detail)


def create_app(
    config: DriveTotalConfig,
    store: RecordStore,
    *,
    service: StatsService | None = None,
    authority: TokenAuthority | None = None,
    api_limiter: RateLimiter | None = None,
    auth_limiter: RateLimiter | None = None,
) -> web.Application:
    """Build the application.

    Collaborators default to process-local implementations built from
    *config*; pass shared ones for multi-instance deployments.  Limiter
    state lives as long as the application and is cleared on shutdown.
    """
    app = web.Application(middlewares=[cors_middleware, error_middleware, rate_limit_middleware])
    app[CONFIG_KEY] = config
    if service is None:
        service = StatsService(store, include_ownership_costs=config.include_ownership_costs)
    if authority is None:
        authority = TokenAuthority(config.jwt_secret, config.token_ttl)
    # Limiters may define __len__, so an empty one is falsy; only None means "not given".
    if api_limiter is None:
        api_limiter = InMemoryRateLimiter(config.api_rate_limit, config.rate_window)
    if auth_limiter is None:
        auth_limiter = InMemoryRateLimiter(config.auth_rate_limit, config.rate_window)

    app[SERVICE_KEY] = service
    app[AUTHORITY_KEY] = authority
    app[API_LIMITER_KEY] = api_limiter
    app[AUTH_LIMITER_KEY] = auth_limiter

    async def _reset_limiters(app: web.Application) -> None:
        app[API_LIMITER_KEY].reset()
        app[AUTH_LIMITER_KEY].reset()

    app.on_cleanup.append(_reset_limiters)

    app.router.add_get("/health", health)
    app.router.add_get("/api/dashboard/stats", dashboard_stats)
    app.router.add_get("/api/vehicles/{vehicle_id}", vehicle_detail)
    return app


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    config = DriveTotalConfig.from_env()
    _logger.info("Starting drivetotal API on %s:%d", config.host, config.port)
    web.run_app(create_app(config, InMemoryRecordStore()), host=config.host, port=config.port)


if __name__ == "__main__":
    main()
