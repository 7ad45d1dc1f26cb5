import logging

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from fastapi.responses import JSONResponse

from restaurant_api.utils.auth.jwt_handler import verify_token
from restaurant_api.utils.errors import AuthFailure

logger = logging.getLogger(__name__)

PUBLIC_PATHS = {
    '/users/login', '/users/signup', '/users/refresh',
    '/docs', '/docs/oauth2-redirect', '/openapi.json', '/redoc'
}


class AuthorizationMiddleware(BaseHTTPMiddleware):
    """Rejects any request outside PUBLIC_PATHS that lacks a valid access token.

    The verified claims are stored on ``request.state.user``.
    """

    async def dispatch(self, request: Request, call_next):
        url = request.url.path

        if url in PUBLIC_PATHS or request.method == "OPTIONS":
            # skip and move to the end point
            return await call_next(request)

        header = request.headers.get("Authorization")
        if not header or not header.lower().startswith("bearer "):
            return JSONResponse(
                status_code=401,
                content={"detail": "No Authorization header provided"},
                headers={"WWW-Authenticate": "Bearer"},
            )

        try:
            claims = verify_token(header.split(" ", 1)[1].strip())
        except AuthFailure as exc:
            logger.info("rejected token for %s %s: %s", request.method, url, exc.detail)
            return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail}, headers=exc.headers)

        request.state.user = claims
        return await call_next(request)
