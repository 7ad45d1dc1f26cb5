import logging
import time
import uuid
import contextvars
from typing import Optional

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

logger = logging.getLogger(__name__)

# Id of the request being served; repository and service logs pick it up through RequestIdFilter
request_id_ctx: contextvars.ContextVar[Optional[str]] = contextvars.ContextVar("request_id", default=None)


class RequestIdFilter(logging.Filter):
    """Stamps each record with the current request id, ``-`` outside a request."""
    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = request_id_ctx.get() or "-"
        return True


def setup_logging(level: str = "INFO") -> None:
    """Install the root handler used by ``create_app``.

    Tests build a fresh app per case, so a second call leaves the existing
    handler in place.
    """
    root = logging.getLogger()
    if any(isinstance(f, RequestIdFilter) for h in root.handlers for f in h.filters):
        return

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s [%(request_id)s] %(name)s: %(message)s"))
    handler.addFilter(RequestIdFilter())
    root.setLevel(level)
    root.addHandler(handler)


class LoggingMiddleware(BaseHTTPMiddleware):
    """Outermost app middleware after CORS.

    Reuses an incoming ``X-Request-ID`` (or mints one), so rejections from the
    auth middleware and storage errors from the repositories are logged under
    the same id that goes back to the caller.
    """

    async def dispatch(self, request: Request, call_next):
        req_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        token = request_id_ctx.set(req_id)

        start = time.perf_counter()

        try:
            client_host = request.client.host if request.client else None
            logger.info("request.start %s %s client=%s", request.method, request.url.path, client_host)

            response = await call_next(request)

            duration_ms = int((time.perf_counter() - start) * 1000)
            logger.info("request.end status=%s duration_ms=%s", response.status_code, duration_ms)
            response.headers["X-Request-ID"] = req_id
            return response

        except Exception:
            duration_ms = int((time.perf_counter() - start) * 1000)
            logger.exception("request.error duration_ms=%s", duration_ms)
            raise
        finally:
            request_id_ctx.reset(token)
