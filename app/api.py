"""HTTP API exposing each proxy capability under its own route."""

from fastapi import APIRouter, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse

from .config import settings
from .handlers import CAPABILITIES, HandlerRequest, HandlerResponse, ProxyHandlers
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="app/api")

# every method is routed so the handler itself answers 405 with a JSON message
ALL_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]

router = APIRouter()
HANDLERS = ProxyHandlers(settings)


def _to_json_response(result: HandlerResponse) -> JSONResponse:
    return JSONResponse(status_code=result.status_code, content=result.body, headers=result.headers)


def _make_endpoint(handler_name: str):
    async def endpoint(request: Request) -> JSONResponse:
        raw = await request.body()
        handler = getattr(HANDLERS, handler_name)
        # handlers block on upstream HTTP calls
        result = await run_in_threadpool(handler, HandlerRequest(method=request.method, body=raw))
        logger.debug("%s %s -> %s", request.method, request.url.path, result.status_code)
        return _to_json_response(result)

    endpoint.__name__ = handler_name
    return endpoint


for _path, _handler_name in CAPABILITIES.items():
    router.add_api_route(f"/{_path}", _make_endpoint(_handler_name), methods=ALL_METHODS, name=_handler_name)
