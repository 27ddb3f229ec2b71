import asyncio
import requests
from fastapi import Depends, FastAPI, Request, Response
from fastapi.exception_handlers import http_exception_handler
from fastapi.responses import JSONResponse
from loguru import logger
from starlette.exceptions import HTTPException as StarletteHTTPException
from dictionaries.constants import CORS_HEADERS
from services.config import Settings, load_settings
from services.errors import LeadError
from services.submitter import parse_body, submit_lead

app = FastAPI()


# ───────── dependencies: fresh config + HTTP session per request ─────────
def get_settings() -> Settings:
    return load_settings()


def get_http_session():
    session = requests.Session()
    try:
        yield session
    finally:
        session.close()


def _json(status_code: int, content: dict) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=content, headers=CORS_HEADERS)


def _method_not_allowed() -> JSONResponse:
    return _json(405, {"ok": False, "error": "Method not allowed"})


@app.exception_handler(StarletteHTTPException)
async def http_error(req: Request, exc: StarletteHTTPException):
    # methods the route doesn't list (TRACE, ...) are rejected by the router before reaching it
    if exc.status_code == 405:
        return _method_not_allowed()
    return await http_exception_handler(req, exc)


@app.api_route("/api/lead", methods=["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"])
async def lead(
    req: Request,
    settings: Settings = Depends(get_settings),
    session: requests.Session = Depends(get_http_session),
):
    if req.method == "OPTIONS":
        return Response(status_code=204, headers=CORS_HEADERS)
    if req.method != "POST":
        return _method_not_allowed()

    try:
        body = parse_body(await req.body())
        # blocking HTTP calls -> keep them off the event loop
        out = await asyncio.to_thread(submit_lead, body, settings, session)
        # NaN in the upstream payload fails to render
        return _json(200, {"ok": True, "out": out})
    except LeadError as e:
        return _json(e.status_code, e.to_response())
    except Exception as e:
        logger.exception("Unexpected error while submitting lead")
        return _json(500, {"ok": False, "error": str(e)})
