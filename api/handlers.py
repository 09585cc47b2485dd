"""FastAPI route handlers."""

from fastapi import Request
from fastapi.responses import JSONResponse

from core.exceptions import ForwardError, MissingTarget
from core.headers import extract_target_url
from core.protocols import RequestLogger
from ui.log_utils import write_incoming_log


async def handle_forward(request: Request, logger: RequestLogger) -> JSONResponse:
    """Handle GET / by forwarding to the URL named in X-Target-URL."""
    write_incoming_log(request.method, request.url.path, dict(request.headers), None)

    try:
        target_url = extract_target_url(request.headers.raw)
    except MissingTarget as e:
        logger.log_error(400, f"No target URL provided ({e.reason})")
        return JSONResponse({"error": str(e)}, status_code=400)

    logger.log_event("debug", "Received proxy request", target_url=target_url)
    # TODO: re-encrypt the payload for the recipient's key once key management exists

    upstream = request.app.state.upstream_client
    try:
        result = await upstream.fetch_json(target_url)
    except ForwardError as e:
        message = f"Failed to forward request: {e}"
        logger.log_error(500, message, target_url=target_url)
        return JSONResponse({"error": message}, status_code=500)

    logger.log_forward(target_url, result.status_code)
    return JSONResponse(result.body, status_code=result.status_code)
