"""Wrap renderer output into Starlette responses."""

from fastapi.responses import HTMLResponse, Response

JSON_MEDIA_TYPE = "application/json"
JSONP_MEDIA_TYPE = "application/javascript"


class ViewResponse:
    """Turns rendered text into the matching HTTP response."""

    @staticmethod
    def html(content: str, status_code: int = 200) -> HTMLResponse:
        return HTMLResponse(content=str(content), status_code=status_code)

    @staticmethod
    def json(payload: str, jsonp: bool = False, status_code: int = 200) -> Response:
        """Return already-encoded JSON text.

        Args:
            payload: Output of the JSON renderer
            jsonp: Whether the payload is wrapped in a callback
            status_code: HTTP status code
        """
        media_type = JSONP_MEDIA_TYPE if jsonp else JSON_MEDIA_TYPE
        return Response(content=payload, media_type=media_type, status_code=status_code)
