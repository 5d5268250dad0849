import re
from typing import Callable, Tuple

from fastapi import HTTPException, Request, Response, status
from fastapi.routing import APIRoute

JSON_MEDIA_TYPE = "application/json"

_TOKEN = r"[!#$%&'*+\-.^_`|~0-9A-Za-z]+"
_MEDIA_TYPE_RE = re.compile(rf"^({_TOKEN})(?:/({_TOKEN}))?$")
_PARAM_RE = re.compile(rf'^({_TOKEN})=({_TOKEN}|"(?:[^"\\]|\\.)*")$')


def parse_media_type(header: str) -> Tuple[str, dict]:
    """Extrait le media type (en minuscules) et ses paramètres d'un en-tête Content-Type"""
    media_type, *raw_params = header.split(";")
    media_type = media_type.strip()
    if not media_type:
        raise ValueError("mime: no media type")

    match = _MEDIA_TYPE_RE.match(media_type)
    if not match:
        if "/" not in media_type:
            raise ValueError("mime: expected slash after first token")
        raise ValueError("mime: expected token after slash")

    # Un ';' final sans paramètre est toléré
    if raw_params and not raw_params[-1].strip():
        raw_params = raw_params[:-1]

    params = {}
    for raw in raw_params:
        param = _PARAM_RE.match(raw.strip())
        if not param:
            raise ValueError("mime: invalid media parameter")
        params[param.group(1).lower()] = param.group(2).strip('"')
    return media_type.lower(), params


def require_json_content_type(request: Request) -> None:
    """Content-Type application/json obligatoire: 400 si l'en-tête est illisible, 415 sinon"""
    try:
        media_type, _ = parse_media_type(request.headers.get("content-type", ""))
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    if media_type != JSON_MEDIA_TYPE:
        raise HTTPException(
            status_code=status.HTTP_415_UNSUPPORTED_MEDIA_TYPE,
            detail="expect application/json Content-Type"
        )


class JSONBodyRoute(APIRoute):
    """Route dont le corps, s'il y en a un, est vérifié avant que FastAPI ne le décode"""

    def get_route_handler(self) -> Callable:
        handler = super().get_route_handler()
        if self.body_field is None:
            return handler

        async def route_handler(request: Request) -> Response:
            require_json_content_type(request)
            return await handler(request)

        return route_handler
