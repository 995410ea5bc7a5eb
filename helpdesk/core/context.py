# helpdesk/core/context.py
"""Per-request state handed to route handlers.

A ``RequestContext`` is built once per request by ``get_request_context``.
It resolves the session from the cookie and takes the pending flash message
off it, so a flash is shown by exactly one response. Handlers return the
``Response`` built by ``render``/``redirect``/``json_response``, which write
the session back and keep the cookie in sync.
"""
from pathlib import Path

from fastapi import Depends, Request
from fastapi.responses import JSONResponse, RedirectResponse, Response
from fastapi.templating import Jinja2Templates

from helpdesk.core.errors import AuthRequired
from helpdesk.core.sessions import Flash, SessionData, SessionStore, User

templates = Jinja2Templates(directory=str(Path(__file__).resolve().parent.parent / "templates"))

ANY_METHOD = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


def expects_json(request: Request) -> bool:
    requested_with = request.headers.get("x-requested-with", "")
    accept = request.headers.get("accept", "")
    return (
        requested_with.lower() == "xmlhttprequest"
        or "application/json" in accept.lower()
        or "json" in request.query_params
    )


class RequestContext:
    def __init__(self, request: Request, sessions: SessionStore, cookie_name: str, cookie_secure: bool = False):
        self.request = request
        self.sessions = sessions
        self.cookie_name = cookie_name
        self.cookie_secure = cookie_secure
        self.expects_json = expects_json(request)

        cookie = request.cookies.get(cookie_name)
        self.session: SessionData | None = sessions.get(cookie)
        self.session_id: str | None = cookie if self.session is not None else None
        self._drop_cookie = cookie is not None and self.session is None

        # read once
        self.flash: Flash | None = None
        if self.session is not None:
            self.flash, self.session.flash = self.session.flash, None

    @property
    def user(self) -> User | None:
        return self.session.user if self.session is not None else None

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None

    def _ensure_session(self) -> SessionData:
        if self.session is None:
            self.session_id, self.session = self.sessions.create()
        return self.session

    def set_flash(self, type_: str, message: str) -> None:
        self._ensure_session().flash = Flash(type=type_, message=message)

    def login(self, user: User) -> None:
        # fresh id on every login
        if self.session_id is not None:
            self.sessions.destroy(self.session_id)
            self.session_id, self.session = None, None
        self._ensure_session().user = user

    def logout(self) -> None:
        self.sessions.destroy(self.session_id)
        self.session_id, self.session = None, None
        self._drop_cookie = True

    def apply(self, response: Response) -> Response:
        if self.session is not None and self.session_id is not None:
            self.sessions.save(self.session_id, self.session)
            response.set_cookie(
                self.cookie_name,
                self.session_id,
                max_age=self.sessions.ttl_seconds,
                httponly=True,
                secure=self.cookie_secure,
                samesite="lax",
            )
        elif self._drop_cookie:
            response.delete_cookie(self.cookie_name)
        return response


def build_request_context(request: Request) -> RequestContext:
    settings = request.app.state.settings
    return RequestContext(
        request,
        request.app.state.sessions,
        cookie_name=settings.SESSION_COOKIE_NAME,
        cookie_secure=settings.SESSION_COOKIE_SECURE,
    )


def get_request_context(request: Request) -> RequestContext:
    ctx = getattr(request.state, "context", None)
    if ctx is None:
        ctx = build_request_context(request)
        request.state.context = ctx
    return ctx


def require_user(ctx: RequestContext = Depends(get_request_context)) -> RequestContext:
    if not ctx.is_authenticated:
        raise AuthRequired()
    return ctx


def render(ctx: RequestContext, name: str, status_code: int = 200, **context) -> Response:
    context.setdefault("flash", ctx.flash)
    context.setdefault("user", ctx.user)
    response = templates.TemplateResponse(ctx.request, name, context, status_code=status_code)
    return ctx.apply(response)


def redirect(ctx: RequestContext, url: str) -> Response:
    return ctx.apply(RedirectResponse(url, status_code=303))


def json_response(ctx: RequestContext, data: dict, status_code: int = 200) -> Response:
    return ctx.apply(JSONResponse(data, status_code=status_code))
