# helpdesk/auth/routes.py
import logging

from fastapi import APIRouter, Depends, Form

from helpdesk.auth import services as auth_service
from helpdesk.core.context import (
    ANY_METHOD,
    RequestContext,
    get_request_context,
    json_response,
    redirect,
    render,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Auth"])


@router.get("/login")
def login_form(ctx: RequestContext = Depends(get_request_context)):
    if ctx.is_authenticated:
        return redirect(ctx, "/dashboard")
    return render(ctx, "auth/login.html")


@router.post("/login")
def login(
    email: str = Form(default=""),
    password: str = Form(default=""),
    ctx: RequestContext = Depends(get_request_context),
):
    user = auth_service.authenticate(email, password)
    ctx.login(user)
    ctx.set_flash("success", "Login successful!")
    logger.info("User %s logged in", user.email)
    if ctx.expects_json:
        return json_response(ctx, {"status": "success", "user": user.model_dump()})
    return redirect(ctx, "/dashboard")


@router.get("/signup")
def signup_form(ctx: RequestContext = Depends(get_request_context)):
    if ctx.is_authenticated:
        return redirect(ctx, "/dashboard")
    return render(ctx, "auth/signup.html")


@router.post("/signup")
def signup(
    name: str = Form(default=""),
    email: str = Form(default=""),
    password: str = Form(default=""),
    ctx: RequestContext = Depends(get_request_context),
):
    user = auth_service.register(name, email, password)
    ctx.login(user)
    ctx.set_flash("success", "Account created successfully!")
    logger.info("User %s signed up", user.email)
    if ctx.expects_json:
        return json_response(ctx, {"status": "success", "user": user.model_dump()})
    return redirect(ctx, "/dashboard")


@router.get("/session")
def session_status(ctx: RequestContext = Depends(get_request_context)):
    user = ctx.user
    return json_response(
        ctx, {"authenticated": user is not None, "user": user.model_dump() if user else None}
    )


@router.api_route("/logout", methods=ANY_METHOD)
def logout(ctx: RequestContext = Depends(get_request_context)):
    ctx.logout()
    if ctx.expects_json:
        return json_response(ctx, {"status": "success"})
    return redirect(ctx, "/")
