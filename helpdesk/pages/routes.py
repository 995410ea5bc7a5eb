# helpdesk/pages/routes.py
from fastapi import APIRouter, Depends

from helpdesk.core.context import RequestContext, get_request_context, render, require_user
from helpdesk.ticket.routes import get_ticket_store, storage_failure
from helpdesk.ticket.services import TicketStore

router = APIRouter(tags=["Pages"])


@router.get("/")
def landing(ctx: RequestContext = Depends(get_request_context)):
    return render(ctx, "landing.html")


@router.get("/dashboard")
def dashboard(
    ctx: RequestContext = Depends(require_user),
    store: TicketStore = Depends(get_ticket_store),
):
    with storage_failure("load dashboard"):
        tickets = store.get_all()
        stats = store.get_stats()
    return render(ctx, "dashboard.html", tickets=tickets, stats=stats)
