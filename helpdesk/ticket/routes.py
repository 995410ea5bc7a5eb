# helpdesk/ticket/routes.py
from contextlib import contextmanager

from fastapi import APIRouter, Depends, Form, HTTPException, Request
from pydantic import ValidationError

from helpdesk.core.context import (
    ANY_METHOD,
    RequestContext,
    json_response,
    redirect,
    render,
    require_user,
    templates,
)
from helpdesk.core.errors import NotFound, StorageError, ValidationFailure
from helpdesk.ticket.schemas import TicketInput, TicketPriority, TicketStatus
from helpdesk.ticket.services import TicketStore

router = APIRouter(prefix="/tickets", tags=["Tickets"])

templates.env.globals.update(
    statuses=[s.value for s in TicketStatus],
    priorities=[p.value for p in TicketPriority],
)


def get_ticket_store(request: Request) -> TicketStore:
    return request.app.state.ticket_store


def ticket_id_path(ticket_id: str) -> str:
    if not (ticket_id.isascii() and ticket_id.isdigit()):
        raise HTTPException(status_code=404, detail="Not Found")
    return ticket_id


@contextmanager
def storage_failure(action: str):
    try:
        yield
    except StorageError as exc:
        raise StorageError(f"Failed to {action}: {exc.message}") from exc


def ticket_form(
    title: str = Form(default=""),
    description: str = Form(default=""),
    status: str = Form(default="open"),
    priority: str = Form(default="medium"),
    assignee: str = Form(default=""),
) -> dict:
    return {
        "title": title,
        "description": description,
        "status": status,
        "priority": priority,
        "assignee": assignee,
    }


def parse_ticket(fields: dict, redirect_to: str) -> TicketInput:
    try:
        return TicketInput.model_validate(fields)
    except ValidationError as exc:
        problems = "; ".join(
            f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in exc.errors()
        )
        raise ValidationFailure(f"Invalid ticket data ({problems})", redirect_to=redirect_to) from exc


@router.get("")
def list_all(
    ctx: RequestContext = Depends(require_user),
    store: TicketStore = Depends(get_ticket_store),
):
    with storage_failure("load tickets"):
        tickets = store.get_all()
    return render(ctx, "tickets/index.html", tickets=tickets)


@router.post("")
def create(
    ctx: RequestContext = Depends(require_user),
    fields: dict = Depends(ticket_form),
    store: TicketStore = Depends(get_ticket_store),
):
    payload = parse_ticket(fields, redirect_to="/tickets")
    with storage_failure("create ticket"):
        ticket = store.create(payload)
    ctx.set_flash("success", "Ticket created successfully!")
    if ctx.expects_json:
        return json_response(
            ctx, {"status": "success", "message": "Ticket created", "ticket": ticket.to_document()}
        )
    return redirect(ctx, "/tickets")


@router.get("/{ticket_id}/edit")
def edit_form(
    ctx: RequestContext = Depends(require_user),
    ticket_id: str = Depends(ticket_id_path),
    store: TicketStore = Depends(get_ticket_store),
):
    with storage_failure("load ticket"):
        ticket = store.get_by_id(ticket_id)
    if ticket is None:
        raise NotFound("Ticket not found")
    return render(ctx, "tickets/edit.html", ticket=ticket)


@router.post("/{ticket_id}/edit")
def update(
    ctx: RequestContext = Depends(require_user),
    ticket_id: str = Depends(ticket_id_path),
    fields: dict = Depends(ticket_form),
    store: TicketStore = Depends(get_ticket_store),
):
    payload = parse_ticket(fields, redirect_to=f"/tickets/{ticket_id}/edit")
    with storage_failure("update ticket"):
        ticket = store.update(ticket_id, payload)
    if ticket is None:
        raise NotFound("Ticket not found")
    ctx.set_flash("success", "Ticket updated successfully!")
    if ctx.expects_json:
        return json_response(
            ctx, {"status": "success", "message": "Ticket updated", "ticket": ticket.to_document()}
        )
    return redirect(ctx, "/tickets")


@router.api_route("/{ticket_id}/delete", methods=ANY_METHOD)
def delete(
    ctx: RequestContext = Depends(require_user),
    ticket_id: str = Depends(ticket_id_path),
    store: TicketStore = Depends(get_ticket_store),
):
    with storage_failure("delete ticket"):
        store.delete(ticket_id)
    ctx.set_flash("success", "Ticket deleted successfully!")
    if ctx.expects_json:
        return json_response(ctx, {"status": "success", "message": "Ticket deleted"})
    return redirect(ctx, "/tickets")
