# helpdesk/ticket/services.py
import logging
import threading
from datetime import datetime, timezone

from helpdesk.ticket.repository import TicketRepository
from helpdesk.ticket.schemas import Ticket, TicketInput, TicketStats, TicketStatus

logger = logging.getLogger(__name__)

SAMPLE_TICKETS = [
    {
        "id": "1",
        "title": "Fix login authentication bug",
        "status": "open",
        "description": "Users are experiencing issues logging in with valid credentials. "
        "Need to investigate the authentication flow and session management.",
        "priority": "high",
        "assignee": "Sarah Johnson",
        "createdAt": "2025-01-15T10:30:00Z",
    },
    {
        "id": "2",
        "title": "Update dashboard UI components",
        "status": "in_progress",
        "description": "Modernize the dashboard interface with the new design system. "
        "Update colors, spacing, and component styles.",
        "priority": "medium",
        "assignee": "Michael Chen",
        "createdAt": "2025-01-14T14:20:00Z",
    },
    {
        "id": "3",
        "title": "Add export functionality for reports",
        "status": "closed",
        "description": "Allow users to export ticket data to CSV and PDF formats. "
        "Include filters for date range and status.",
        "priority": "low",
        "assignee": "Emma Williams",
        "createdAt": "2025-01-10T09:15:00Z",
    },
    {
        "id": "4",
        "title": "Implement real-time notifications",
        "status": "in_progress",
        "description": "Add WebSocket support for real-time ticket updates and notifications. "
        "Show toast messages for new tickets.",
        "priority": "high",
        "assignee": "David Martinez",
        "createdAt": "2025-01-16T11:45:00Z",
    },
    {
        "id": "5",
        "title": "Optimize database queries",
        "status": "open",
        "description": "Improve performance of ticket listing and search queries. "
        "Add proper indexing and caching.",
        "priority": "medium",
        "assignee": "Lisa Anderson",
        "createdAt": "2025-01-17T08:00:00Z",
    },
]


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="seconds")


class TicketStore:
    """Ticket operations over a repository.

    Every method holds the store lock for its full read-modify-write cycle,
    so concurrent requests in the same process never lose each other's
    writes.
    """

    def __init__(self, repository: TicketRepository):
        self.repository = repository
        self._lock = threading.RLock()

    def initialize(self, seed: bool = True) -> None:
        with self._lock:
            if self.repository.exists():
                return
            tickets = [Ticket.model_validate(t) for t in SAMPLE_TICKETS] if seed else []
            self.repository.save(tickets)
            logger.info("Initialized ticket document with %d sample tickets", len(tickets))

    def get_all(self) -> list[Ticket]:
        with self._lock:
            return self.repository.load()

    def get_by_id(self, ticket_id: str) -> Ticket | None:
        with self._lock:
            return next((t for t in self.repository.load() if t.id == ticket_id), None)

    def create(self, payload: TicketInput) -> Ticket:
        with self._lock:
            tickets = self.repository.load()
            # Ids are count based and can repeat once tickets have been deleted.
            ticket = Ticket(
                id=str(len(tickets) + 1),
                created_at=_now_iso(),
                **payload.model_dump(),
            )
            tickets.insert(0, ticket)
            self.repository.save(tickets)
        logger.info("Created ticket %s", ticket.id)
        return ticket

    def update(self, ticket_id: str, payload: TicketInput) -> Ticket | None:
        with self._lock:
            tickets = self.repository.load()
            for index, ticket in enumerate(tickets):
                if ticket.id == ticket_id:
                    updated = ticket.model_copy(update=payload.model_dump())
                    tickets[index] = updated
                    self.repository.save(tickets)
                    break
            else:
                return None
        logger.info("Updated ticket %s", ticket_id)
        return updated

    def delete(self, ticket_id: str) -> None:
        with self._lock:
            tickets = self.repository.load()
            remaining = [t for t in tickets if t.id != ticket_id]
            self.repository.save(remaining)
        logger.info("Deleted %d ticket(s) with id %s", len(tickets) - len(remaining), ticket_id)

    def get_stats(self) -> TicketStats:
        tickets = self.get_all()
        return TicketStats(
            total=len(tickets),
            open=sum(1 for t in tickets if t.status == TicketStatus.OPEN),
            in_progress=sum(1 for t in tickets if t.status == TicketStatus.IN_PROGRESS),
            closed=sum(1 for t in tickets if t.status == TicketStatus.CLOSED),
        )
