# helpdesk/ticket/repository.py
"""Persistence for the ticket collection.

The whole collection is one JSON array on disk; it is always read and
written as a unit. Repositories do no locking of their own, callers that
mutate must serialize access (see ``TicketStore``).
"""
import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Protocol

from pydantic import ValidationError

from helpdesk.core.errors import StorageError
from helpdesk.ticket.schemas import Ticket

logger = logging.getLogger(__name__)


class TicketRepository(Protocol):
    def exists(self) -> bool: ...

    def load(self) -> list[Ticket]: ...

    def save(self, tickets: list[Ticket]) -> None: ...


class JsonFileTicketRepository:
    def __init__(self, path: str | Path, strict: bool = True):
        self.path = Path(path)
        self.strict = strict

    def exists(self) -> bool:
        return self.path.exists()

    def load(self) -> list[Ticket]:
        if not self.path.exists():
            return []
        try:
            raw = self.path.read_text(encoding="utf-8")
        except OSError as exc:
            raise StorageError(f"cannot read {self.path}: {exc}") from exc

        try:
            data = json.loads(raw)
            if not isinstance(data, list):
                raise ValueError("document is not a JSON array")
            return [Ticket.model_validate(item) for item in data]
        except (ValueError, ValidationError) as exc:
            # json.JSONDecodeError is a ValueError
            if self.strict:
                raise StorageError(f"corrupt ticket document {self.path}: {exc}") from exc
            logger.warning("Ignoring unreadable ticket document %s: %s", self.path, exc)
            return []

    def save(self, tickets: list[Ticket]) -> None:
        payload = json.dumps([t.to_document() for t in tickets], indent=4)
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=self.path.parent, prefix=".tickets-", suffix=".tmp")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as fh:
                    fh.write(payload)
                os.replace(tmp_name, self.path)
            except BaseException:
                if os.path.exists(tmp_name):
                    os.unlink(tmp_name)
                raise
        except OSError as exc:
            raise StorageError(f"cannot write {self.path}: {exc}") from exc
        logger.debug("Wrote %d tickets to %s", len(tickets), self.path)
