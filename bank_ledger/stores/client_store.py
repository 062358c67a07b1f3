"""Read access to clients, used to verify account ownership."""

from sqlalchemy.orm import Session

from bank_ledger.exceptions import NotFoundError
from bank_ledger.models.client import Client


class ClientStore:

    def __init__(self, db: Session):
        self.db = db

    def get(self, client_id: int) -> Client:
        client = self.db.get(Client, client_id)
        if not client:
            raise NotFoundError("Client", client_id)
        return client
