from sqlmodel import Session, select

from .entity import Realm
from .table import RealmTable


class RealmRepository:
    """Data-access layer for realms."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def get(self, realm_id: str) -> Realm | None:
        row = self._session.get(RealmTable, realm_id)
        if row is None:
            return None
        return Realm.model_validate(row, from_attributes=True)

    def get_by_name(self, name: str) -> Realm | None:
        statement = select(RealmTable).where(RealmTable.name == name)
        row = self._session.exec(statement).first()
        if row is None:
            return None
        return Realm.model_validate(row, from_attributes=True)

    def resolve(self, realm_ref: str) -> Realm | None:
        """Look a realm up by id, falling back to its name."""
        return self.get(realm_ref) or self.get_by_name(realm_ref)

    def list_all(self) -> list[Realm]:
        rows = self._session.exec(select(RealmTable).order_by(RealmTable.name)).all()
        return [Realm.model_validate(row, from_attributes=True) for row in rows]

    def create(self, realm: Realm) -> Realm:
        row = RealmTable(id=realm.id, name=realm.name, created_at=realm.created_at)
        self._session.add(row)
        self._session.flush()
        return Realm.model_validate(row, from_attributes=True)
