from sqlmodel import Session, select

from .entity import Role
from .table import RoleTable


class RoleRepository:
    """Data-access layer for realm roles."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def get_by_name(self, realm_id: str, name: str) -> Role | None:
        statement = select(RoleTable).where(
            (RoleTable.realm_id == realm_id) & (RoleTable.name == name)
        )
        row = self._session.exec(statement).first()
        if row is None:
            return None
        return Role.model_validate(row, from_attributes=True)

    def list_for_realm(self, realm_id: str) -> list[Role]:
        statement = (
            select(RoleTable).where(RoleTable.realm_id == realm_id).order_by(RoleTable.name)
        )
        return [
            Role.model_validate(row, from_attributes=True)
            for row in self._session.exec(statement).all()
        ]

    def create(self, role: Role) -> Role:
        row = RoleTable(
            id=role.id,
            realm_id=role.realm_id,
            name=role.name,
            description=role.description,
            created_at=role.created_at,
        )
        self._session.add(row)
        self._session.flush()
        return Role.model_validate(row, from_attributes=True)
