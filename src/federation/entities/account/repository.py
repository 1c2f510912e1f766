from sqlmodel import Session, col, func, select

from src.federation.entities.role.table import RoleTable

from .entity import CredentialRecord, LocalAccount
from .table import (
    AccountAttributeTable,
    AccountRoleTable,
    CredentialTable,
    LocalAccountTable,
)


class LocalAccountRepository:
    """Data-access layer for local accounts.

    Every write is flushed but never committed; the caller owns the
    transaction.
    """

    def __init__(self, session: Session) -> None:
        self._session = session

    def _get_row(self, realm_id: str, username: str) -> LocalAccountTable | None:
        statement = select(LocalAccountTable).where(
            (LocalAccountTable.realm_id == realm_id)
            & (LocalAccountTable.username == username)
        )
        return self._session.exec(statement).first()

    def _to_entity(self, row: LocalAccountTable) -> LocalAccount:
        attributes = self._session.exec(
            select(AccountAttributeTable).where(AccountAttributeTable.account_id == row.id)
        ).all()
        roles = self._session.exec(
            select(RoleTable.name)
            .join(AccountRoleTable, col(AccountRoleTable.role_id) == col(RoleTable.id))
            .where(AccountRoleTable.account_id == row.id)
        ).all()
        credentials = self._session.exec(
            select(CredentialTable)
            .where(CredentialTable.account_id == row.id)
            .order_by(col(CredentialTable.position))
        ).all()

        return LocalAccount(
            id=row.id,
            realm_id=row.realm_id,
            username=row.username,
            enabled=row.enabled,
            created_at=row.created_at,
            attributes={attr.name: attr.value for attr in attributes},
            roles=set(roles),
            credentials=[
                CredentialRecord(type=cred.type, value=cred.value) for cred in credentials
            ],
        )

    def get(self, account_id: str) -> LocalAccount | None:
        row = self._session.get(LocalAccountTable, account_id)
        if row is None:
            return None
        return self._to_entity(row)

    def get_by_username(self, realm_id: str, username: str) -> LocalAccount | None:
        row = self._get_row(realm_id, username)
        if row is None:
            return None
        return self._to_entity(row)

    def exists(self, realm_id: str, username: str) -> bool:
        return self._get_row(realm_id, username) is not None

    def list_for_realm(self, realm_id: str) -> list[LocalAccount]:
        statement = (
            select(LocalAccountTable)
            .where(LocalAccountTable.realm_id == realm_id)
            .order_by(col(LocalAccountTable.username))
        )
        return [self._to_entity(row) for row in self._session.exec(statement).all()]

    def count_for_realm(self, realm_id: str) -> int:
        statement = select(func.count()).select_from(LocalAccountTable).where(
            LocalAccountTable.realm_id == realm_id
        )
        return self._session.exec(statement).one()

    def create(self, account: LocalAccount) -> LocalAccount:
        """Insert the bare account row; attributes, roles and credentials are
        written through their own operations."""
        row = LocalAccountTable(
            id=account.id,
            realm_id=account.realm_id,
            username=account.username,
            enabled=account.enabled,
            created_at=account.created_at,
        )
        self._session.add(row)
        self._session.flush()
        return self._to_entity(row)

    def set_enabled(self, account_id: str, enabled: bool) -> None:
        row = self._session.get(LocalAccountTable, account_id)
        if row is None:
            raise LookupError(f"Account {account_id} not found")
        row.enabled = enabled
        self._session.add(row)
        self._session.flush()

    def grant_role(self, account_id: str, role_id: str) -> None:
        statement = select(AccountRoleTable).where(
            (AccountRoleTable.account_id == account_id)
            & (AccountRoleTable.role_id == role_id)
        )
        if self._session.exec(statement).first() is not None:
            return
        self._session.add(AccountRoleTable(account_id=account_id, role_id=role_id))
        self._session.flush()

    def set_single_attribute(self, account_id: str, name: str, value: str) -> None:
        """Set ``name`` to exactly one value, replacing any previous one."""
        statement = select(AccountAttributeTable).where(
            (AccountAttributeTable.account_id == account_id)
            & (AccountAttributeTable.name == name)
        )
        row = self._session.exec(statement).first()
        if row is None:
            row = AccountAttributeTable(account_id=account_id, name=name, value=value)
        else:
            row.value = value
        self._session.add(row)
        self._session.flush()

    def add_credential(self, account_id: str, credential: CredentialRecord) -> None:
        position = self._session.exec(
            select(func.count())
            .select_from(CredentialTable)
            .where(CredentialTable.account_id == account_id)
        ).one()
        self._session.add(
            CredentialTable(
                account_id=account_id,
                type=credential.type,
                value=credential.value,
                position=position,
            )
        )
        self._session.flush()
