from src.federation.core.services import DbSessionService
from src.federation.entities.account import LocalAccount, LocalAccountRepository
from src.federation.entities.realm import Realm


def load_account(db_service: DbSessionService, realm: Realm, username: str) -> LocalAccount | None:
    with db_service.session_scope() as session:
        return LocalAccountRepository(session).get_by_username(realm.id, username)


def count_accounts(db_service: DbSessionService, realm: Realm) -> int:
    with db_service.session_scope() as session:
        return LocalAccountRepository(session).count_for_realm(realm.id)


def list_accounts(db_service: DbSessionService, realm: Realm) -> list[LocalAccount]:
    with db_service.session_scope() as session:
        return LocalAccountRepository(session).list_for_realm(realm.id)
