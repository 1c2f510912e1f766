"""Login, lookup and synchronization endpoints for the federated registry."""

from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException
from loguru import logger
from pydantic import BaseModel, Field

from src.federation.api.http.deps import get_provider, get_realm, get_synchronizer
from src.federation.core.exceptions import MalformedIdentifierError, ProvisioningError
from src.federation.core.models import PASSWORD, SyncResult
from src.federation.core.services import BulkSynchronizer, RegistryFederationProvider
from src.federation.entities.realm import Realm

router = APIRouter(prefix="/realms/{realm}", tags=["federation"])


class LoginRequest(BaseModel):
    username: str
    password: str = Field(repr=False)
    credential_type: str = PASSWORD


class LoginResponse(BaseModel):
    valid: bool


class VirtualUserResponse(BaseModel):
    id: str
    username: str


class SyncSinceRequest(BaseModel):
    since: datetime | None = None


@router.post("/login", response_model=LoginResponse)
def login(
    body: LoginRequest,
    resolved_realm: Realm = Depends(get_realm),
    provider: RegistryFederationProvider = Depends(get_provider),
) -> LoginResponse:
    """Validate a credential; the first success provisions a local account."""
    user = provider.get_user_by_username(body.username)
    if user is None:
        return LoginResponse(valid=False)

    try:
        valid = provider.is_valid(resolved_realm, user, body.credential_type, body.password)
    except ProvisioningError as e:
        logger.error("Login of {} failed during provisioning: {}", body.username, e)
        raise HTTPException(status_code=500, detail="Account provisioning failed") from e

    return LoginResponse(valid=valid)


@router.get("/users/{composite_id}", response_model=VirtualUserResponse)
def get_user(
    composite_id: str,
    resolved_realm: Realm = Depends(get_realm),
    provider: RegistryFederationProvider = Depends(get_provider),
) -> VirtualUserResponse:
    try:
        user = provider.get_user_by_id(composite_id)
    except MalformedIdentifierError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e

    if user is None:
        raise HTTPException(status_code=404, detail="User not found")
    return VirtualUserResponse(id=user.id, username=user.username)


@router.post("/sync", response_model=SyncResult)
def sync(
    resolved_realm: Realm = Depends(get_realm),
    synchronizer: BulkSynchronizer = Depends(get_synchronizer),
) -> SyncResult:
    return _checked(synchronizer.sync(resolved_realm.id))


@router.post("/sync-since", response_model=SyncResult)
def sync_since(
    body: SyncSinceRequest,
    resolved_realm: Realm = Depends(get_realm),
    synchronizer: BulkSynchronizer = Depends(get_synchronizer),
) -> SyncResult:
    return _checked(synchronizer.sync_since(body.since, resolved_realm.id))


def _checked(result: SyncResult) -> SyncResult:
    if not result.ok:
        raise HTTPException(status_code=500, detail=result.model_dump(mode="json"))
    return result
