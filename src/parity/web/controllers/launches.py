"""Launch API endpoints.

Deploying a launch is a client-driven sequence:
1. POST /launches/{id}/recover-deploy with the prepared pool, in case an
   earlier attempt already landed
2. POST /launches/{id}/prepare-deploy to get a partially signed transaction
3. The creator signs and submits it from their wallet
4. POST /launches/{id}/confirm-deploy with the signature, or
   /recover-deploy if the wallet reports the transaction as already processed
"""

from fastapi import APIRouter, Depends, status

from parity.api.auth import require_user
from parity.curve.factory import get_curve_client
from parity.ledger.database import get_db
from parity.web.contracts.launches import (
    ConfirmDeployRequest,
    ConfirmDeployResponse,
    LaunchCreateRequest,
    LaunchCreatedResponse,
    LaunchResponse,
    LaunchUpdateRequest,
    PrepareDeployRequest,
    PrepareDeployResponse,
    RecoverDeployRequest,
    RecoverDeployResponse,
    SuccessResponse,
    SyncStatusResponse,
)
from parity.web.services.launch_service import LaunchService

router = APIRouter(prefix="/launches", tags=["launches"])


@router.get("", response_model=list[LaunchResponse])
async def list_launches(user_id: str = Depends(require_user)) -> list[LaunchResponse]:
    """List the caller's launches, newest first."""
    async with get_db() as session:
        service = LaunchService(session, get_curve_client())
        launches = await service.list_launches(user_id)
        return [LaunchResponse.model_validate(launch) for launch in launches]


@router.post("", response_model=LaunchCreatedResponse, status_code=status.HTTP_201_CREATED)
async def create_launch(
    request: LaunchCreateRequest,
    user_id: str = Depends(require_user),
) -> LaunchCreatedResponse:
    """Create a pending launch."""
    async with get_db() as session:
        service = LaunchService(session, get_curve_client())
        launch = await service.create_launch(user_id, request)
        return LaunchCreatedResponse(id=launch.id)


@router.get("/{launch_id}", response_model=LaunchResponse)
async def get_launch(launch_id: str, user_id: str = Depends(require_user)) -> LaunchResponse:
    async with get_db() as session:
        service = LaunchService(session, get_curve_client())
        launch = await service.get_launch(launch_id, user_id)
        return LaunchResponse.model_validate(launch)


@router.patch("/{launch_id}", response_model=SuccessResponse)
async def update_launch(
    launch_id: str,
    request: LaunchUpdateRequest,
    user_id: str = Depends(require_user),
) -> SuccessResponse:
    """Edit a launch. Only pending launches can be edited."""
    async with get_db() as session:
        service = LaunchService(session, get_curve_client())
        await service.update_launch(launch_id, user_id, request)
    return SuccessResponse()


@router.delete("/{launch_id}", response_model=SuccessResponse)
async def delete_launch(launch_id: str, user_id: str = Depends(require_user)) -> SuccessResponse:
    """Delete a launch. Only pending launches can be deleted."""
    async with get_db() as session:
        service = LaunchService(session, get_curve_client())
        await service.delete_launch(launch_id, user_id)
    return SuccessResponse()


@router.post("/{launch_id}/prepare-deploy", response_model=PrepareDeployResponse)
async def prepare_deploy(
    launch_id: str,
    request: PrepareDeployRequest,
    user_id: str = Depends(require_user),
) -> PrepareDeployResponse:
    """Prepare the pool-creation transaction.

    The returned transaction is signed by the new token mint only. The
    creator wallet must add its signature and submit it.
    """
    async with get_db() as session:
        service = LaunchService(session, get_curve_client())
        return await service.prepare_deploy(launch_id, user_id, request.creator_wallet)


@router.post("/{launch_id}/confirm-deploy", response_model=ConfirmDeployResponse)
async def confirm_deploy(
    launch_id: str,
    request: ConfirmDeployRequest,
    user_id: str = Depends(require_user),
) -> ConfirmDeployResponse:
    """Confirm a submitted deploy once the pool exists on-chain."""
    async with get_db() as session:
        service = LaunchService(session, get_curve_client())
        return await service.confirm_deploy(launch_id, user_id, request)


@router.post("/{launch_id}/recover-deploy", response_model=RecoverDeployResponse)
async def recover_deploy(
    launch_id: str,
    request: RecoverDeployRequest,
    user_id: str = Depends(require_user),
) -> RecoverDeployResponse:
    """Activate the launch if its pool already exists; success=false otherwise."""
    async with get_db() as session:
        service = LaunchService(session, get_curve_client())
        return await service.recover_deploy(launch_id, user_id, request)


@router.post("/{launch_id}/sync", response_model=SyncStatusResponse)
async def sync_launch(launch_id: str, user_id: str = Depends(require_user)) -> SyncStatusResponse:
    """Reconcile the launch status with the chain (migration, expiry)."""
    async with get_db() as session:
        service = LaunchService(session, get_curve_client())
        return await service.sync_status(launch_id, user_id)
