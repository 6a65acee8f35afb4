"""Admin API endpoints: login and account management."""

from fastapi import APIRouter, Depends, status

from ..dependencies import get_account_service, get_auth_service, require_admin
from ..services import AccountService, AuthService
from ..schemas.auth import AdminTokenResponse, LoginRequest
from ..schemas.account import (
    AccountCreate,
    AccountListResponse,
    AccountMessageResponse,
    AccountResponse,
    AccountUpdate,
    MessageResponse,
)


router = APIRouter(prefix="/admin", tags=["Admin"])


@router.post("/login", response_model=AdminTokenResponse)
async def login(
    request: LoginRequest,
    auth_service: AuthService = Depends(get_auth_service),
):
    """
    Login with email and password.

    Returns a session token carrying the account's role.
    """
    token, _ = await auth_service.login(email=request.email, password=request.password)
    return AdminTokenResponse(admin_token=token)


@router.get(
    "/allUsers",
    response_model=AccountListResponse,
    dependencies=[Depends(require_admin)],
)
async def all_users(
    account_service: AccountService = Depends(get_account_service),
):
    """List every account."""
    accounts = await account_service.list_accounts()
    return AccountListResponse(
        all_users=[AccountResponse.model_validate(a) for a in accounts]
    )


@router.post(
    "/addUser",
    response_model=AccountMessageResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
)
async def add_user(
    request: AccountCreate,
    account_service: AccountService = Depends(get_account_service),
):
    """Create an account with any role."""
    account = await account_service.create(
        username=request.username,
        email=request.email,
        password=request.password,
        role=request.role,
    )
    return AccountMessageResponse(
        message="User added successfully.",
        user_data=AccountResponse.model_validate(account),
    )


@router.put(
    "/edituser/{account_id}",
    response_model=AccountMessageResponse,
    dependencies=[Depends(require_admin)],
)
async def edit_user(
    account_id: str,
    updates: AccountUpdate,
    account_service: AccountService = Depends(get_account_service),
):
    """
    Overwrite the provided fields of an account.

    Can update: username, email, password, role, messages
    """
    account = await account_service.edit(
        account_id, **updates.model_dump(exclude_unset=True, exclude_none=True)
    )
    return AccountMessageResponse(
        message="User edited successfully.",
        user_data=AccountResponse.model_validate(account),
    )


@router.delete(
    "/deleteuser/{account_id}",
    response_model=MessageResponse,
    dependencies=[Depends(require_admin)],
)
async def delete_user(
    account_id: str,
    account_service: AccountService = Depends(get_account_service),
):
    """
    Delete an account.

    This is a hard delete; the account's chat log entries are kept.
    """
    await account_service.delete(account_id)
    return MessageResponse(message="User deleted successfully.")
