"""User API endpoints: signup, login, profile and the chat proxy."""

from fastapi import APIRouter, Depends, status

from ..core.exceptions import AccountNotFoundError, UnauthenticatedError
from ..core.security import TokenPayload
from ..dependencies import (
    get_account_service,
    get_auth_service,
    get_chat_service,
    require_user,
)
from ..services import AccountService, AuthService, ChatService
from ..schemas.auth import LoginRequest, TokenResponse
from ..schemas.account import (
    AccountMessageResponse,
    AccountResponse,
    ProfileResponse,
    SignupRequest,
)
from ..schemas.chat import ChatReply, ChatRequest


router = APIRouter(prefix="/user", tags=["User"])


@router.post("/signup", response_model=AccountMessageResponse, status_code=status.HTTP_201_CREATED)
async def signup(
    request: SignupRequest,
    account_service: AccountService = Depends(get_account_service),
):
    """
    Register a new user.

    Fails with 400 when the email is already registered.
    """
    account = await account_service.signup(
        username=request.username,
        email=request.email,
        password=request.password,
    )
    return AccountMessageResponse(
        message="User added successfully.",
        user_data=AccountResponse.model_validate(account),
    )


@router.post("/login", response_model=TokenResponse)
async def login(
    request: LoginRequest,
    auth_service: AuthService = Depends(get_auth_service),
):
    """Login with email and password."""
    token, _ = await auth_service.login(email=request.email, password=request.password)
    return TokenResponse(token=token)


@router.get("/data", response_model=ProfileResponse)
async def user_data(
    payload: TokenPayload = Depends(require_user),
    account_service: AccountService = Depends(get_account_service),
):
    """Get the calling account's username and email."""
    try:
        account = await account_service.get(payload.sub)
    except AccountNotFoundError:
        # Token outlived its account
        raise UnauthenticatedError()
    return ProfileResponse.model_validate(account)


@router.post("/chatbox", response_model=ChatReply)
async def chatbox(
    request: ChatRequest,
    payload: TokenPayload = Depends(require_user),
    chat_service: ChatService = Depends(get_chat_service),
):
    """
    Send a prompt to the completion API.

    Both the prompt and the reply are stored in the chat log.
    """
    text = await chat_service.send(payload.sub, request.prompt)
    return ChatReply(text=text)
