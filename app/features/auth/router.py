from fastapi import APIRouter, Depends
from app.features.auth.schemas import LoginRequest, LoginResponse, UserResponse, SeenFlagResponse
from app.features.auth.service import AuthService
from app.features.auth.dependencies import get_current_user, get_user_store
from app.features.auth.models import User
from app.core.storage import KeyValueStore, has_seen, mark_seen


router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post("/login", response_model=LoginResponse)
async def login(login_data: LoginRequest):
    """
    Authenticate user and return access token.
    
    - **email**: User's email address
    - **password**: User's password
    """
    user, access_token = await AuthService.login(login_data)
    
    return LoginResponse(
        access_token=access_token,
        token_type="bearer",
        user=AuthService.user_to_response(user),
    )


@router.get("/me", response_model=UserResponse)
async def get_me(current_user: User = Depends(get_current_user)):
    """Get current user information."""
    return AuthService.user_to_response(current_user)


@router.get("/me/seen/{flag}", response_model=SeenFlagResponse)
async def get_seen_flag(flag: str, store: KeyValueStore = Depends(get_user_store)):
    """Whether the current user has dismissed a one-time notice."""
    return SeenFlagResponse(flag=flag, seen=await has_seen(store, flag))


@router.put("/me/seen/{flag}", response_model=SeenFlagResponse)
async def set_seen_flag(flag: str, store: KeyValueStore = Depends(get_user_store)):
    """Record that the current user has dismissed a one-time notice."""
    await mark_seen(store, flag)
    return SeenFlagResponse(flag=flag, seen=True)
