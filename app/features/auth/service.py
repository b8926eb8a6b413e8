from typing import Optional
from app.features.auth.models import User
from app.features.auth.schemas import LoginRequest, UserResponse
from app.core.security import verify_password, create_access_token
from app.shared.exceptions import CredentialsException
from app.core.logging import logger


class AuthService:
    """Authentication service for handling auth business logic."""
    
    @staticmethod
    async def login(login_data: LoginRequest) -> tuple[User, str]:
        """
        Authenticate user and return access token.
        
        Returns:
            tuple: (user, access_token)
        """
        user = await AuthService.get_user_by_email(login_data.email)
        if not user or not verify_password(login_data.password, user.password_hash):
            logger.warning(f"Failed login attempt for {login_data.email}")
            raise CredentialsException("Invalid email or password")
        
        if not user.is_active:
            raise CredentialsException("Account is inactive")
        
        access_token = create_access_token(user.email, organization_id=user.organization_id)
        
        logger.info(f"User {user.email} logged in")
        return user, access_token
    
    @staticmethod
    async def get_user_by_email(email: str) -> Optional[User]:
        """Get user by email."""
        return await User.find_one(User.email == email)
    
    @staticmethod
    def user_to_response(user: User) -> UserResponse:
        return UserResponse(
            id=str(user.id),
            email=user.email,
            name=user.name,
            phone=user.phone,
            role=user.role,
            organization_id=user.organization_id,
            is_active=user.is_active,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )
