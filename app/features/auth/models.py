from beanie import Document, Indexed
from pydantic import EmailStr
from typing import Optional
from app.shared.models import TimestampMixin


class User(Document, TimestampMixin):
    """Staff user document model."""
    
    email: Indexed(EmailStr, unique=True)
    password_hash: str
    name: str
    phone: Optional[str] = None
    is_active: bool = True
    
    # Role and organization association
    role: str = "doctor"  # admin, doctor, nurse, pharmacist, receptionist
    organization_id: Optional[str] = None
    
    class Settings:
        name = "users"
        use_state_management = True
