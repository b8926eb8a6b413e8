"""MongoDB database connection manager."""

from motor.motor_asyncio import AsyncIOMotorClient
from beanie import init_beanie
from typing import Optional

from app.config import settings
from app.core.logging import logger


class Database:
    """MongoDB database connection manager."""
    
    client: Optional[AsyncIOMotorClient] = None
    
    @classmethod
    async def connect_db(cls):
        """Connect to MongoDB and initialize Beanie."""
        cls.client = AsyncIOMotorClient(settings.MONGODB_URL)
        
        # Import document models
        from app.core.storage import StoredValue
        from app.features.appointments.models import Appointment
        from app.features.auth.models import User
        from app.features.lab_results.models import LabResult
        from app.features.messages.models import Message
        from app.features.organizations.models import Organization
        from app.features.patients.models import Patient
        from app.features.prescriptions.models import Prescription
        from app.features.vaccinations.models import Vaccination
        from app.features.visits.models import Visit
        
        # Initialize Beanie with document models
        await init_beanie(
            database=cls.client[settings.DATABASE_NAME],
            document_models=[
                Organization,
                User,
                Patient,
                Visit,
                Appointment,
                Prescription,
                LabResult,
                Vaccination,
                Message,
                StoredValue,
            ]
        )
        
        logger.info(f"Connected to MongoDB database: {settings.DATABASE_NAME}")
    
    @classmethod
    async def close_db(cls):
        """Close MongoDB connection."""
        if cls.client:
            cls.client.close()
            logger.info("Closed MongoDB connection")
