# Organization Feature - Service

from typing import Optional
from bson import ObjectId
from app.features.organizations.models import Organization
from app.features.organizations.schemas import OrganizationResponse, UpdateOrganizationRequest
from app.core.logging import logger
from app.shared.exceptions import NotFoundException


class OrganizationService:
    """Service class for organization operations."""
    
    @staticmethod
    async def get_organization(organization_id: str) -> Optional[Organization]:
        """Get an organization by id, or None if the id is unknown or malformed."""
        try:
            return await Organization.get(ObjectId(organization_id))
        except Exception:
            return None
    
    @staticmethod
    async def get_organization_or_404(organization_id: str) -> Organization:
        organization = await OrganizationService.get_organization(organization_id)
        if not organization:
            raise NotFoundException("Organization not found")
        return organization
    
    @staticmethod
    async def update_organization(
        organization_id: str,
        request: UpdateOrganizationRequest
    ) -> Organization:
        """Update organization settings."""
        organization = await OrganizationService.get_organization_or_404(organization_id)
        
        for field, value in request.model_dump(exclude_unset=True).items():
            setattr(organization, field, value)
        
        organization.update_timestamp()
        await organization.save()
        
        logger.info(f"Updated organization {organization_id}")
        return organization
    
    @staticmethod
    def organization_to_response(organization: Organization) -> OrganizationResponse:
        return OrganizationResponse(
            id=str(organization.id),
            name=organization.name,
            owner_id=organization.owner_id,
            address=organization.address,
            logo_url=organization.logo_url,
            primary_color=organization.primary_color,
            phone=organization.phone,
            email=organization.email,
            created_at=organization.created_at,
            updated_at=organization.updated_at,
        )
