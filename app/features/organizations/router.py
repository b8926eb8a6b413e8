# Organization Feature - Router

from fastapi import APIRouter, Depends
from app.features.organizations.schemas import OrganizationResponse, UpdateOrganizationRequest
from app.features.organizations.service import OrganizationService
from app.features.auth.dependencies import get_current_user, require_organization
from app.features.auth.models import User


router = APIRouter(prefix="/organizations", tags=["Organizations"])


@router.get("/me", response_model=OrganizationResponse)
async def get_my_organization(current_user: User = Depends(get_current_user)):
    """
    Get the current user's organization.
    
    Requires authentication.
    """
    organization_id = require_organization(current_user)
    organization = await OrganizationService.get_organization_or_404(organization_id)
    return OrganizationService.organization_to_response(organization)


@router.put("/me", response_model=OrganizationResponse)
async def update_my_organization(
    request: UpdateOrganizationRequest,
    current_user: User = Depends(get_current_user)
):
    """
    Update the current user's organization settings.
    
    Requires authentication.
    """
    organization_id = require_organization(current_user)
    organization = await OrganizationService.update_organization(organization_id, request)
    return OrganizationService.organization_to_response(organization)
