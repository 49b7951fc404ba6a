"""
Company, branding and custom field endpoints.
"""

from fastapi import APIRouter, Depends, HTTPException, status

from cpg_inventory.api.dependencies import (
    get_branding,
    get_comp_store,
    get_company,
    get_company_id,
)
from cpg_inventory.application.dto.mappers import company_to_response, custom_field_to_response
from cpg_inventory.application.dto.requests import (
    CreateCompanyRequest,
    CreateCustomFieldRequest,
    UpdateBrandingRequest,
)
from cpg_inventory.application.dto.responses import (
    BrandingResponse,
    CompanyResponse,
    CustomFieldListResponse,
    CustomFieldResponse,
    ErrorResponse,
)
from cpg_inventory.config import get_settings
from cpg_inventory.core.entities.company import Company, CustomField, CustomFieldTable
from cpg_inventory.core.exceptions import CompanyNotFoundError
from cpg_inventory.core.services import BrandingConfig
from cpg_inventory.infrastructure.storage.sqlite import SQLiteCompanyStore

router = APIRouter(prefix="/api/company", tags=["company"])


def _branding_response(branding: BrandingConfig) -> BrandingResponse:
    return BrandingResponse(
        primary_color=branding.primary_color,
        accent_color=branding.accent_color,
        css_variables=branding.css_variables(),
    )


@router.post(
    "",
    response_model=CompanyResponse,
    status_code=status.HTTP_201_CREATED,
    responses={422: {"model": ErrorResponse}},
)
async def create_company(
    request: CreateCompanyRequest,
    store: SQLiteCompanyStore = Depends(get_comp_store),
) -> CompanyResponse:
    """Register a company. Missing colors fall back to the configured defaults."""
    defaults = get_settings().inventory
    company = Company(
        name=request.name.strip(),
        domain=request.domain.strip(),
        primary_color=request.primary_color or defaults.default_primary_color,
        accent_color=request.accent_color or defaults.default_accent_color,
    )
    created = await store.create_company(company)
    return company_to_response(created)


@router.get("", response_model=CompanyResponse)
async def get_current_company(
    company: Company = Depends(get_company),
) -> CompanyResponse:
    """The company named by the request header."""
    return company_to_response(company)


@router.get("/branding", response_model=BrandingResponse)
async def get_company_branding(
    branding: BrandingConfig = Depends(get_branding),
) -> BrandingResponse:
    """Current branding colors and the CSS variables derived from them."""
    return _branding_response(branding)


@router.put(
    "/branding",
    response_model=BrandingResponse,
    responses={404: {"model": ErrorResponse}, 422: {"model": ErrorResponse}},
)
async def update_company_branding(
    request: UpdateBrandingRequest,
    company_id: int = Depends(get_company_id),
    store: SQLiteCompanyStore = Depends(get_comp_store),
) -> BrandingResponse:
    """Store new branding colors and return the reloaded branding."""
    company = await store.update_branding(
        company_id, request.primary_color, request.accent_color
    )
    if company is None:
        raise CompanyNotFoundError(company_id)
    return _branding_response(BrandingConfig.from_company(company))


@router.get("/custom-fields", response_model=CustomFieldListResponse)
async def list_custom_fields(
    table_name: CustomFieldTable,
    company_id: int = Depends(get_company_id),
    store: SQLiteCompanyStore = Depends(get_comp_store),
) -> CustomFieldListResponse:
    """Custom field definitions for a table, in display order."""
    fields = await store.list_custom_fields(company_id, table_name)
    return CustomFieldListResponse(
        table_name=table_name.value,
        fields=[custom_field_to_response(f) for f in fields],
    )


@router.post(
    "/custom-fields",
    response_model=CustomFieldResponse,
    status_code=status.HTTP_201_CREATED,
    responses={409: {"model": ErrorResponse}},
)
async def create_custom_field(
    request: CreateCustomFieldRequest,
    company_id: int = Depends(get_company_id),
    store: SQLiteCompanyStore = Depends(get_comp_store),
) -> CustomFieldResponse:
    """Define a new custom field, appended after existing ones."""
    field = CustomField(
        company_id=company_id,
        table_name=request.table_name,
        field_name=request.field_name.strip(),
        field_type=request.field_type,
    )
    created = await store.create_custom_field(field)
    return custom_field_to_response(created)


@router.delete(
    "/custom-fields/{field_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={404: {"model": ErrorResponse}},
)
async def delete_custom_field(
    field_id: int,
    company_id: int = Depends(get_company_id),
    store: SQLiteCompanyStore = Depends(get_comp_store),
) -> None:
    """Delete a custom field definition. Stored values are left in place."""
    deleted = await store.delete_custom_field(company_id, field_id)
    if not deleted:
        raise HTTPException(status_code=404, detail=f"Custom field {field_id} not found")
