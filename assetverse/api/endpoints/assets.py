"""Asset API: inventory CRUD and the available-assets catalog."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request

from assetverse.api.dependencies import CurrentUser, HRUser, get_asset_service
from assetverse.application.dtos import CreateAssetCommand, UpdateAssetCommand
from assetverse.application.use_cases import AssetService
from assetverse.core.constants import DEFAULT_PAGE_LIMIT, MAX_PAGE_LIMIT
from assetverse.core.limiter import limit_writes
from assetverse.domain.enums import ProductType
from assetverse.schemas.asset import AssetCreateRequest, AssetResponse, AssetUpdateRequest
from assetverse.schemas.common import SuccessResponse

router = APIRouter()

AssetServiceDep = Annotated[AssetService, Depends(get_asset_service)]
SkipQuery = Annotated[int, Query(ge=0)]
LimitQuery = Annotated[int, Query(ge=1, le=MAX_PAGE_LIMIT)]
ProductTypeQuery = Annotated[ProductType | None, Query(alias="productType")]


@router.post("/assets", response_model=AssetResponse, status_code=201)
@limit_writes
async def create_asset(
    request: Request,
    body: AssetCreateRequest,
    current_user: HRUser,
    asset_service: AssetServiceDep,
) -> AssetResponse:
    """Add an asset to the caller's company inventory."""
    asset = await asset_service.create_asset(
        current_user,
        CreateAssetCommand(
            product_name=body.product_name,
            product_type=body.product_type,
            product_quantity=body.product_quantity,
            product_image=body.product_image,
        ),
    )
    return AssetResponse.from_entity(asset)


@router.get("/assets", response_model=list[AssetResponse])
async def list_assets(
    current_user: CurrentUser,
    asset_service: AssetServiceDep,
    search: str | None = None,
    product_type: ProductTypeQuery = None,
    skip: SkipQuery = 0,
    limit: LimitQuery = DEFAULT_PAGE_LIMIT,
) -> list[AssetResponse]:
    """HR: own inventory. Employee: inventory of its companies."""
    assets = await asset_service.list_assets(
        current_user, search=search, product_type=product_type, skip=skip, limit=limit
    )
    return [AssetResponse.from_entity(a) for a in assets]


@router.get("/available-assets", response_model=list[AssetResponse])
async def list_available_assets(
    current_user: CurrentUser,
    asset_service: AssetServiceDep,
    search: str | None = None,
    product_type: ProductTypeQuery = None,
    company_name: Annotated[str | None, Query(alias="companyName")] = None,
    skip: SkipQuery = 0,
    limit: LimitQuery = DEFAULT_PAGE_LIMIT,
) -> list[AssetResponse]:
    """Assets with at least one unit in stock."""
    assets = await asset_service.list_available(
        search=search,
        product_type=product_type,
        company_name=company_name,
        skip=skip,
        limit=limit,
    )
    return [AssetResponse.from_entity(a) for a in assets]


@router.get("/assets/{asset_id}", response_model=AssetResponse)
async def get_asset(
    asset_id: str, current_user: CurrentUser, asset_service: AssetServiceDep
) -> AssetResponse:
    return AssetResponse.from_entity(await asset_service.get_asset(asset_id))


@router.put("/assets/{asset_id}", response_model=AssetResponse)
@limit_writes
async def update_asset(
    request: Request,
    asset_id: str,
    body: AssetUpdateRequest,
    current_user: HRUser,
    asset_service: AssetServiceDep,
) -> AssetResponse:
    """Edit an owned asset; availableQuantity follows the new total."""
    asset = await asset_service.update_asset(
        current_user,
        asset_id,
        UpdateAssetCommand(
            product_name=body.product_name,
            product_type=body.product_type,
            product_quantity=body.product_quantity,
            product_image=body.product_image,
        ),
    )
    return AssetResponse.from_entity(asset)


@router.delete("/assets/{asset_id}", response_model=SuccessResponse)
@limit_writes
async def delete_asset(
    request: Request,
    asset_id: str,
    current_user: HRUser,
    asset_service: AssetServiceDep,
) -> SuccessResponse:
    """Delete an owned asset (409 while units are out on assignment)."""
    await asset_service.delete_asset(current_user, asset_id)
    return SuccessResponse(message="Asset deleted")
