"""DTOs for asset use cases."""

from dataclasses import dataclass

from assetverse.domain.enums import ProductType


@dataclass(frozen=True)
class CreateAssetCommand:
    product_name: str
    product_type: ProductType
    product_quantity: int
    product_image: str | None = None


@dataclass(frozen=True)
class UpdateAssetCommand:
    """Asset edit; None leaves a field unchanged. Quantity changes keep assigned units."""

    product_name: str | None = None
    product_type: ProductType | None = None
    product_quantity: int | None = None
    product_image: str | None = None
