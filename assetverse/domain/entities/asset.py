"""Asset domain entity.

An asset is a stock of identical units owned by one HR account. Units move out
on approval or direct assignment and come back on return.
"""

from dataclasses import dataclass
from datetime import datetime

from assetverse.domain.enums import ProductType
from assetverse.domain.exceptions import OutOfStockException, ValidationException


@dataclass
class AssetEntity:
    """Domain entity for an inventory item.

    Invariant: 0 <= available_quantity <= product_quantity. Validation runs on
    construction and after every quantity change.
    """

    id: str
    product_name: str
    product_type: ProductType
    product_quantity: int
    available_quantity: int
    hr_email: str
    company_name: str
    product_image: str | None = None
    date_added: datetime | None = None
    updated_at: datetime | None = None

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        """Validate asset business rules. Raises ValidationException if invalid."""
        if not self.product_name or not self.product_name.strip():
            raise ValidationException("Product name is required", field="productName")
        if self.product_quantity < 0:
            raise ValidationException(
                "Product quantity must not be negative", field="productQuantity"
            )
        if not 0 <= self.available_quantity <= self.product_quantity:
            raise ValidationException(
                "Available quantity must be between 0 and product quantity",
                field="availableQuantity",
            )

    @property
    def assigned_units(self) -> int:
        """Units currently out on assignment."""
        return self.product_quantity - self.available_quantity

    def is_available(self) -> bool:
        return self.available_quantity > 0

    def is_owned_by(self, hr_email: str) -> bool:
        return self.hr_email == hr_email

    def take_unit(self) -> None:
        """Move one unit out of stock.

        Raises:
            OutOfStockException: If no unit is available.
        """
        if not self.is_available():
            raise OutOfStockException(self.id)
        self.available_quantity -= 1

    def release_unit(self) -> None:
        """Put one unit back in stock. Never exceeds product_quantity."""
        self.available_quantity = min(self.available_quantity + 1, self.product_quantity)

    def resize(self, new_quantity: int) -> None:
        """Change the total quantity, keeping the units that are out on assignment.

        Raises:
            ValidationException: If new_quantity is below the assigned units.
        """
        if new_quantity < 1:
            raise ValidationException(
                "Product quantity must be at least 1", field="productQuantity"
            )
        assigned = self.assigned_units
        if new_quantity < assigned:
            raise ValidationException(
                f"Product quantity cannot be lower than the {assigned} units currently assigned",
                field="productQuantity",
            )
        self.product_quantity = new_quantity
        self.available_quantity = new_quantity - assigned
        self.validate()
