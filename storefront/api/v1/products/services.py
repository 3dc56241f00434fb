"""
Product service layer
Catalog listing and admin product management
"""

from typing import List, Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
import uuid
import logging

from storefront.models import Product
from storefront.core.exceptions import NotFoundException
from .filters import ProductFilter
from .schemas import ProductCreate, ProductUpdate

logger = logging.getLogger(__name__)


class ProductService:
    """Product service for business logic"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create_product(self, data: ProductCreate) -> Product:
        product = Product(**data.model_dump())
        self.db.add(product)
        await self.db.commit()
        await self.db.refresh(product)

        logger.info(f"Product created: {product.id} ({product.title})")
        return product

    async def update_product(self, product_id: uuid.UUID, data: ProductUpdate) -> Product:
        """
        Update existing product

        Args:
            product_id: Product ID
            data: Fields to change; unset fields are left alone

        Returns:
            Updated product

        Raises:
            NotFoundException: If product not found
        """
        product = await self.get_product(product_id)

        update_data = data.model_dump(exclude_unset=True, exclude_none=True)
        for field, value in update_data.items():
            setattr(product, field, value)

        await self.db.commit()
        await self.db.refresh(product)

        return product

    async def get_product(self, product_id: uuid.UUID) -> Product:
        """
        Get product by ID

        Raises:
            NotFoundException: If product not found
        """
        product = await self.db.get(Product, product_id)
        if not product:
            raise NotFoundException("Product not found")
        return product

    async def list_products(self, filters: Optional[ProductFilter] = None) -> List[Product]:
        query = (filters or ProductFilter()).apply_filters(select(Product))
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def delete_product(self, product_id: uuid.UUID) -> None:
        """
        Delete product

        Cart lines pointing at it are pruned the next time the cart is read;
        order snapshots keep their copy.

        Raises:
            NotFoundException: If product not found
        """
        product = await self.get_product(product_id)
        await self.db.delete(product)
        await self.db.commit()

        logger.info(f"Product deleted: {product_id}")
