"""
Product Repository

Handles database operations for products and their criterion values.
"""
from typing import Optional, Dict, List

from sqlalchemy import select

from database.models import Product
from .base import BaseRepository


class ProductRepository(BaseRepository[Product]):
    """Repository for product operations."""
    
    model = Product
    
    async def get_all_ids(self) -> List[str]:
        """Get the id of every product, in id order."""
        stmt = select(Product.id).order_by(Product.id)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())
    
    async def upsert_product(
        self,
        product_id: str,
        name: str = None,
        category: str = None,
        description: str = None,
        criteria: Optional[Dict[str, float]] = None,
    ) -> Product:
        """
        Create a product or update an existing one.
        
        Criterion values are merged into the existing mapping, so values
        not mentioned in `criteria` are kept.
        """
        product = await self.get(product_id)
        
        if product is None:
            product = Product(
                id=product_id,
                name=name,
                category=category,
                description=description,
                criteria=dict(criteria or {}),
            )
            return await self.add(product)
        
        if name is not None:
            product.name = name
        if category is not None:
            product.category = category
        if description is not None:
            product.description = description
        if criteria:
            # Reassign so the JSON column is flagged dirty
            product.criteria = {**(product.criteria or {}), **criteria}
        product.updated_at = self.now()
        
        await self.session.flush()
        return product
    
    async def bulk_set_criterion(
        self,
        field_key: str,
        values: Dict[str, float],
    ) -> int:
        """
        Set one criterion field on many products in the current transaction.
        
        One field-set per product; unknown product ids are skipped.
        
        Args:
            field_key: Criterion field to set
            values: Mapping of product id -> value
            
        Returns:
            Number of products updated
        """
        if not values:
            return 0
        
        products = await self.get_by_ids(list(values.keys()))
        now = self.now()
        
        for product in products:
            product.criteria = {**(product.criteria or {}), field_key: values[product.id]}
            product.updated_at = now
        
        await self.session.flush()
        return len(products)
    
    async def unset_criterion(self, field_key: str) -> int:
        """
        Remove a criterion field from every product that has it.
        
        Returns:
            Number of products changed
        """
        products = await self.get_all()
        now = self.now()
        changed = 0
        
        for product in products:
            if product.criteria and field_key in product.criteria:
                product.criteria = {k: v for k, v in product.criteria.items() if k != field_key}
                product.updated_at = now
                changed += 1
        
        await self.session.flush()
        return changed
