"""
Product filtering logic
"""

from dataclasses import dataclass, field
from typing import List, Optional
from sqlalchemy import Select

from storefront.models import Product

SORT_OPTIONS = {
    "price-lowtohigh": Product.price.asc(),
    "price-hightolow": Product.price.desc(),
    "title-atoz": Product.title.asc(),
    "title-ztoa": Product.title.desc(),
}

DEFAULT_SORT = "price-lowtohigh"


def split_csv(value: Optional[str]) -> List[str]:
    """Split a comma-separated query value, dropping blanks"""
    if not value:
        return []
    return [part.strip() for part in value.split(",") if part.strip()]


@dataclass
class ProductFilter:
    """Listing filter parameters"""
    categories: List[str] = field(default_factory=list)
    brands: List[str] = field(default_factory=list)
    sort_by: str = DEFAULT_SORT

    @classmethod
    def from_query(
        cls,
        category: Optional[str] = None,
        brand: Optional[str] = None,
        sort_by: Optional[str] = None
    ) -> "ProductFilter":
        return cls(
            categories=split_csv(category),
            brands=split_csv(brand),
            sort_by=sort_by if sort_by in SORT_OPTIONS else DEFAULT_SORT,
        )

    def apply_filters(self, query: Select) -> Select:
        """Apply filters and ordering to query"""
        if self.categories:
            query = query.where(Product.category.in_(self.categories))

        if self.brands:
            query = query.where(Product.brand.in_(self.brands))

        # id breaks ties so listings are stable
        return query.order_by(SORT_OPTIONS[self.sort_by], Product.id)
