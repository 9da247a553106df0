# storefront/services/catalog_service.py
from typing import Dict, Any, List
from sqlalchemy.orm import Session

from storefront.data.models.product import ProductModel
from storefront.domain.schemas import ALL_CATEGORIES, CATEGORIES
from storefront.repos.product_repo import ProductRepo
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class CatalogService:
    """
    Read side of the catalog, products filtered by category and free-text search.
    """

    def __init__(self, db: Session):
        self.repo = ProductRepo(db)

    def list_products(self, category: str | None = None, search: str | None = None) -> List[Dict[str, Any]]:
        #"Todos" (or nothing) means no category filter
        if not category or category == ALL_CATEGORIES:
            category = None
        search = (search or "").strip() or None

        products = self.repo.list_products(category=category, search=search)
        logger.info(f"Catalog query category={category!r} search={search!r} -> {len(products)} products")

        return [self._to_dict(p) for p in products]

    def list_categories(self) -> List[str]:
        return list(CATEGORIES)

    @staticmethod
    def _to_dict(p: ProductModel) -> Dict[str, Any]:
        return {
            "id": str(p.id),
            "name": p.name,
            "category": p.category,
            "price": p.price,
            "description": p.description or "",
            "image": p.image or "",
        }
