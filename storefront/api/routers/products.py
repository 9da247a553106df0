# storefront/api/routers/products.py
from typing import List
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from storefront.data.database import get_db
from storefront.domain.schemas import ProductOut
from storefront.services.catalog_service import CatalogService

router = APIRouter(prefix="/products", tags=["products"])


def get_service(db: Session):
    return CatalogService(db)


@router.get("", response_model=List[ProductOut])
def list_products(
    categoria: str | None = Query(None, max_length=60),
    busqueda: str | None = Query(None, max_length=100),
    db: Session = Depends(get_db),
):
    """
    Catalog listing. "Todos" or no categoria means every category,
    busqueda is a case-insensitive match on name, description and category.
    """
    svc = get_service(db)
    return svc.list_products(category=categoria, search=busqueda)


@router.get("/categories", response_model=List[str])
def list_categories(db: Session = Depends(get_db)):
    svc = get_service(db)
    return svc.list_categories()
