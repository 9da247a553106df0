# storefront/repos/product_repo.py
from sqlalchemy import select, or_, func
from sqlalchemy.orm import Session

from storefront.data.models.product import ProductModel


def _like_pattern(term: str) -> str:
    #% and _ typed by the user are literal characters
    escaped = term.lower().replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


class ProductRepo:
    def __init__(self, db: Session):
        self.db = db

    def list_products(self, category: str | None = None, search: str | None = None) -> list[ProductModel]:
        stmt = select(ProductModel)

        if category:
            stmt = stmt.where(ProductModel.category == category)

        if search:
            pattern = _like_pattern(search)
            stmt = stmt.where(
                or_(
                    func.lower(ProductModel.name).like(pattern, escape="\\"),
                    func.lower(ProductModel.description).like(pattern, escape="\\"),
                    func.lower(ProductModel.category).like(pattern, escape="\\"),
                )
            )

        stmt = stmt.order_by(ProductModel.category, ProductModel.name, ProductModel.id)
        return list(self.db.execute(stmt).scalars().all())

    def count(self) -> int:
        return self.db.execute(select(func.count(ProductModel.id))).scalar_one()

    def add_all(self, products: list[ProductModel]) -> None:
        self.db.add_all(products)
        self.db.commit()
