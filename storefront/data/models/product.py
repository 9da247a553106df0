# storefront/data/models/product.py
from sqlalchemy import Column, Integer, String, Numeric, Text

from storefront.data.database import Base


class ProductModel(Base):
    __tablename__ = "products"

    id = Column(Integer, primary_key=True)
    name = Column(String(200), nullable=False)
    category = Column(String(60), nullable=False, index=True)
    price = Column(Numeric(12, 2), nullable=False)
    description = Column(Text, nullable=False, default="")
    image = Column(String(500), nullable=False, default="")
