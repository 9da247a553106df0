# storefront/data/models/order.py
from sqlalchemy import Column, Integer, String, DateTime, Numeric, Boolean, Text
from sqlalchemy.orm import relationship
from datetime import datetime, timezone

from storefront.data.database import Base


class OrderModel(Base):
    __tablename__ = "orders"

    id = Column(Integer, primary_key=True)
    order_number = Column(String(32), nullable=True, unique=True, index=True)

    status = Column(String, nullable=False, default="PENDING")  # PENDING, PREPARING, DELIVERED
    payment_method = Column(String(20), nullable=False)

    contact_name = Column(String(120), nullable=False)
    contact_phone = Column(String(40), nullable=False)

    street = Column(String(300), nullable=False)
    number = Column(String(30), nullable=False, default="")
    neighborhood = Column(String(120), nullable=False, default="")
    city = Column(String(120), nullable=False, default="")
    postal_code = Column(String(20), nullable=False, default="")
    references = Column(String(500), nullable=False, default="")
    instructions = Column(Text, nullable=False, default="")

    subtotal = Column(Numeric(12, 2), nullable=False)
    shipping_fee = Column(Numeric(12, 2), nullable=False)
    total = Column(Numeric(12, 2), nullable=False)

    #admin acknowledgement
    seen = Column(Boolean, nullable=False, default=False, index=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))

    items = relationship(
        "OrderItemModel",
        back_populates="order",
        cascade="all, delete-orphan",
        order_by="OrderItemModel.id",
    )
