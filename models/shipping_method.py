from decimal import Decimal

from sqlalchemy import Column, Integer, String, Numeric
from sqlalchemy.orm import relationship

from models.base_model import BaseModel, Base, table_args


class ShippingMethod(BaseModel, Base):
    __tablename__ = "shipping_method"

    method_id = Column(Integer, primary_key=True, autoincrement=True)
    # Not declared unique; the seed loader upserts it by name at the ORM level
    method_name = Column(
        String(100),
        nullable=False,
        comment="Name of the shipping method (e.g., Standard, Express)",
    )
    cost = Column(
        Numeric(10, 2),
        nullable=False,
        default=Decimal("0.00"),
        server_default="0.00",
        comment="Cost associated with this shipping method",
    )

    # cust_order.shipping_method_id is ON DELETE SET NULL
    orders = relationship("CustOrder", back_populates="shipping_method", passive_deletes=True)

    __table_args__ = table_args(comment="List of possible shipping methods for an order")
