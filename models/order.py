"""
CustOrder: a placed purchase.

total_order_price is stored, not derived. It is only written when the caller
asks for it through refresh_total(); adding or changing lines never
recomputes it implicitly.
"""
from decimal import Decimal

from sqlalchemy import Column, Integer, ForeignKey, DateTime, Numeric
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from models.base_model import BaseModel, Base, table_args

CENT = Decimal("0.01")


class CustOrder(BaseModel, Base):
    __tablename__ = "cust_order"

    order_id = Column(Integer, primary_key=True, autoincrement=True)
    order_date = Column(
        DateTime,
        nullable=False,
        server_default=func.current_timestamp(),
        comment="Date and time the order was placed",
    )
    customer_id = Column(
        Integer,
        ForeignKey(
            "Customer.customer_id",
            name="fk_cust_order_customer",
            ondelete="SET NULL",
            onupdate="CASCADE",
        ),
        nullable=True,
        index=True,
        comment="Foreign key referencing the customer who placed the order",
    )
    shipping_method_id = Column(
        Integer,
        ForeignKey(
            "shipping_method.method_id",
            name="fk_cust_order_shipping",
            ondelete="SET NULL",
            onupdate="CASCADE",
        ),
        nullable=True,
        index=True,
        comment="Foreign key referencing the chosen shipping method",
    )
    dest_address_id = Column(
        Integer,
        ForeignKey(
            "address.address_id",
            name="fk_cust_order_address",
            ondelete="SET NULL",
            onupdate="CASCADE",
        ),
        nullable=True,
        index=True,
        comment="Foreign key referencing the destination address for the order",
    )
    total_order_price = Column(
        Numeric(10, 2),
        nullable=True,
        comment="Calculated total price for the order (optional, could be derived)",
    )

    customer = relationship("Customer", back_populates="orders")
    shipping_method = relationship("ShippingMethod", back_populates="orders")
    dest_address = relationship("Address", back_populates="orders")
    lines = relationship(
        "OrderLine",
        back_populates="order",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="OrderLine.line_id",
    )
    history = relationship(
        "OrderHistory",
        back_populates="order",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="OrderHistory.status_date",
    )

    __table_args__ = table_args(comment="List of orders placed by customers")

    def compute_total(self) -> Decimal:
        """Sum of line price x quantity plus the shipping method cost."""
        total = Decimal("0.00")
        for line in self.lines:
            quantity = line.quantity if line.quantity is not None else 1
            total += Decimal(line.price) * quantity
        if self.shipping_method is not None:
            total += Decimal(self.shipping_method.cost)
        return total.quantize(CENT)

    def refresh_total(self) -> Decimal:
        """Store compute_total() in total_order_price and return it (not committed)."""
        self.total_order_price = self.compute_total()
        return self.total_order_price
