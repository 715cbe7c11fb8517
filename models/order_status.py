from sqlalchemy import Column, Integer, String, UniqueConstraint
from sqlalchemy.orm import relationship

from models.base_model import BaseModel, Base, table_args


class OrderStatus(BaseModel, Base):
    __tablename__ = "order_status"

    status_id = Column(Integer, primary_key=True, autoincrement=True)
    status_value = Column(
        String(50),
        nullable=False,
        comment="Status description (e.g., Pending, Processing, Shipped, Delivered, Cancelled)",
    )

    # order_history.status_id is ON DELETE RESTRICT
    history_entries = relationship("OrderHistory", back_populates="status", passive_deletes="all")

    __table_args__ = table_args(
        UniqueConstraint("status_value", name="uq_order_status_value"),
        comment="List of possible statuses for an order",
    )
