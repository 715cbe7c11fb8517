from sqlalchemy import Column, Integer, String, ForeignKey, DateTime
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from models.base_model import BaseModel, Base, table_args


class OrderHistory(BaseModel, Base):
    """Append-only audit trail of an order's status changes."""

    __tablename__ = "order_history"

    history_id = Column(Integer, primary_key=True, autoincrement=True)
    order_id = Column(
        Integer,
        ForeignKey(
            "cust_order.order_id",
            name="fk_oh_order",
            ondelete="CASCADE",
            onupdate="CASCADE",
        ),
        nullable=False,
        index=True,
        comment="Foreign key referencing the order",
    )
    status_id = Column(
        Integer,
        ForeignKey(
            "order_status.status_id",
            name="fk_oh_status",
            ondelete="RESTRICT",
            onupdate="CASCADE",
        ),
        nullable=False,
        index=True,
        comment="Foreign key referencing the order status",
    )
    status_date = Column(
        DateTime,
        nullable=False,
        server_default=func.current_timestamp(),
        comment="Date and time when this status was applied",
    )
    notes = Column(String(255), nullable=True, comment="Optional notes regarding this status change")

    order = relationship("CustOrder", back_populates="history")
    status = relationship("OrderStatus", back_populates="history_entries")

    __table_args__ = table_args(comment="Record of the status history of an order")
