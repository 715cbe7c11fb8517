from sqlalchemy import Column, Integer, String, UniqueConstraint
from sqlalchemy.orm import relationship

from models.base_model import BaseModel, Base, table_args


class AddressStatus(BaseModel, Base):
    __tablename__ = "address_status"

    status_id = Column(Integer, primary_key=True, autoincrement=True)
    address_status = Column(
        String(20),
        nullable=False,
        comment="Status description (e.g., Current, Old, Billing, Shipping)",
    )

    # customer_address.status_id is ON DELETE RESTRICT
    customer_links = relationship("CustomerAddress", back_populates="status", passive_deletes="all")

    __table_args__ = table_args(
        UniqueConstraint("address_status", name="uq_address_status"),
        comment="List of statuses for an address",
    )
