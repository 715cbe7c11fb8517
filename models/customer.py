from sqlalchemy import Column, Integer, String, ForeignKey, TIMESTAMP, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from models.base_model import BaseModel, Base, table_args


class Customer(BaseModel, Base):
    __tablename__ = "Customer"

    customer_id = Column(Integer, primary_key=True, autoincrement=True)
    first_name = Column(String(100), nullable=False, comment="Customer's first name")
    last_name = Column(String(100), nullable=False, comment="Customer's last name")
    email = Column(String(255), nullable=False, comment="Customer's email address")
    phone = Column(String(20), nullable=True, comment="Customer's phone number")
    created_at = Column(
        TIMESTAMP,
        server_default=func.current_timestamp(),
        comment="Timestamp when the customer record was created",
    )

    addresses = relationship(
        "CustomerAddress",
        back_populates="customer",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    # cust_order.customer_id is ON DELETE SET NULL: orders outlive the customer
    orders = relationship("CustOrder", back_populates="customer", passive_deletes=True)

    __table_args__ = table_args(
        UniqueConstraint("email", name="uq_customer_email"),
        comment="List of the bookstore's customers",
    )

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"


class CustomerAddress(BaseModel, Base):
    """Customer <-> address link; the status is mutable in place."""

    __tablename__ = "customer_address"

    customer_id = Column(
        Integer,
        ForeignKey(
            "Customer.customer_id",
            name="fk_ca_customer",
            ondelete="CASCADE",
            onupdate="CASCADE",
        ),
        primary_key=True,
        nullable=False,
        comment="Foreign key referencing the customer",
    )
    address_id = Column(
        Integer,
        ForeignKey(
            "address.address_id",
            name="fk_ca_address",
            ondelete="CASCADE",
            onupdate="CASCADE",
        ),
        primary_key=True,
        nullable=False,
        index=True,
        comment="Foreign key referencing the address",
    )
    status_id = Column(
        Integer,
        ForeignKey(
            "address_status.status_id",
            name="fk_ca_status",
            ondelete="RESTRICT",
            onupdate="CASCADE",
        ),
        nullable=False,
        index=True,
        comment="Foreign key referencing the status of this address for the customer",
    )

    customer = relationship("Customer", back_populates="addresses")
    address = relationship("Address", back_populates="customer_links")
    status = relationship("AddressStatus", back_populates="customer_links")

    __table_args__ = table_args(
        comment="Links customers to their addresses and specifies the status",
    )
