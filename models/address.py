from sqlalchemy import Column, Integer, String, ForeignKey
from sqlalchemy.orm import relationship

from models.base_model import BaseModel, Base, table_args


class Address(BaseModel, Base):
    __tablename__ = "address"

    address_id = Column(Integer, primary_key=True, autoincrement=True)
    street_number = Column(String(20), nullable=True, comment="Street number")
    street_name = Column(String(200), nullable=True, comment="Street name")
    address_line2 = Column(String(200), nullable=True, comment="Optional second address line (e.g., Apt, Suite)")
    city = Column(String(100), nullable=False, comment="City name")
    region = Column(String(100), nullable=True, comment="State, Province, or Region")
    postal_code = Column(String(20), nullable=True, comment="Postal or Zip code")

    # Country: RESTRICT deletion while addresses reference it
    country_id = Column(
        Integer,
        ForeignKey(
            "country.country_id",
            name="fk_address_country",
            ondelete="RESTRICT",
            onupdate="CASCADE",
        ),
        nullable=False,
        index=True,
        comment="Foreign key referencing the country",
    )

    country = relationship("Country", back_populates="addresses")
    customer_links = relationship(
        "CustomerAddress",
        back_populates="address",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    # Orders keep their history when the destination goes away (SET NULL)
    orders = relationship("CustOrder", back_populates="dest_address", passive_deletes=True)

    __table_args__ = table_args(comment="List of all addresses in the system")
