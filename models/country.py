from sqlalchemy import Column, Integer, String, UniqueConstraint
from sqlalchemy.orm import relationship

from models.base_model import BaseModel, Base, table_args


class Country(BaseModel, Base):
    __tablename__ = "country"

    country_id = Column(Integer, primary_key=True, autoincrement=True)
    country_name = Column(String(100), nullable=False, comment="Name of the country")

    # address.country_id is ON DELETE RESTRICT
    addresses = relationship("Address", back_populates="country", passive_deletes="all")

    __table_args__ = table_args(
        UniqueConstraint("country_name", name="uq_country_name"),
        comment="List of countries where addresses are located",
    )
