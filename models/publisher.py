from sqlalchemy.orm import relationship
from sqlalchemy import Column, Integer, String, UniqueConstraint

from models.base_model import BaseModel, Base, table_args


class Publisher(BaseModel, Base):
    __tablename__ = "publisher"

    publisher_id = Column(Integer, primary_key=True, autoincrement=True)
    publisher_name = Column(String(255), nullable=False, comment="Name of the publisher")

    # Do NOT cascade delete books. book.publisher_id has ON DELETE SET NULL.
    books = relationship("Book", back_populates="publisher", passive_deletes=True)

    __table_args__ = table_args(
        UniqueConstraint("publisher_name", name="uq_publisher_name"),
        comment="List of publishers for books",
    )
