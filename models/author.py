from sqlalchemy.orm import relationship
from sqlalchemy import Column, Integer, String

from models.base_model import BaseModel, Base, table_args
from models.book import book_author


class Author(BaseModel, Base):
    __tablename__ = "author"

    author_id = Column(Integer, primary_key=True, autoincrement=True)
    author_name = Column(String(255), nullable=False, comment="Full name of the author")  # not unique

    books = relationship(
        "Book",
        secondary=book_author,
        back_populates="authors",
        passive_deletes=True,
    )

    __table_args__ = table_args(comment="List of all authors")
