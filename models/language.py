from sqlalchemy import Column, Integer, String, UniqueConstraint
from sqlalchemy.orm import relationship

from models.base_model import BaseModel, Base, table_args


class BookLanguage(BaseModel, Base):
    __tablename__ = "book_language"

    language_id = Column(Integer, primary_key=True, autoincrement=True)
    language_code = Column(String(8), nullable=True, comment="Standard language code (e.g., en, es, fr)")
    language_name = Column(String(50), nullable=False, comment="Name of the language (e.g., English, Spanish)")

    # Deleting a language detaches its books (book.language_id ON DELETE SET NULL)
    books = relationship("Book", back_populates="language", passive_deletes=True)

    __table_args__ = table_args(
        UniqueConstraint("language_code", name="uq_language_code"),
        UniqueConstraint("language_name", name="uq_language_name"),
        comment="List of possible languages for books",
    )

    def __repr__(self):
        return f"<BookLanguage {self.language_code}={self.language_name}>"
