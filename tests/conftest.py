"""
Shared fixtures: an in-memory SQLite database with foreign keys enforced,
rebuilt for every test.
"""
import os
import sys
from datetime import datetime
from decimal import Decimal
from pathlib import Path

# Must be set before 'models' creates the global DBStorage
os.environ["APP_ENV"] = "testing"
os.environ["DATABASE_URL"] = "sqlite://"

# project root on sys.path when run without installing
sys.path.insert(0, str(Path(__file__).parent.parent))

import pytest

from models import storage
from models.address import Address
from models.address_status import AddressStatus
from models.author import Author
from models.book import Book
from models.country import Country
from models.customer import Customer, CustomerAddress
from models.language import BookLanguage
from models.order import CustOrder
from models.order_history import OrderHistory
from models.order_line import OrderLine
from models.order_status import OrderStatus
from models.publisher import Publisher
from models.seed import seed_lookup_tables, lookup_id
from models.shipping_method import ShippingMethod


@pytest.fixture
def db():
    storage.drop_all()
    storage.reload()
    yield storage
    storage.close()


@pytest.fixture
def session(db):
    return db.get_session()


@pytest.fixture
def seeded(db, session):
    seed_lookup_tables(session)
    db.save()
    return session


@pytest.fixture
def bookstore(db, seeded):
    """
    Small populated store:
    Jane Doe with a Current address in the United States, one publisher,
    one author, two books, and one Standard-shipped order of 2 x Book X.
    """
    session = seeded
    english = session.get(BookLanguage, lookup_id(session, BookLanguage, "en"))
    current = session.get(AddressStatus, lookup_id(session, AddressStatus, "Current"))
    pending = session.get(OrderStatus, lookup_id(session, OrderStatus, "Pending"))
    standard = session.query(ShippingMethod).filter_by(method_name="Standard").one()

    # new objects hang off persistent lookup rows until add_all()
    with session.no_autoflush:
        publisher = Publisher(publisher_name="Penguin Random House")
        author = Author(author_name="George Orwell")
        book_x = Book(
            title="Book X",
            isbn13="9780451524935",
            num_pages=328,
            price=Decimal("9.99"),
            language=english,
            publisher=publisher,
            authors=[author],
        )
        book_y = Book(title="Book Y", isbn13="9780451526342", price=Decimal("12.50"), language=english)

        jane = Customer(first_name="Jane", last_name="Doe", email="jane@x.com")
        address = Address(
            street_number="12",
            street_name="Main St",
            city="Springfield",
            postal_code="12345",
            country_id=1,
        )
        jane.addresses.append(CustomerAddress(address=address, status=current))

        order = CustOrder(customer=jane, shipping_method=standard, dest_address=address)
        order.lines.append(OrderLine.for_book(book_x, quantity=2))
        order.history.append(OrderHistory(status=pending, status_date=datetime(2026, 1, 1, 9, 0)))

        session.add_all([publisher, author, book_x, book_y, jane, order])
    db.save()
    return {
        "publisher": publisher,
        "author": author,
        "book_x": book_x,
        "book_y": book_y,
        "jane": jane,
        "address": address,
        "order": order,
        "standard": standard,
    }
