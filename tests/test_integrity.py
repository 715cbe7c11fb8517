"""
Engine-enforced rules: uniqueness, NOT NULL, and the per-relationship
RESTRICT / CASCADE / SET NULL deletion policies.
"""
from decimal import Decimal

import pytest
from sqlalchemy import delete
from sqlalchemy.exc import IntegrityError

from models.address import Address
from models.address_status import AddressStatus
from models.author import Author
from models.book import Book, book_author
from models.country import Country
from models.customer import Customer, CustomerAddress
from models.language import BookLanguage
from models.order import CustOrder
from models.order_history import OrderHistory
from models.order_line import OrderLine
from models.order_status import OrderStatus
from models.publisher import Publisher
from models.seed import lookup_id
from models.shipping_method import ShippingMethod


class TestUniqueness:
    """ISBN, email and lookup label uniqueness"""

    def test_duplicate_isbn_rejected(self, db, session):
        session.add(Book(title="First", isbn13="9780000000001"))
        db.save()
        session.add(Book(title="Second", isbn13="9780000000001"))
        with pytest.raises(IntegrityError):
            db.save()
        assert session.query(Book).count() == 1

    def test_distinct_and_null_isbns_accepted(self, db, session):
        session.add_all([
            Book(title="A", isbn13="9780000000001"),
            Book(title="B", isbn13="9780000000002"),
            Book(title="C", isbn13=None),
            Book(title="D", isbn13=None),
        ])
        db.save()
        assert session.query(Book).count() == 4

    def test_duplicate_email_rejected(self, db, session):
        session.add(Customer(first_name="Jane", last_name="Doe", email="jane@x.com"))
        db.save()
        session.add(Customer(first_name="Janet", last_name="Doe", email="jane@x.com"))
        with pytest.raises(IntegrityError):
            db.save()

    def test_duplicate_lookup_label_rejected(self, db, seeded):
        seeded.add(OrderStatus(status_value="Pending"))
        with pytest.raises(IntegrityError):
            db.save()
        seeded.add(Country(country_name="Kenya"))
        with pytest.raises(IntegrityError):
            db.save()
        seeded.add(BookLanguage(language_code="en", language_name="Englisch"))
        with pytest.raises(IntegrityError):
            db.save()

    def test_duplicate_customer_address_link_rejected(self, db, bookstore):
        session = db.get_session()
        jane_id = bookstore["jane"].customer_id
        address_id = bookstore["address"].address_id
        old = lookup_id(session, AddressStatus, "Old")
        session.expunge_all()
        session.add(CustomerAddress(customer_id=jane_id, address_id=address_id, status_id=old))
        with pytest.raises(IntegrityError):
            db.save()
        assert session.query(CustomerAddress).count() == 1

    def test_link_status_is_mutable(self, db, bookstore):
        session = db.get_session()
        link = bookstore["jane"].addresses[0]
        link.status = session.get(AddressStatus, lookup_id(session, AddressStatus, "Old"))
        db.save()
        session.expire_all()
        links = session.query(CustomerAddress).all()
        assert len(links) == 1
        assert links[0].status.address_status == "Old"


class TestRequiredColumns:
    """NOT NULL columns reject writes"""

    def test_missing_title_rejected(self, db, session):
        session.add(Book(isbn13="9780000000009"))
        with pytest.raises(IntegrityError):
            db.save()

    def test_missing_city_rejected(self, db, seeded):
        seeded.add(Address(street_name="Nowhere", country_id=1))
        with pytest.raises(IntegrityError):
            db.save()

    def test_unknown_country_rejected(self, db, seeded):
        seeded.add(Address(city="Atlantis", country_id=999))
        with pytest.raises(IntegrityError):
            db.save()

    def test_defaults_applied(self, db, seeded):
        book = Book(title="Untitled")
        customer = Customer(first_name="A", last_name="B", email="a@b.c")
        seeded.add_all([book, customer])
        db.save()
        seeded.expire_all()
        assert book.price == Decimal("0.00")
        assert customer.created_at is not None


def remove(db, model, **criteria):
    """
    DELETE issued by the database alone: the session is emptied first so no
    ORM cascade or relationship bookkeeping touches the children.
    """
    session = db.get_session()
    session.expunge_all()
    try:
        session.execute(delete(model).filter_by(**criteria))
    except IntegrityError:
        session.rollback()
        raise
    db.save()
    return session


class TestRestrict:
    """Parents referenced through RESTRICT keys cannot be deleted"""

    def test_country_with_addresses(self, db, bookstore):
        country_id = bookstore["address"].country_id
        with pytest.raises(IntegrityError):
            remove(db, Country, country_id=country_id)
        assert db.get_session().query(Country).filter_by(country_name="United States").count() == 1

    def test_unused_country_can_be_deleted(self, db, seeded):
        session = remove(db, Country, country_name="Kenya")
        assert session.query(Country).count() == 3

    def test_book_on_order_line(self, db, bookstore):
        book_id = bookstore["book_x"].book_id
        with pytest.raises(IntegrityError):
            remove(db, Book, book_id=book_id)
        assert db.get_session().query(OrderLine).count() == 1

    def test_book_without_lines_can_be_deleted(self, db, bookstore):
        session = remove(db, Book, book_id=bookstore["book_y"].book_id)
        assert session.query(Book).count() == 1

    def test_address_status_in_use(self, db, bookstore):
        with pytest.raises(IntegrityError):
            remove(db, AddressStatus, address_status="Current")

    def test_order_status_in_use(self, db, bookstore):
        with pytest.raises(IntegrityError):
            remove(db, OrderStatus, status_value="Pending")


class TestCascade:
    """Owned rows follow their parent"""

    def test_customer_delete_cascades_links_and_keeps_orders(self, db, bookstore):
        jane_id = bookstore["jane"].customer_id
        order_id = bookstore["order"].order_id
        session = remove(db, Customer, customer_id=jane_id)

        assert session.query(CustomerAddress).count() == 0
        order = session.get(CustOrder, order_id)
        assert order is not None
        assert order.customer_id is None
        assert session.query(OrderLine).filter_by(order_id=order_id).count() == 1
        # the address itself is not owned by the customer
        assert session.query(Address).count() == 1

    def test_order_delete_cascades_lines_and_history(self, db, bookstore):
        session = remove(db, CustOrder, order_id=bookstore["order"].order_id)
        assert session.query(OrderLine).count() == 0
        assert session.query(OrderHistory).count() == 0
        assert session.query(Book).count() == 2

    def test_address_delete_cascades_links_and_detaches_orders(self, db, bookstore):
        order_id = bookstore["order"].order_id
        session = remove(db, Address, address_id=bookstore["address"].address_id)
        assert session.query(CustomerAddress).count() == 0
        assert session.get(CustOrder, order_id).dest_address_id is None

    def test_book_delete_cascades_author_links(self, db, bookstore):
        session = db.get_session()
        book = Book(title="Animal Farm", authors=[bookstore["author"]])
        session.add(book)
        db.save()
        book_id = book.book_id

        session = remove(db, Book, book_id=book_id)
        rows = session.execute(book_author.select().where(book_author.c.book_id == book_id)).all()
        assert rows == []
        assert session.query(Author).count() == 1

    def test_author_delete_cascades_author_links(self, db, bookstore):
        book_id = bookstore["book_x"].book_id
        session = remove(db, Author, author_id=bookstore["author"].author_id)
        assert session.execute(book_author.select()).all() == []
        assert session.get(Book, book_id) is not None


class TestSetNull:
    """Optional references are detached, dependents survive"""

    def test_publisher_delete(self, db, bookstore):
        book_id = bookstore["book_x"].book_id
        session = remove(db, Publisher, publisher_id=bookstore["publisher"].publisher_id)
        assert session.get(Book, book_id).publisher_id is None

    def test_language_delete(self, db, bookstore):
        session = remove(db, BookLanguage, language_code="en")
        assert session.query(Book).filter(Book.language_id.is_(None)).count() == 2

    def test_shipping_method_delete(self, db, bookstore):
        order_id = bookstore["order"].order_id
        session = remove(db, ShippingMethod, method_id=bookstore["standard"].method_id)
        order = session.get(CustOrder, order_id)
        assert order.shipping_method_id is None
        assert len(order.lines) == 1
