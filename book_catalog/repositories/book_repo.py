from sqlalchemy import func

from book_catalog.models.book import Book
from book_catalog.extensions import db

# 64-bit signed INTEGER aralığı dışındaki id hiçbir kayda karşılık gelmez
MAX_ID = 2**63 - 1

class BookRepo:
    """
    Book sorguları. Commit burada yapılmaz; servis katmanındaki
    transaction() bloğu commit/rollback eder.
    """

    @staticmethod
    def find_all():
        return Book.query.order_by(Book.id).all()

    @staticmethod
    def find_by_id(book_id: int, lock: bool = False):
        if book_id < 1 or book_id > MAX_ID:
            return None
        return db.session.get(Book, book_id, with_for_update=lock)

    @staticmethod
    def find_by_isbn(isbn: str):
        return Book.query.filter_by(isbn=isbn).first()

    @staticmethod
    def exists_by_isbn(isbn: str) -> bool:
        return db.session.query(Book.query.filter_by(isbn=isbn).exists()).scalar()

    @staticmethod
    def find_by_category(category: str):
        return Book.query.filter_by(category=category).order_by(Book.id).all()

    @staticmethod
    def find_by_author_contains(term: str, category: str = None):
        q = Book.query.filter(func.lower(Book.author).contains(term.lower(), autoescape=True))
        if category is not None:
            q = q.filter(Book.category == category)
        return q.order_by(Book.id).all()

    @staticmethod
    def find_by_title_contains(term: str):
        return (
            Book.query
            .filter(func.lower(Book.title).contains(term.lower(), autoescape=True))
            .order_by(Book.id)
            .all()
        )

    @staticmethod
    def find_available():
        return Book.query.filter(Book.available_copies > 0).order_by(Book.id).all()

    @staticmethod
    def count_by_category(category: str) -> int:
        return Book.query.filter_by(category=category).count()

    @staticmethod
    def insert(book: Book):
        db.session.add(book)
        db.session.flush()
        return book

    @staticmethod
    def update(book: Book):
        db.session.flush()
        return book

    @staticmethod
    def delete(book: Book):
        db.session.delete(book)
        db.session.flush()
