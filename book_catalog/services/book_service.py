from flask import current_app
from sqlalchemy.exc import IntegrityError

from book_catalog.models.book import Book
from book_catalog.models.category import CATEGORY_DISPLAY_NAMES
from book_catalog.repositories.book_repo import BookRepo
from book_catalog.services.availability import adjust_available
from book_catalog.services.result import ErrorKind, Result
from book_catalog.utils.transaction import transaction
from book_catalog.utils.validators import normalize_category, validate_book_payload


def _not_found(book_id: int) -> Result:
    return Result.failure(ErrorKind.NOT_FOUND, f"Book not found with id: {book_id}", id=book_id)


def _duplicate_isbn(isbn: str) -> Result:
    return Result.failure(ErrorKind.DUPLICATE_ISBN, f"A book with ISBN {isbn} already exists", isbn=isbn)


def _invalid(errors: dict) -> Result:
    return Result.failure(ErrorKind.VALIDATION, "Validation failed for the submitted data", errors=errors)


def _category_or_failure(category):
    tag = normalize_category(category)
    if tag is None:
        allowed = ", ".join(CATEGORY_DISPLAY_NAMES)
        return None, _invalid({"category": f"category must be one of: {allowed}"})
    return tag, None


class BookService:
    @staticmethod
    def list_books():
        current_app.logger.info("[book_service] Listing all books")
        return Result.success(BookRepo.find_all())

    @staticmethod
    def get_book(book_id: int):
        book = BookRepo.find_by_id(book_id)
        if not book:
            return _not_found(book_id)
        return Result.success(book)

    @staticmethod
    def create_book(data: dict):
        clean, errors = validate_book_payload(data)
        if errors:
            return _invalid(errors)

        # availableCopies verilmediyse toplam kopya sayısı kadar
        available = clean["availableCopies"]
        if available is None:
            available = clean["totalCopies"]

        try:
            with transaction():
                if BookRepo.exists_by_isbn(clean["isbn"]):
                    current_app.logger.warning(f"[book_service] Duplicate ISBN on create: {clean['isbn']}")
                    return _duplicate_isbn(clean["isbn"])

                book = BookRepo.insert(Book(
                    title=clean["title"],
                    author=clean["author"],
                    isbn=clean["isbn"],
                    category=clean["category"],
                    total_copies=clean["totalCopies"],
                    available_copies=available,
                ))
        except IntegrityError:
            # eşzamanlı insert unique constraint'e takıldı
            if not BookRepo.exists_by_isbn(clean["isbn"]):
                raise
            current_app.logger.warning(f"[book_service] ISBN unique constraint hit: {clean['isbn']}")
            return _duplicate_isbn(clean["isbn"])

        current_app.logger.info(f"[book_service] Book created id={book.id} title={book.title!r}")
        return Result.success(book)

    @staticmethod
    def update_book(book_id: int, data: dict):
        clean, errors = validate_book_payload(data, require_available=True)
        if errors:
            return _invalid(errors)

        try:
            with transaction():
                book = BookRepo.find_by_id(book_id, lock=True)
                if not book:
                    return _not_found(book_id)

                other = BookRepo.find_by_isbn(clean["isbn"])
                if other is not None and other.id != book.id:
                    current_app.logger.warning(f"[book_service] Duplicate ISBN on update: {clean['isbn']}")
                    return _duplicate_isbn(clean["isbn"])

                book.title = clean["title"]
                book.author = clean["author"]
                book.isbn = clean["isbn"]
                book.category = clean["category"]
                book.total_copies = clean["totalCopies"]
                book.available_copies = clean["availableCopies"]
                BookRepo.update(book)
        except IntegrityError:
            other = BookRepo.find_by_isbn(clean["isbn"])
            if other is None or other.id == book_id:
                raise
            current_app.logger.warning(f"[book_service] ISBN unique constraint hit: {clean['isbn']}")
            return _duplicate_isbn(clean["isbn"])

        current_app.logger.info(f"[book_service] Book updated id={book_id}")
        return Result.success(book)

    @staticmethod
    def delete_book(book_id: int):
        with transaction():
            book = BookRepo.find_by_id(book_id, lock=True)
            if not book:
                return _not_found(book_id)
            BookRepo.delete(book)

        current_app.logger.info(f"[book_service] Book deleted id={book_id}")
        return Result.success()

    @staticmethod
    def adjust_availability(book_id: int, delta: int):
        """
        Ödünç (delta < 0) / iade (delta > 0) için stok günceller.
        Satır kilitli okunur; kontrol ve yazma aynı transaction içinde.
        """
        with transaction():
            book = BookRepo.find_by_id(book_id, lock=True)
            if not book:
                return _not_found(book_id)

            result = adjust_available(book.available_copies, book.total_copies, delta)
            if not result.ok:
                current_app.logger.warning(f"[book_service] Adjustment rejected id={book_id}: {result.error.message}")
                return result

            book.available_copies = result.value
            BookRepo.update(book)

        current_app.logger.info(
            f"[book_service] Availability updated id={book_id} delta={delta} available={result.value}"
        )
        return result

    @staticmethod
    def find_by_category(category):
        tag, failure = _category_or_failure(category)
        if failure:
            return failure
        return Result.success(BookRepo.find_by_category(tag))

    @staticmethod
    def find_available():
        return Result.success(BookRepo.find_available())

    @staticmethod
    def find_by_author(term: str, category=None):
        tag = None
        if category is not None:
            tag, failure = _category_or_failure(category)
            if failure:
                return failure
        return Result.success(BookRepo.find_by_author_contains(term, tag))

    @staticmethod
    def find_by_title(term: str):
        return Result.success(BookRepo.find_by_title_contains(term))

    @staticmethod
    def is_available(book_id: int):
        book = BookRepo.find_by_id(book_id)
        if not book:
            return _not_found(book_id)
        return Result.success(book.available)

    @staticmethod
    def count_by_category(category):
        tag, failure = _category_or_failure(category)
        if failure:
            return failure
        return Result.success(BookRepo.count_by_category(tag))

    @staticmethod
    def list_categories():
        return Result.success(dict(CATEGORY_DISPLAY_NAMES))
