# book_catalog/controllers/book_controller.py

from flask import Blueprint, current_app, jsonify, request

from book_catalog.models.category import CATEGORY_DISPLAY_NAMES
from book_catalog.services.book_service import BookService
from book_catalog.services.result import ErrorKind
from book_catalog.utils.responses import error_response
from book_catalog.utils.validators import normalize_category

book_bp = Blueprint("books", __name__, url_prefix="/books")

ERROR_STATUS = {
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.DUPLICATE_ISBN: 400,
    ErrorKind.INSUFFICIENT_COPIES: 400,
    ErrorKind.INVALID_ADJUSTMENT: 400,
    ErrorKind.VALIDATION: 400,
}


def _book_json(b):
    return {
        "id": b.id,
        "title": b.title,
        "author": b.author,
        "isbn": b.isbn,
        "category": b.category,
        "totalCopies": b.total_copies,
        "availableCopies": b.available_copies,
        "available": b.available,
        "createdAt": b.created_at.isoformat() if b.created_at else None,
    }


def _failure(result):
    err = result.error
    current_app.logger.info(f"[books] {request.method} {request.path} -> {err.kind.value}: {err.message}")
    return error_response(ERROR_STATUS[err.kind], err.message, err.details.get("errors"))


def _books_or_failure(result):
    if not result.ok:
        return _failure(result)
    return jsonify([_book_json(b) for b in result.value])


def _required_arg(name: str):
    value = request.args.get(name)
    if value is None or not value.strip():
        return None, error_response(400, "Validation failed for the submitted data", {name: f"{name} is required"})
    return value.strip(), None


@book_bp.get("")
def list_books():
    return _books_or_failure(BookService.list_books())


@book_bp.get("/health")
def health():
    port = current_app.config.get("SERVICE_PORT")
    return f"Book Service is running on port {port}", 200, {"Content-Type": "text/plain; charset=utf-8"}


@book_bp.get("/categories")
def list_categories():
    return jsonify(BookService.list_categories().value)


@book_bp.get("/available")
def available_books():
    return _books_or_failure(BookService.find_available())


@book_bp.get("/category")
def books_by_category():
    category, err = _required_arg("category")
    if err:
        return err
    return _books_or_failure(BookService.find_by_category(category))


@book_bp.get("/category/count")
def count_by_category():
    category, err = _required_arg("category")
    if err:
        return err
    result = BookService.count_by_category(category)
    if not result.ok:
        return _failure(result)
    tag = normalize_category(category)
    return jsonify({
        "category": tag,
        "displayName": CATEGORY_DISPLAY_NAMES[tag],
        "count": result.value,
    })


@book_bp.get("/search/author")
def search_by_author():
    author, err = _required_arg("author")
    if err:
        return err
    return _books_or_failure(BookService.find_by_author(author, request.args.get("category")))


@book_bp.get("/search/title")
def search_by_title():
    title, err = _required_arg("title")
    if err:
        return err
    return _books_or_failure(BookService.find_by_title(title))


@book_bp.get("/<int:book_id>")
def get_book(book_id: int):
    result = BookService.get_book(book_id)
    if not result.ok:
        return _failure(result)
    return jsonify(_book_json(result.value))


@book_bp.get("/<int:book_id>/available")
def is_available(book_id: int):
    result = BookService.is_available(book_id)
    if not result.ok:
        return _failure(result)
    return jsonify(result.value)


@book_bp.post("")
def create_book():
    data = request.get_json(silent=True)
    title = data.get("title") if isinstance(data, dict) else None
    current_app.logger.info(f"[books] Create request: {title!r}")
    result = BookService.create_book(data)
    if not result.ok:
        return _failure(result)
    return jsonify(_book_json(result.value)), 201


@book_bp.put("/<int:book_id>")
def update_book(book_id: int):
    data = request.get_json(silent=True)
    result = BookService.update_book(book_id, data)
    if not result.ok:
        return _failure(result)
    return jsonify(_book_json(result.value))


@book_bp.patch("/<int:book_id>/availability")
def update_availability(book_id: int):
    raw = request.args.get("copies")
    try:
        copies = int(raw)
    except (TypeError, ValueError):
        return error_response(400, "Validation failed for the submitted data", {"copies": "copies must be an integer"})

    result = BookService.adjust_availability(book_id, copies)
    if not result.ok:
        return _failure(result)
    return "", 200


@book_bp.delete("/<int:book_id>")
def delete_book(book_id: int):
    result = BookService.delete_book(book_id)
    if not result.ok:
        return _failure(result)
    return "", 204
