from book_catalog.models.category import CATEGORY_DISPLAY_NAMES

TEXT_LIMITS = {"title": 255, "author": 255, "isbn": 20}

# INTEGER kolon sınırı
MAX_COPIES = 2**31 - 1


def _parse_int(value):
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return None
    return None


def normalize_category(value):
    """Geçerli kategori etiketini döner, tanınmıyorsa None."""
    if not isinstance(value, str):
        return None
    tag = value.strip().upper()
    return tag if tag in CATEGORY_DISPLAY_NAMES else None


def validate_book_payload(data, require_available: bool = False):
    """
    Gelen kitap verisini doğrular.
    Returns: (clean, errors). errors boş değilse clean kullanılmamalı.
    """
    if not isinstance(data, dict):
        return {}, {"body": "Request body must be a JSON object"}

    clean = {}
    errors = {}

    for name, limit in TEXT_LIMITS.items():
        raw = data.get(name)
        text = raw.strip() if isinstance(raw, str) else ""
        if not text:
            errors[name] = f"{name} is required"
        elif len(text) > limit:
            errors[name] = f"{name} must be at most {limit} characters"
        else:
            clean[name] = text

    if data.get("category") is None:
        errors["category"] = "category is required"
    else:
        category = normalize_category(data.get("category"))
        if category is None:
            allowed = ", ".join(CATEGORY_DISPLAY_NAMES)
            errors["category"] = f"category must be one of: {allowed}"
        else:
            clean["category"] = category

    total = _parse_int(data.get("totalCopies"))
    if data.get("totalCopies") is None:
        errors["totalCopies"] = "totalCopies is required"
    elif total is None:
        errors["totalCopies"] = "totalCopies must be an integer"
    elif total < 1:
        errors["totalCopies"] = "There must be at least 1 copy"
    elif total > MAX_COPIES:
        errors["totalCopies"] = f"totalCopies must be at most {MAX_COPIES}"
    else:
        clean["totalCopies"] = total

    raw_available = data.get("availableCopies")
    if raw_available is None:
        if require_available:
            errors["availableCopies"] = "availableCopies is required"
        else:
            clean["availableCopies"] = None
    else:
        available = _parse_int(raw_available)
        if available is None:
            errors["availableCopies"] = "availableCopies must be an integer"
        elif available < 0:
            errors["availableCopies"] = "Available copies cannot be negative"
        elif available > MAX_COPIES:
            errors["availableCopies"] = f"availableCopies must be at most {MAX_COPIES}"
        elif "totalCopies" in clean and available > clean["totalCopies"]:
            errors["availableCopies"] = "Available copies cannot exceed total copies"
        else:
            clean["availableCopies"] = available

    return clean, errors
