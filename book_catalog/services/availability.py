from book_catalog.services.result import ErrorKind, Result


def adjust_available(available: int, total: int, delta: int) -> Result:
    """
    Stok değişikliğinin geçerli olup olmadığına karar verir.
    delta < 0 ödünç verme, delta > 0 iade. I/O yok; sonucu kaydetmek çağıranın işi.
    """
    new_available = available + delta

    if new_available < 0:
        return Result.failure(
            ErrorKind.INSUFFICIENT_COPIES,
            f"Not enough copies available. Available: {available}, requested: {abs(delta)}",
            available=available,
            requested=abs(delta),
        )

    if new_available > total:
        return Result.failure(
            ErrorKind.INVALID_ADJUSTMENT,
            "Available copies cannot exceed total copies",
            total=total,
            available=available,
            requested=delta,
        )

    return Result.success(new_available)
