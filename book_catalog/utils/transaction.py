from contextlib import contextmanager

from book_catalog.extensions import db


@contextmanager
def transaction():
    """
    Okuma + yazma dizilerini tek transaction içinde çalıştırır.
    Blok hatasız biterse commit, exception olursa rollback edip yeniden fırlatır.
    """
    try:
        yield db.session
        db.session.commit()
    except Exception:
        db.session.rollback()
        raise
