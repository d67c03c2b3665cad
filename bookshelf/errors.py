from flask import jsonify
from werkzeug.exceptions import HTTPException, MethodNotAllowed, NotFound


class BookshelfError(Exception):
    """Base error carrying the HTTP status and client-facing message."""

    status_code = 500
    message = "Internal server error"

    def __init__(self, message: str | None = None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


class ValidationError(BookshelfError):
    status_code = 400
    message = "Invalid request"


class NotFoundError(BookshelfError):
    status_code = 404
    message = "Book not found"


class StorageError(BookshelfError):
    status_code = 500
    message = "Books storage error"


class CorruptDataError(StorageError):
    """The books file exists but does not hold a JSON array of records with integer ids."""

    message = "Books file contains invalid JSON"


class StorageUnavailableError(StorageError):
    """Any I/O failure other than the books file simply being absent."""

    message = "Books storage unavailable"

    def __init__(self, message: str | None = None, *, cause: OSError | None = None):
        if message is None and isinstance(cause, FileNotFoundError):
            message = "Books file missing and could not be created"
        super().__init__(message)
        self.cause = cause


def _error(message: str, status: int):
    return jsonify({"error": message}), status


def register_error_handlers(app):
    @app.errorhandler(BookshelfError)
    def handle_bookshelf_error(err: BookshelfError):
        if err.status_code >= 500:
            cause = getattr(err, "cause", None) or err.__cause__
            app.logger.error("Server error: %s (cause: %r)", err.message, cause, exc_info=err)
        else:
            app.logger.info("Rejected request: %s", err.message)
        return _error(err.message, err.status_code)

    # Unknown paths and unsupported methods on known paths both get the generic 404
    @app.errorhandler(NotFound)
    @app.errorhandler(MethodNotAllowed)
    def handle_not_found(err):
        return _error("Not found", 404)

    @app.errorhandler(Exception)
    def handle_unexpected(err: Exception):
        if isinstance(err, HTTPException):
            return _error(err.description or err.name, err.code or 500)
        app.logger.exception("Server error")
        return _error("Internal server error", 500)
