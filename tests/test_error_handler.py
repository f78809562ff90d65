import logging

from catalog.error_handler import ErrorHandler
from catalog.errors import CatalogValidationError, ProductNotFoundError, StorageError


def test_not_found_maps_to_404():
    status_code, payload = ErrorHandler().handle_exception(ProductNotFoundError(3, operation="get_by_id"))
    assert status_code == 404
    assert payload["detail"]["error"] == "not_found"
    assert "3" in payload["detail"]["message"]


def test_validation_error_carries_field_errors():
    exc = CatalogValidationError({"size": "size must be between 1 and 100"}, operation="list_by_category")
    status_code, payload = ErrorHandler().handle_exception(exc)
    assert status_code == 422
    assert payload["detail"]["field_errors"] == {"size": "size must be between 1 and 100"}


def test_storage_error_is_server_fault_and_logged_with_operation(caplog):
    exc = StorageError("save failed: disk full", operation="save", cause=OSError("disk full"))
    with caplog.at_level(logging.ERROR, logger="catalog.error_handler"):
        status_code, payload = ErrorHandler().handle_exception(exc)
    assert status_code == 500
    assert payload["detail"] == {"error": "storage_failure", "message": "Storage failure"}
    assert len(caplog.records) == 1
    assert "operation :: save" in caplog.records[0].getMessage()
    assert "disk full" in caplog.records[0].getMessage()


def test_unclassified_error_is_logged_once_and_hidden(caplog):
    with caplog.at_level(logging.WARNING, logger="catalog.error_handler"):
        status_code, payload = ErrorHandler().handle_exception(RuntimeError("boom"), operation="GET /x")
    assert status_code == 500
    assert payload["detail"]["error"] == "internal_error"
    assert "boom" not in payload["detail"]["message"]
    assert len(caplog.records) == 1
    assert caplog.records[0].levelno == logging.ERROR
    assert "operation :: GET /x" in caplog.records[0].getMessage()


def test_client_errors_log_at_warning(caplog):
    with caplog.at_level(logging.WARNING, logger="catalog.error_handler"):
        ErrorHandler().handle_exception(ProductNotFoundError(1, operation="update"))
    assert [r.levelno for r in caplog.records] == [logging.WARNING]
