"""Unit tests for errors.py: error kinds and backend status classification."""

import pytest

from blobpath.errors import BlobPathError, ErrorKind, Operation, classify_error

# ---------------------------------------------------------------------------
# classify_error tests
# ---------------------------------------------------------------------------


class TestClassifyError:
    @pytest.mark.parametrize("operation", list(Operation))
    def test_400_is_expired_token_for_every_operation(self, operation: Operation) -> None:
        assert classify_error(400, operation) is ErrorKind.EXPIRED_TOKEN

    @pytest.mark.parametrize("status", [404, 301])
    @pytest.mark.parametrize("operation", [Operation.HEAD_OBJECT, Operation.GET_METADATA])
    def test_not_found_on_existence_check(self, status: int, operation: Operation) -> None:
        assert classify_error(status, operation) is ErrorKind.OBJECT_DOES_NOT_EXIST

    @pytest.mark.parametrize("status", [404, 301])
    @pytest.mark.parametrize(
        "operation", [Operation.LIST_OBJECTS, Operation.PUT_OBJECT, Operation.GET_OBJECT]
    )
    def test_not_found_on_other_operations_is_unknown(
        self, status: int, operation: Operation
    ) -> None:
        assert classify_error(status, operation) is ErrorKind.UNKNOWN

    @pytest.mark.parametrize("status", [403, 409, 500, 503, 999, -1])
    def test_other_statuses_degrade_to_unknown(self, status: int) -> None:
        assert classify_error(status, Operation.HEAD_OBJECT) is ErrorKind.UNKNOWN

    def test_request_failure_without_status_is_unknown(self) -> None:
        assert classify_error(None, Operation.HEAD_OBJECT) is ErrorKind.UNKNOWN

    @pytest.mark.parametrize("kind", [ErrorKind.NOT_A_DIRECTORY, ErrorKind.OBJECT_ALREADY_EXISTS])
    def test_local_condition_returned_verbatim(self, kind: ErrorKind) -> None:
        assert classify_error(kind, Operation.LIST_OBJECTS) is kind


# ---------------------------------------------------------------------------
# BlobPathError tests
# ---------------------------------------------------------------------------


class TestBlobPathError:
    def test_kind_status_and_path_stored(self) -> None:
        err = BlobPathError(ErrorKind.OBJECT_DOES_NOT_EXIST, status_code=404, path="/C/a")
        assert err.kind is ErrorKind.OBJECT_DOES_NOT_EXIST
        assert err.status_code == 404
        assert err.path == "/C/a"

    def test_str_uses_kind_message(self) -> None:
        err = BlobPathError(ErrorKind.EXPIRED_TOKEN)
        assert str(err) == "The provided token has expired."

    def test_str_includes_detail_and_path(self) -> None:
        err = BlobPathError(ErrorKind.INVALID_PATH, detail="Bad container.", path="x")
        assert "Bad container." in str(err)
        assert "path:x" in str(err)

    def test_every_kind_has_a_message(self) -> None:
        for kind in ErrorKind:
            assert kind.message
