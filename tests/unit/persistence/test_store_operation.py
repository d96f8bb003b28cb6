"""Unit tests for store error translation."""

import pytest
from sqlalchemy.exc import OperationalError

from quill.domain.error import StoreError
from quill.persistence.error import store_operation


class TestStoreOperation:
    """Tests for the store_operation decorator."""

    @pytest.mark.asyncio
    async def test_driver_error_becomes_store_error(self):
        # Arrange
        @store_operation("comment.delete")
        async def failing():
            raise OperationalError("DELETE FROM comments", {}, Exception("gone"))

        # Act & Assert
        with pytest.raises(StoreError) as exc_info:
            await failing()

        assert exc_info.value.operation == "comment.delete"
        assert "OperationalError" in str(exc_info.value)
        assert isinstance(exc_info.value.__cause__, OperationalError)

    @pytest.mark.asyncio
    async def test_results_and_other_errors_pass_through(self):
        @store_operation("comment.find_by_id")
        async def ok(value):
            return value * 2

        @store_operation("comment.find_by_id")
        async def broken():
            raise KeyError("not a store problem")

        assert await ok(21) == 42
        with pytest.raises(KeyError):
            await broken()
