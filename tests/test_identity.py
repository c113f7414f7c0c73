"""
Tests for resolving the caller's id from token claims.
"""

import uuid

import pytest

from api.errors import status_for
from auth.identity import extract_owner_id
from utils.errors import IdentityError


class TestExtractOwnerId:
    def test_valid_subject(self):
        user_id = uuid.uuid4()
        assert extract_owner_id({"sub": str(user_id)}) == user_id

    def test_missing_subject_is_server_error(self):
        with pytest.raises(IdentityError) as exc_info:
            extract_owner_id({"email": "a@example.com"})
        assert status_for(exc_info.value.kind) == 500

    def test_unparsable_subject_is_server_error(self):
        with pytest.raises(IdentityError, match="not a valid user id"):
            extract_owner_id({"sub": "42"})
