"""Tests for the admin guard and identity dependencies."""

import pytest
from fastapi import FastAPI, HTTPException
from starlette.requests import Request

from soundhaven.api.dependencies import (
    get_current_external_id,
    get_database,
    is_admin,
    require_admin,
)
from soundhaven.config import ApiSettings, Settings
from soundhaven.domain.exceptions import AuthorizationError


@pytest.fixture
def guarded_settings() -> Settings:
    return Settings(api=ApiSettings(admin_ids=["admin-1", "admin-2"]))


class TestIsAdmin:
    def test_listed_id_is_admin(self, guarded_settings: Settings) -> None:
        assert is_admin("admin-2", guarded_settings) is True

    def test_unlisted_id_is_not_admin(self, guarded_settings: Settings) -> None:
        assert is_admin("someone", guarded_settings) is False

    def test_anonymous_is_not_admin(self, guarded_settings: Settings) -> None:
        assert is_admin(None, guarded_settings) is False

    def test_empty_admin_list_means_open(self) -> None:
        assert is_admin(None, Settings(api=ApiSettings(admin_ids=[]))) is True


class TestRequireAdmin:
    def test_returns_caller(self, guarded_settings: Settings) -> None:
        assert require_admin("admin-1", guarded_settings) == "admin-1"

    def test_rejects_non_admin(self, guarded_settings: Settings) -> None:
        with pytest.raises(AuthorizationError):
            require_admin("intruder", guarded_settings)


def test_blank_header_counts_as_anonymous() -> None:
    assert get_current_external_id("") is None
    assert get_current_external_id("ext-1") == "ext-1"


def test_database_missing_is_503() -> None:
    request = Request({"type": "http", "app": FastAPI(), "headers": []})

    with pytest.raises(HTTPException) as exc_info:
        get_database(request)

    assert exc_info.value.status_code == 503
