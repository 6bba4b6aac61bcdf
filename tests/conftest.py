"""テスト共通フィクスチャ。"""

from datetime import UTC, datetime

import pytest
from starlette.testclient import TestClient

from patron.config import ServerConfig
from patron.models.customer import CustomerInput
from patron.server import create_app
from patron.services.customer import CustomerService
from patron.storage.service import CustomerStore
from patron.validators.customer import CustomerValidator

FIXED_NOW = datetime(2026, 6, 15, 12, 0, tzinfo=UTC)


def make_input(**overrides: object) -> CustomerInput:
    """全ルールを満たす顧客データ。overridesで個別フィールドを差し替える。"""
    data: dict[str, object] = {
        "first_name": "Maria",
        "last_name": "Silva",
        "email": "maria.silva@example.com",
        "phone_number": "11987654321",
        "date_of_birth": datetime(1990, 5, 20, tzinfo=UTC),
        "address": "Rua das Flores, 123",
    }
    data.update(overrides)
    return CustomerInput.model_validate(data)


@pytest.fixture
def now() -> datetime:
    """テスト用の固定現在時刻。"""
    return FIXED_NOW


@pytest.fixture
def validator(now: datetime) -> CustomerValidator:
    """固定時刻で評価するCustomerValidator。"""
    return CustomerValidator(clock=lambda: now)


@pytest.fixture
def store() -> CustomerStore:
    """空のCustomerStore。"""
    return CustomerStore()


@pytest.fixture
def customer_service(store: CustomerStore, validator: CustomerValidator) -> CustomerService:
    """テスト用CustomerService。"""
    return CustomerService(store=store, validator=validator)


@pytest.fixture
def server_config() -> ServerConfig:
    """テスト用ServerConfig。"""
    return ServerConfig()


@pytest.fixture
def client(server_config: ServerConfig, customer_service: CustomerService) -> TestClient:
    """テスト用HTTPクライアント。"""
    return TestClient(create_app(server_config, customer_service))
