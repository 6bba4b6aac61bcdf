"""顧客レコードの管理を行うサービス。"""

import logging

from patron.models.customer import Customer, CustomerInput
from patron.models.errors import CustomerValidationError
from patron.storage.service import CustomerStore
from patron.validators.customer import CustomerValidator

logger = logging.getLogger(__name__)


class CustomerService:
    """顧客の参照・作成・更新・削除を行う。

    作成と更新では毎回すべてのルールで検証してからストアを変更する。
    """

    def __init__(self, store: CustomerStore, validator: CustomerValidator) -> None:
        self._store = store
        self._validator = validator

    async def list_customers(self) -> list[Customer]:
        return await self._store.list_all()

    async def get_customer(self, customer_id: int) -> Customer:
        """顧客を取得する。

        Raises:
            CustomerNotFoundError: 顧客が存在しない場合。
        """
        return await self._store.get(customer_id)

    async def create_customer(self, data: CustomerInput) -> Customer:
        """顧客データを検証して登録する。

        Args:
            data: 登録する顧客データ。

        Returns:
            IDが採番された顧客。

        Raises:
            CustomerValidationError: データがルールに違反している場合。
        """
        self._ensure_valid(data)
        customer = await self._store.add(data)
        logger.info("Created customer %d", customer.id)
        return customer

    async def update_customer(self, customer_id: int, data: CustomerInput) -> Customer:
        """既存顧客を検証済みのデータで更新する。

        Raises:
            CustomerNotFoundError: 顧客が存在しない場合。
            CustomerValidationError: データがルールに違反している場合。
        """
        await self._store.get(customer_id)
        self._ensure_valid(data)
        customer = await self._store.replace(customer_id, data)
        logger.info("Updated customer %d", customer_id)
        return customer

    async def delete_customer(self, customer_id: int) -> None:
        """顧客を削除する。

        Raises:
            CustomerNotFoundError: 顧客が存在しない場合。
        """
        await self._store.remove(customer_id)
        logger.info("Deleted customer %d", customer_id)

    def _ensure_valid(self, data: CustomerInput) -> None:
        result = self._validator.validate(data)
        if not result.is_valid:
            logger.info("Rejected customer data: %d rule(s) violated", len(result.failures))
            raise CustomerValidationError(result)
