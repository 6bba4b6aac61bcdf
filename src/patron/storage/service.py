"""メモリ上の顧客ストア。"""

from patron.models.customer import Customer, CustomerInput
from patron.models.errors import CustomerNotFoundError


class CustomerStore:
    """顧客レコードを保持するキー付きコンテナ。

    IDは1から採番し、削除されたIDは再利用しない。
    プロセス終了とともに内容は失われる。
    """

    def __init__(self) -> None:
        self._customers: dict[int, Customer] = {}
        self._next_id = 1

    async def add(self, data: CustomerInput) -> Customer:
        """新しいIDを採番して顧客を追加する。"""
        customer = Customer.from_input(self._next_id, data)
        self._next_id += 1
        self._customers[customer.id] = customer
        return customer

    async def get(self, customer_id: int) -> Customer:
        """顧客を取得する。

        Raises:
            CustomerNotFoundError: 顧客が存在しない場合。
        """
        customer = self._customers.get(customer_id)
        if customer is None:
            raise CustomerNotFoundError(customer_id)
        return customer

    async def list_all(self) -> list[Customer]:
        """登録順の顧客一覧を返す。"""
        return list(self._customers.values())

    async def replace(self, customer_id: int, data: CustomerInput) -> Customer:
        """既存顧客の全フィールドを置き換える。

        Raises:
            CustomerNotFoundError: 顧客が存在しない場合。
        """
        await self.get(customer_id)
        customer = Customer.from_input(customer_id, data)
        self._customers[customer_id] = customer
        return customer

    async def remove(self, customer_id: int) -> None:
        """顧客を削除する。

        Raises:
            CustomerNotFoundError: 顧客が存在しない場合。
        """
        if self._customers.pop(customer_id, None) is None:
            raise CustomerNotFoundError(customer_id)
