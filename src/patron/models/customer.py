"""顧客関連のデータモデル。"""

from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict, field_validator


class CustomerInput(BaseModel):
    """作成・更新リクエストで受け取る顧客データ (DTO)。

    未指定の文字列は空文字、生年月日は None として受け取り、
    欠落はバリデーションで報告する。
    """

    model_config = ConfigDict(frozen=True)

    first_name: str = ""
    last_name: str = ""
    email: str = ""
    phone_number: str = ""
    date_of_birth: datetime | None = None
    address: str = ""

    @field_validator("date_of_birth")
    @classmethod
    def _assume_utc(cls, value: datetime | None) -> datetime | None:
        # タイムゾーン無しの日時はUTCとして扱う
        if value is not None and value.tzinfo is None:
            return value.replace(tzinfo=UTC)
        return value


class Customer(BaseModel):
    """登録済みの顧客。"""

    id: int
    first_name: str
    last_name: str
    email: str
    phone_number: str
    date_of_birth: datetime
    address: str

    @classmethod
    def from_input(cls, customer_id: int, data: CustomerInput) -> "Customer":
        """検証済みのDTOから顧客レコードを組み立てる。"""
        return cls(id=customer_id, **data.model_dump())
