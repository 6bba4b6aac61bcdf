"""バリデーション関連のデータモデル。"""

from pydantic import BaseModel, ConfigDict, computed_field


class ValidationFailure(BaseModel):
    """違反したルール1件分の (フィールド, メッセージ)。"""

    model_config = ConfigDict(frozen=True)

    field: str
    message: str


class ValidationResult(BaseModel):
    """1回のバリデーション実行結果。

    failures が空のときに限り is_valid は True になる。
    """

    model_config = ConfigDict(frozen=True)

    failures: tuple[ValidationFailure, ...] = ()

    @computed_field  # type: ignore[prop-decorator]
    @property
    def is_valid(self) -> bool:
        return not self.failures

    def failures_by_field(self) -> dict[str, list[str]]:
        """フィールドごとにメッセージをまとめる。順序は検出順を保つ。"""
        grouped: dict[str, list[str]] = {}
        for failure in self.failures:
            grouped.setdefault(failure.field, []).append(failure.message)
        return grouped
