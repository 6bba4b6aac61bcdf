"""Patronのカスタム例外クラス。"""

from patron.models.validation import ValidationFailure, ValidationResult


class PatronError(Exception):
    """Patronの基底例外クラス。"""


class CustomerNotFoundError(PatronError):
    """顧客が見つからない場合の例外。"""

    def __init__(self, customer_id: int) -> None:
        super().__init__(f"Customer not found: {customer_id}")
        self.customer_id = customer_id


class CustomerValidationError(PatronError):
    """顧客データがビジネスルールを満たさない場合の例外。"""

    def __init__(self, result: ValidationResult) -> None:
        super().__init__(f"Customer data is invalid: {len(result.failures)} rule(s) violated")
        self.result = result

    @property
    def failures(self) -> tuple[ValidationFailure, ...]:
        return self.result.failures


class RequestBodyError(PatronError):
    """リクエストボディを顧客データとして解釈できない場合の例外。"""

    def __init__(self, failures: list[ValidationFailure]) -> None:
        super().__init__("Request body could not be decoded")
        self.failures = tuple(failures)
