"""顧客データのビジネスルール。"""

from collections.abc import Callable
from datetime import UTC, datetime

from patron.models.customer import CustomerInput
from patron.validators.rules import RuleValidator

MINIMUM_AGE = 18
NAME_MIN_LENGTH = 2
NAME_MAX_LENGTH = 50
ADDRESS_MIN_LENGTH = 10
PHONE_PATTERN = r"^\d{10,15}$"


def subtract_years(moment: datetime, years: int) -> datetime:
    """暦の上で years 年前の同日時を返す。

    移動先の年に2月29日が無い場合は2月28日になる。
    """
    try:
        return moment.replace(year=moment.year - years)
    except ValueError:
        return moment.replace(year=moment.year - years, day=28)


def _utc_now() -> datetime:
    return datetime.now(UTC)


class CustomerValidator(RuleValidator[CustomerInput]):
    """顧客の作成・更新データを検証する。

    Args:
        clock: 現在時刻を返す関数。生年月日のルールで評価のたびに呼び出される。
    """

    def __init__(self, clock: Callable[[], datetime] | None = None) -> None:
        super().__init__()
        self._clock = clock or _utc_now

        self.rule_for("first_name", lambda c: c.first_name).not_empty("First name is required").length(
            NAME_MIN_LENGTH,
            NAME_MAX_LENGTH,
            f"First name must be between {NAME_MIN_LENGTH} and {NAME_MAX_LENGTH} characters",
        )

        self.rule_for("last_name", lambda c: c.last_name).not_empty("Last name is required").length(
            NAME_MIN_LENGTH,
            NAME_MAX_LENGTH,
            f"Last name must be between {NAME_MIN_LENGTH} and {NAME_MAX_LENGTH} characters",
        )

        (
            self.rule_for("email", lambda c: c.email)
            .not_empty("Email is required")
            .email_address("Email must be a valid email address")
        )

        (
            self.rule_for("phone_number", lambda c: c.phone_number)
            .not_empty("Phone number is required")
            .matches(PHONE_PATTERN, "Phone number must contain between 10 and 15 digits")
        )

        (
            self.rule_for("date_of_birth", lambda c: c.date_of_birth)
            .not_empty("Date of birth is required")
            .less_than(self._now, "Date of birth must be in the past")
            .require(self._is_adult, f"Customer must be at least {MINIMUM_AGE} years old")
        )

        (
            self.rule_for("address", lambda c: c.address)
            .not_empty("Address is required")
            .min_length(ADDRESS_MIN_LENGTH, f"Address must be at least {ADDRESS_MIN_LENGTH} characters")
        )

    def _now(self) -> datetime:
        now = self._clock()
        if now.tzinfo is None:
            return now.replace(tzinfo=UTC)
        return now

    def _is_adult(self, date_of_birth: datetime | None) -> bool:
        if date_of_birth is None:
            return True
        return date_of_birth <= subtract_years(self._now(), MINIMUM_AGE)
