"""フィールド単位のバリデーションルールを宣言・評価するルールエンジン。

バリデータは構築時にフィールドごとのルールチェーンを宣言し、
以降の validate 呼び出しではその宣言済みテーブルを評価するだけで状態を持たない。

    class PersonValidator(RuleValidator[Person]):
        def __init__(self) -> None:
            super().__init__()
            self.rule_for("name", lambda p: p.name).not_empty("Name is required")
"""

import re
from collections.abc import Callable, Collection
from dataclasses import dataclass
from datetime import date, datetime
from numbers import Number
from typing import Any, Generic, TypeVar

from patron.models.validation import ValidationFailure, ValidationResult

T = TypeVar("T")

Check = Callable[[Any, Any], bool]


@dataclass(frozen=True)
class ValidationRule:
    """単一のチェック。check は (フィールド値, 検証対象全体) を受け取る。"""

    field: str
    position: int
    message: str
    check: Check

    def passes(self, value: Any, candidate: Any) -> bool:
        return bool(self.check(value, candidate))


@dataclass(frozen=True)
class FieldChain:
    """1フィールド分の順序付きルール列。"""

    field: str
    selector: Callable[[Any], Any]
    rules: tuple[ValidationRule, ...] = ()
    stop_on_failure: bool = False

    def evaluate(self, candidate: Any) -> list[ValidationFailure]:
        """チェーンを宣言順に評価し、違反したルールの失敗を返す。"""
        failures: list[ValidationFailure] = []
        value = self.selector(candidate)
        for rule in self.rules:
            if rule.passes(value, candidate):
                continue
            failures.append(ValidationFailure(field=rule.field, message=rule.message))
            if self.stop_on_failure:
                break
        return failures


class ChainBuilder:
    """rule_for が返すビルダー。ルールを追加するたびに自身を返す。"""

    def __init__(self, validator: "RuleValidator[Any]", index: int) -> None:
        self._validator = validator
        self._index = index

    def require(self, predicate: Callable[[Any], bool], message: str) -> "ChainBuilder":
        """フィールド値だけを見る述語を追加する。"""
        return self.require_with_candidate(lambda value, _candidate: predicate(value), message)

    def require_with_candidate(self, predicate: Check, message: str) -> "ChainBuilder":
        """フィールド値と検証対象全体を受け取る述語を追加する。"""
        self._validator._append_rule(self._index, predicate, message)
        return self

    # 以下の組み込みルールは None を「未チェック」として通す (not_empty を除く)

    def not_empty(self, message: str) -> "ChainBuilder":
        return self.require(is_not_empty, message)

    def length(self, minimum: int, maximum: int, message: str) -> "ChainBuilder":
        return self.require(lambda value: value is None or minimum <= len(value) <= maximum, message)

    def min_length(self, minimum: int, message: str) -> "ChainBuilder":
        return self.require(lambda value: value is None or len(value) >= minimum, message)

    def matches(self, pattern: str | re.Pattern[str], message: str) -> "ChainBuilder":
        compiled = re.compile(pattern)
        return self.require(lambda value: value is None or compiled.fullmatch(value) is not None, message)

    def email_address(self, message: str) -> "ChainBuilder":
        return self.require(lambda value: value is None or is_email_address(value), message)

    def less_than(self, bound: Any, message: str) -> "ChainBuilder":
        """値が bound 未満であることを要求する。

        bound に引数なしの呼び出し可能オブジェクトを渡した場合は評価のたびに呼び出す。
        """
        resolve = bound if callable(bound) else (lambda: bound)
        return self.require(lambda value: value is None or value < resolve(), message)


class RuleValidator(Generic[T]):
    """宣言済みルールチェーンを評価するバリデータの基底クラス。"""

    def __init__(self) -> None:
        self._chains: list[FieldChain] = []

    @property
    def chains(self) -> tuple[FieldChain, ...]:
        return tuple(self._chains)

    @property
    def rules(self) -> tuple[ValidationRule, ...]:
        """評価順に並べたフラットなルールテーブル。"""
        return tuple(rule for chain in self._chains for rule in chain.rules)

    def rule_for(
        self,
        field: str,
        selector: Callable[[T], Any],
        *,
        stop_on_failure: bool = False,
    ) -> ChainBuilder:
        """フィールドのルールチェーンを宣言する。

        同じフィールドを再度宣言すると独立したチェーンが追加され、
        どちらのチェーンの失敗もまとめて報告される。
        """
        self._chains.append(FieldChain(field=field, selector=selector, stop_on_failure=stop_on_failure))
        return ChainBuilder(self, len(self._chains) - 1)

    def _append_rule(self, index: int, check: Check, message: str) -> None:
        chain = self._chains[index]
        rule = ValidationRule(field=chain.field, position=len(chain.rules), message=message, check=check)
        self._chains[index] = FieldChain(
            field=chain.field,
            selector=chain.selector,
            rules=(*chain.rules, rule),
            stop_on_failure=chain.stop_on_failure,
        )

    def validate(self, candidate: T) -> ValidationResult:
        """全チェーンを評価して違反をすべて集める。

        最初の違反で打ち切らない。述語自体が送出した例外はそのまま伝播する。

        Args:
            candidate: 検証対象。変更されない。

        Returns:
            宣言順に並んだ失敗を持つ検証結果。
        """
        failures: list[ValidationFailure] = []
        for chain in self._chains:
            failures.extend(chain.evaluate(candidate))
        return ValidationResult(failures=failures)


def is_not_empty(value: Any) -> bool:
    """None、空白のみの文字列、空コレクション、型の既定値を空とみなす。

    既定値は数値の 0、False、date.min / datetime.min (タイムゾーンの有無を問わない)。
    """
    if value is None:
        return False
    if isinstance(value, str):
        return bool(value.strip())
    if isinstance(value, Collection):
        return len(value) > 0
    if isinstance(value, datetime):
        return value.replace(tzinfo=None) != datetime.min
    if isinstance(value, date):
        return value != date.min
    if isinstance(value, Number):
        return value != 0
    return True


def is_email_address(value: str) -> bool:
    """'@' がちょうど1つあり、先頭でも末尾でもないこと。"""
    index = value.find("@")
    return 0 < index < len(value) - 1 and index == value.rfind("@")
