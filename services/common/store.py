"""
Common — インメモリリポジトリ

各サービスのエンティティを ID をキーに保持する汎用ストア。
データはプロセス内メモリのみで、再起動すると失われる。

並行性:
  書き込み(create / update / delete)はロックで直列化し、
  新しい dict を作ってから参照を差し替える(コピーオンライト)。
  読み取りはロックを取らずに現在のスナップショットを読むため、
  読み取り同士は並行に実行でき、書きかけのエンティティは見えない。

所有権:
  ストアが正本を保持する。アクセサは常にディープコピーを返すので、
  呼び出し側がコピーを変更してもストア内部の状態は壊れない。
"""

import threading
from collections.abc import Callable
from typing import Generic, TypeVar

from pydantic import BaseModel

from .errors import NotFoundError

# id: str と created_at: datetime を持つモデル
T = TypeVar("T", bound=BaseModel)


class InMemoryRepository(Generic[T]):
    """ID をキーにエンティティを保持するスレッドセーフなストア"""

    entity_name = "entity"

    def __init__(self) -> None:
        self._items: dict[str, T] = {}
        self._write_lock = threading.Lock()

    # ── 書き込み ──────────────────────────────────

    def create(self, entity: T) -> None:
        with self._write_lock:
            self._check_unique(entity)
            items = dict(self._items)
            items[entity.id] = entity.model_copy(deep=True)
            self._items = items

    def update(self, entity: T) -> None:
        with self._write_lock:
            if entity.id not in self._items:
                raise self._not_found()
            self._check_unique(entity)
            items = dict(self._items)
            items[entity.id] = entity.model_copy(deep=True)
            self._items = items

    def delete(self, entity_id: str) -> None:
        with self._write_lock:
            if entity_id not in self._items:
                raise self._not_found()
            items = dict(self._items)
            del items[entity_id]
            self._items = items

    # ── 読み取り ──────────────────────────────────

    def get_by_id(self, entity_id: str) -> T:
        entity = self._items.get(entity_id)
        if entity is None:
            raise self._not_found()
        return entity.model_copy(deep=True)

    def list_all(self, predicate: Callable[[T], bool] | None = None) -> list[T]:
        """
        条件に一致するエンティティのコピーを返す。
        順序は created_at 昇順、同時刻は id 順。
        """
        snapshot = self._items
        matches = [e for e in snapshot.values() if predicate is None or predicate(e)]
        matches.sort(key=lambda e: (e.created_at, e.id))
        return [e.model_copy(deep=True) for e in matches]

    def count(self) -> int:
        return len(self._items)

    # ── サブクラス用フック ────────────────────────

    def _check_unique(self, entity: T) -> None:
        """create / update 時のユニーク制約。書き込みロック内で呼ばれる。自分自身の id は除外すること。"""

    def _not_found(self) -> NotFoundError:
        return NotFoundError(f"{self.entity_name.capitalize()} not found")
