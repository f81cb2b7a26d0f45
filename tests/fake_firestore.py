from __future__ import annotations

import copy
from typing import Any, Dict, List, Optional

from google.api_core.exceptions import AlreadyExists, NotFound
from google.cloud import firestore


class FakeSnapshot:
    def __init__(self, doc_id: str, data: Optional[Dict[str, Any]]):
        self.id = doc_id
        self._data = data

    @property
    def exists(self) -> bool:
        return self._data is not None

    def to_dict(self) -> Optional[Dict[str, Any]]:
        return copy.deepcopy(self._data) if self._data is not None else None


def _apply(current: Dict[str, Any], patch: Dict[str, Any]) -> Dict[str, Any]:
    out = dict(current)
    for k, v in patch.items():
        if isinstance(v, firestore.Increment):
            out[k] = (out.get(k) or 0) + v.value
        else:
            out[k] = copy.deepcopy(v)
    return out


class FakeDocument:
    def __init__(self, store: Dict[str, Dict[str, Any]], doc_id: str):
        self._store = store
        self.id = doc_id

    def get(self, **kwargs) -> FakeSnapshot:
        return FakeSnapshot(self.id, self._store.get(self.id))

    def set(self, data: Dict[str, Any], merge: bool = False) -> None:
        base = self._store.get(self.id, {}) if merge else {}
        self._store[self.id] = _apply(base, data)

    def create(self, data: Dict[str, Any]) -> None:
        if self.id in self._store:
            raise AlreadyExists(f"document {self.id} already exists")
        self._store[self.id] = _apply({}, data)

    def update(self, data: Dict[str, Any]) -> None:
        if self.id not in self._store:
            raise NotFound(f"no document {self.id}")
        self._store[self.id] = _apply(self._store[self.id], data)

    def delete(self) -> None:
        self._store.pop(self.id, None)


_OPS = {
    "==": lambda a, b: a == b,
    ">=": lambda a, b: a is not None and a >= b,
    "<=": lambda a, b: a is not None and a <= b,
    ">": lambda a, b: a is not None and a > b,
    "<": lambda a, b: a is not None and a < b,
    "array_contains": lambda a, b: isinstance(a, list) and b in a,
}


class FakeQuery:
    def __init__(self, store, filters=None, order=None, limit=None, offset=0):
        self._store = store
        self._filters = list(filters or [])
        self._order = order
        self._limit = limit
        self._offset = offset

    def _clone(self, **changes) -> "FakeQuery":
        params = {
            "filters": self._filters,
            "order": self._order,
            "limit": self._limit,
            "offset": self._offset,
        }
        params.update(changes)
        return FakeQuery(self._store, **params)

    def where(self, field: str, op: str, value: Any) -> "FakeQuery":
        return self._clone(filters=self._filters + [(field, op, value)])

    def order_by(self, field: str, direction: str = firestore.Query.ASCENDING) -> "FakeQuery":
        return self._clone(order=(field, direction))

    def limit(self, n: int) -> "FakeQuery":
        return self._clone(limit=n)

    def offset(self, n: int) -> "FakeQuery":
        return self._clone(offset=n)

    def stream(self) -> List[FakeSnapshot]:
        rows = sorted(self._store.items())
        for field, op, value in self._filters:
            rows = [(k, d) for k, d in rows if _OPS[op](d.get(field), value)]
        if self._order:
            field, direction = self._order
            rows = [(k, d) for k, d in rows if d.get(field) is not None]
            rows.sort(key=lambda kv: kv[1][field], reverse=direction == firestore.Query.DESCENDING)
        rows = rows[self._offset:]
        if self._limit is not None:
            rows = rows[: self._limit]
        return [FakeSnapshot(k, copy.deepcopy(d)) for k, d in rows]


class FakeCollection(FakeQuery):
    def __init__(self, store: Dict[str, Dict[str, Any]]):
        super().__init__(store)

    def document(self, doc_id: str) -> FakeDocument:
        return FakeDocument(self._store, doc_id)

    def list_documents(self) -> List[FakeDocument]:
        return [FakeDocument(self._store, k) for k in sorted(self._store)]


class FakeFirestore:
    """In-memory stand-in for firestore.Client covering the calls the repositories make."""

    def __init__(self):
        self.collections: Dict[str, Dict[str, Dict[str, Any]]] = {}

    def collection(self, name: str) -> FakeCollection:
        return FakeCollection(self.collections.setdefault(name, {}))

    def docs(self, name: str) -> Dict[str, Dict[str, Any]]:
        return self.collections.get(name, {})
