"""
Shared fixtures.

``FakeStore`` stands in for ``DocumentStore``: its collections keep
documents in memory and implement the part of the asynchronous pymongo
collection API used by the services (``find``/``to_list``,
``find_one``, ``insert_one``, ``insert_many``, ``find_one_and_update``,
``count_documents``, ``delete_many``, ``create_index`` and a
single-stage ``$group`` ``aggregate``).
"""

import copy
import re
from types import SimpleNamespace
from typing import Any, Dict, List, Optional

import pytest
from bson import ObjectId
from fastapi.testclient import TestClient
from pymongo import ReturnDocument

from lesson_hub_api.app.main import create_app


def _matches(document: Dict[str, Any], query: Optional[Dict[str, Any]]) -> bool:
    for key, condition in (query or {}).items():
        if key == "$or":
            if not any(_matches(document, sub) for sub in condition):
                return False
            continue
        value = document.get(key)
        if isinstance(condition, dict) and any(op.startswith("$") for op in condition):
            if "$in" in condition and value not in condition["$in"]:
                return False
            if "$regex" in condition:
                flags = re.IGNORECASE if "i" in condition.get("$options", "") else 0
                if not isinstance(value, str) or not re.search(condition["$regex"], value, flags):
                    return False
        elif value != condition:
            return False
    return True


def _evaluate(expression: Any, document: Dict[str, Any]) -> Any:
    if isinstance(expression, str) and expression.startswith("$"):
        return document.get(expression[1:])
    if isinstance(expression, dict) and len(expression) == 1:
        op, args = next(iter(expression.items()))
        values = [_evaluate(arg, document) for arg in args]
        if op == "$add":
            return sum(values)
        if op == "$max":
            return max(values)
        if op == "$ifNull":
            return values[0] if values[0] is not None else values[1]
        raise NotImplementedError(op)
    return expression


class FakeCursor:
    def __init__(self, documents: List[Dict[str, Any]]) -> None:
        self.documents = documents

    async def to_list(self, length=None):
        return self.documents if length is None else self.documents[:length]


class FakeCollection:
    def __init__(self) -> None:
        self.documents: List[Dict[str, Any]] = []
        self.indexes: List[Any] = []
        self.fail_with: Optional[Exception] = None

    def _check(self) -> None:
        if self.fail_with is not None:
            raise self.fail_with

    def add(self, **fields) -> str:
        """Insert a document synchronously and return its id as a string."""
        document = dict(fields)
        document.setdefault("_id", ObjectId())
        self.documents.append(document)
        return str(document["_id"])

    def find(self, query=None, sort=None):
        self._check()
        found = [copy.deepcopy(doc) for doc in self.documents if _matches(doc, query)]
        for key, direction in reversed(sort or []):
            found.sort(key=lambda doc: doc.get(key), reverse=direction < 0)
        return FakeCursor(found)

    async def find_one(self, query=None):
        self._check()
        for doc in self.documents:
            if _matches(doc, query):
                return copy.deepcopy(doc)
        return None

    async def insert_one(self, document):
        self._check()
        document.setdefault("_id", ObjectId())
        self.documents.append(copy.deepcopy(document))
        return SimpleNamespace(inserted_id=document["_id"])

    async def insert_many(self, documents):
        self._check()
        ids = []
        for document in documents:
            result = await self.insert_one(document)
            ids.append(result.inserted_id)
        return SimpleNamespace(inserted_ids=ids)

    async def find_one_and_update(self, query, update, return_document=ReturnDocument.BEFORE):
        self._check()
        for doc in self.documents:
            if not _matches(doc, query):
                continue
            before = copy.deepcopy(doc)
            stages = update if isinstance(update, list) else [update]
            for stage in stages:
                for field, expression in stage["$set"].items():
                    doc[field] = _evaluate(expression, doc) if isinstance(update, list) else expression
            return copy.deepcopy(doc) if return_document == ReturnDocument.AFTER else before
        return None

    async def count_documents(self, query):
        self._check()
        return sum(1 for doc in self.documents if _matches(doc, query))

    async def delete_many(self, query):
        self._check()
        kept = [doc for doc in self.documents if not _matches(doc, query)]
        deleted = len(self.documents) - len(kept)
        self.documents = kept
        return SimpleNamespace(deleted_count=deleted)

    async def create_index(self, keys, **kwargs):
        self.indexes.append(keys)
        return "_".join(f"{key}_{direction}" for key, direction in keys)

    async def aggregate(self, pipeline):
        self._check()
        (stage,) = pipeline
        group = stage["$group"]
        if not self.documents:
            return FakeCursor([])
        result: Dict[str, Any] = {"_id": group["_id"]}
        for field, accumulator in group.items():
            if field == "_id":
                continue
            op, expression = next(iter(accumulator.items()))
            values = [_evaluate(expression, doc) for doc in self.documents]
            if op == "$sum":
                result[field] = sum(values)
            elif op == "$avg":
                result[field] = sum(values) / len(values)
            elif op == "$min":
                result[field] = min(values)
            elif op == "$max":
                result[field] = max(values)
            else:
                raise NotImplementedError(op)
        return FakeCursor([result])


class FakeStore:
    def __init__(self) -> None:
        self.lessons = FakeCollection()
        self.orders = FakeCollection()
        self.connected = False
        self.healthy = True

    async def connect(self) -> None:
        self.connected = True

    async def ping(self) -> bool:
        return self.healthy

    async def close(self) -> None:
        self.connected = False


@pytest.fixture
def store():
    return FakeStore()


@pytest.fixture
def images_dir(tmp_path):
    lessons = tmp_path / "lessons"
    lessons.mkdir()
    (lessons / "mathematics.svg").write_text("<svg xmlns='http://www.w3.org/2000/svg'/>", encoding="utf-8")
    (lessons / "test.jpg").write_bytes(b"\xff\xd8\xff\xe0fake-jpeg")
    return tmp_path


@pytest.fixture
def app(store, images_dir):
    return create_app(store=store, images_dir=images_dir)


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def lesson_ids(store):
    """Two lessons with known prices: Mathematics (25) and Physics (35)."""
    return {
        "mathematics": store.lessons.add(topic="Mathematics", price=25, location="London", space=10),
        "physics": store.lessons.add(topic="Physics", price=35, location="Birmingham", space=6),
    }
