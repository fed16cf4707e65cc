"""
Document store backends for search analytics.
Both backends expose the same four operations: equality-filtered list,
ordered+limited list, create with a generated id and update by id.
Any backend failure is raised as StoreError.
"""

import json  # Appwrite query strings are JSON documents
import threading  # guards the in-memory document list
import uuid  # generated document ids for the in-memory backend
from abc import ABC, abstractmethod  # backends must implement every operation
from typing import Any, Dict, List, Optional  # type hints

import requests  # Appwrite REST calls

from loguru import logger  # console logger

from .errors import ConfigError, StoreError

DEFAULT_APPWRITE_ENDPOINT = "https://cloud.appwrite.io/v1"  # Appwrite Cloud

Document = Dict[str, Any]


class DocumentCollection(ABC):
	"""Interface shared by the backends."""

	@abstractmethod
	def list_documents(
		self,
		equal: Optional[Dict[str, Any]] = None,
		order_desc: Optional[str] = None,
		limit: Optional[int] = None,
	) -> List[Document]:
		raise NotImplementedError

	@abstractmethod
	def create_document(self, data: Document) -> Document:
		raise NotImplementedError

	@abstractmethod
	def update_document(self, document_id: str, data: Document) -> Document:
		raise NotImplementedError


class InMemoryCollection(DocumentCollection):
	"""
	Process-local collection keeping documents in insertion order.
	Used when no Appwrite project is configured and in tests.
	"""

	def __init__(self, documents: Optional[List[Document]] = None):
		self._lock = threading.Lock()  # calls arrive from worker threads
		self._documents: List[Document] = []
		for doc in documents or []:
			self.create_document(doc)

	def list_documents(self, equal=None, order_desc=None, limit=None) -> List[Document]:
		with self._lock:
			docs = [dict(d) for d in self._documents]
		if equal:
			docs = [d for d in docs if all(d.get(k) == v for k, v in equal.items())]
		if order_desc:
			# sorted() is stable, so ties keep insertion order
			docs = sorted(docs, key=lambda d: d.get(order_desc, 0), reverse=True)
		if limit is not None:
			docs = docs[:limit]
		return docs

	def create_document(self, data: Document) -> Document:
		doc = dict(data)
		doc.setdefault("$id", uuid.uuid4().hex)
		with self._lock:
			self._documents.append(doc)
		return dict(doc)

	def update_document(self, document_id: str, data: Document) -> Document:
		with self._lock:
			for doc in self._documents:
				if doc["$id"] == document_id:
					doc.update(data)
					return dict(doc)
		raise StoreError(f"Document not found: {document_id}")

	def __len__(self) -> int:
		return len(self._documents)


class AppwriteCollection(DocumentCollection):
	"""
	One collection of an Appwrite database, reached through the REST API.
	Requests carry the project id header and, for server use, an API key.
	Queries use the JSON query-string format of Appwrite 1.5 and later; older
	servers expect the legacy `equal("attr", ["v"])` syntax and will reject them.
	"""

	def __init__(
		self,
		endpoint: str,
		project_id: str,
		database_id: str,
		collection_id: str,
		api_key: Optional[str] = None,
		timeout: float = 10.0,
		session: Optional[requests.Session] = None,
	):
		if not (endpoint and project_id and database_id and collection_id):
			raise ConfigError("Appwrite endpoint, project, database and collection ids are required")
		self.base_url = (
			f"{endpoint.rstrip('/')}/databases/{database_id}/collections/{collection_id}/documents"
		)
		self.timeout = timeout
		self.session = session or requests.Session()
		self.headers = {
			"Content-Type": "application/json",
			"X-Appwrite-Project": project_id,
		}
		if api_key:
			self.headers["X-Appwrite-Key"] = api_key

	@staticmethod
	def build_queries(equal=None, order_desc=None, limit=None) -> List[str]:
		"""Encode filters as Appwrite JSON query strings."""
		queries = []
		for attribute, value in (equal or {}).items():
			queries.append(json.dumps({"method": "equal", "attribute": attribute, "values": [value]}))
		if order_desc:
			queries.append(json.dumps({"method": "orderDesc", "attribute": order_desc}))
		if limit is not None:
			queries.append(json.dumps({"method": "limit", "values": [limit]}))
		return queries

	def _request(self, method: str, url: str, **kwargs) -> Document:
		try:
			response = self.session.request(method, url, headers=self.headers, timeout=self.timeout, **kwargs)
		except requests.RequestException as e:
			raise StoreError(f"Appwrite request failed: {e}") from e
		if not response.ok:
			raise StoreError(f"Appwrite {method} returned HTTP {response.status_code}: {response.text[:200]}")
		try:
			return response.json()
		except ValueError as e:
			raise StoreError(f"Appwrite returned invalid JSON: {e}") from e

	def list_documents(self, equal=None, order_desc=None, limit=None) -> List[Document]:
		queries = self.build_queries(equal=equal, order_desc=order_desc, limit=limit)
		logger.debug(f"[Appwrite] list documents queries={queries}")
		body = self._request("GET", self.base_url, params={"queries[]": queries})
		return body.get("documents", [])

	def create_document(self, data: Document) -> Document:
		return self._request("POST", self.base_url, json={"documentId": "unique()", "data": data})

	def update_document(self, document_id: str, data: Document) -> Document:
		return self._request("PATCH", f"{self.base_url}/{document_id}", json={"data": data})
