"""Fetching and caching of the configuration documents.

`ConfigLoader.load` never raises for network or data problems. A document that
can't be fetched, or fetched but doesn't validate, is swapped for the built-in
fallback and that fallback is cached like anything else.
"""

import asyncio
import logging
from typing import cast

import httpx

import config
from bakery.documents import (
    Document,
    DocumentKind,
    IngredientsDocument,
    RecipesDocument,
    StepTemplatesDocument,
    fallback_document,
    validate_document,
)
from bakery.errors import BakeryError, DocumentFetchError


logger = logging.getLogger(__name__)


class LoadResult:
    def __init__(
        self,
        document: Document,
        *,
        used_fallback: bool = False,
        error: BakeryError | None = None,
    ) -> None:
        self.document = document
        self.used_fallback = used_fallback
        self.error = error

    def __repr__(self) -> str:
        return f"<LoadResult(used_fallback={self.used_fallback}, error={self.error!r})>"


def document_size(document: Document) -> int:
    if isinstance(document, RecipesDocument):
        return len(document.recipes)
    if isinstance(document, IngredientsDocument):
        return len(document.ingredients)
    return len(document.step_templates)


class ConfigLoader:
    def __init__(
        self,
        cfg: config.Config | None = None,
        *,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self.config = config.Config() if cfg is None else cfg
        self.http_client = http_client
        # Pending loads are cached too, so concurrent callers share one fetch.
        self._cache: dict[DocumentKind, asyncio.Task[LoadResult]] = {}

    def url(self, kind: DocumentKind) -> str:
        path = {
            DocumentKind.recipes: self.config.recipes_path,
            DocumentKind.step_templates: self.config.step_templates_path,
            DocumentKind.ingredients: self.config.ingredients_path,
        }[kind]
        return self.config.data_url.rstrip("/") + "/" + path.lstrip("/")

    async def load(self, kind: DocumentKind) -> Document:
        result = await self.load_result(kind)
        return result.document

    async def load_result(self, kind: DocumentKind) -> LoadResult:
        task = self._cache.get(kind)
        if task is None:
            task = asyncio.ensure_future(self._load(kind))
            self._cache[kind] = task
        return await asyncio.shield(task)

    async def load_recipes(self) -> RecipesDocument:
        return cast(RecipesDocument, await self.load(DocumentKind.recipes))

    async def load_step_templates(self) -> StepTemplatesDocument:
        return cast(
            StepTemplatesDocument, await self.load(DocumentKind.step_templates)
        )

    async def load_ingredients(self) -> IngredientsDocument:
        return cast(IngredientsDocument, await self.load(DocumentKind.ingredients))

    async def reload(self, kind: DocumentKind) -> Document:
        self._cache.pop(kind, None)
        return await self.load(kind)

    def clear_cache(self) -> None:
        self._cache.clear()

    def is_cached(self, kind: DocumentKind) -> bool:
        return kind in self._cache

    async def _load(self, kind: DocumentKind) -> LoadResult:
        try:
            data = await self._fetch(kind)
            document = validate_document(kind, data)
        except BakeryError as e:
            logger.error("Failed to load %s: %s", kind.value, e)
            logger.warning("Using fallback %s", kind.value)
            return LoadResult(fallback_document(kind), used_fallback=True, error=e)

        logger.info("Loaded %d %s", document_size(document), kind.value)
        return LoadResult(document)

    async def _fetch(self, kind: DocumentKind) -> object:
        url = self.url(kind)
        logger.info("Loading %s from %s", kind.value, url)
        try:
            if self.http_client is None:
                async with httpx.AsyncClient(timeout=self.config.fetch_timeout) as client:
                    resp = await client.get(url)
            else:
                resp = await self.http_client.get(url)
            resp.raise_for_status()
            return resp.json()
        # A closed client raises RuntimeError, a malformed URL httpx.InvalidURL.
        except (httpx.HTTPError, httpx.InvalidURL, RuntimeError, ValueError) as e:
            raise DocumentFetchError(kind.value, url, e) from e
