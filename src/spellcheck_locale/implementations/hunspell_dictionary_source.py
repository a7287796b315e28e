"""Hunspell dictionary source with an on-disk cache and HTTP download."""

from __future__ import annotations

import asyncio
from pathlib import Path

import aiohttp

from spellcheck_locale.error_handling import raise_dictionary_fetch_error
from spellcheck_locale.logging_utils import create_service_logger
from spellcheck_locale.models import DictionaryPayload
from spellcheck_locale.protocols import DictionarySourceProtocol

logger = create_service_logger("spellcheck_locale.implementations.hunspell_dictionary_source")

DICTIONARY_EXTENSIONS = ("dic", "aff")


class HunspellDictionarySource(DictionarySourceProtocol):
    """Keeps ``<language>.dic``/``<language>.aff`` pairs in a cache directory.

    Cache misses are downloaded from ``url_template`` (formatted with ``language`` and
    ``extension``) unless the caller asked for cache-only data.
    """

    def __init__(
        self,
        cache_dir: Path,
        url_template: str,
        timeout_seconds: float = 30.0,
        http_session: aiohttp.ClientSession | None = None,
    ) -> None:
        self.cache_dir = Path(cache_dir)
        self.url_template = url_template
        self.timeout_seconds = timeout_seconds
        self._http_session = http_session

    def dictionary_paths(self, language: str) -> tuple[Path, Path]:
        dic_ext, aff_ext = DICTIONARY_EXTENSIONS
        return (
            self.cache_dir / f"{language}.{dic_ext}",
            self.cache_dir / f"{language}.{aff_ext}",
        )

    async def load_dictionary_for_language(
        self,
        language: str,
        cache_only: bool = False,
    ) -> DictionaryPayload:
        """Return the cached dictionary for ``language``, downloading it if needed.

        Raises:
            SpellcheckLocaleError: DICTIONARY_FETCH_ERROR on cache miss in cache-only
                mode, transport or HTTP failure, or an empty payload
        """
        dic_path, aff_path = self.dictionary_paths(language)

        cached = await asyncio.to_thread(self._read_cached, dic_path, aff_path)
        if cached:
            return cached

        if cache_only:
            raise_dictionary_fetch_error(
                operation="load_dictionary_for_language",
                language=language,
                message=f"Dictionary for {language} is not cached",
                cache_only=True,
            )

        logger.info(f"Downloading dictionary for {language}")
        payload = await self._download(language)
        await asyncio.to_thread(self._write_cached, dic_path, aff_path, payload)
        return payload

    @staticmethod
    def _read_cached(dic_path: Path, aff_path: Path) -> DictionaryPayload | None:
        if not (dic_path.is_file() and aff_path.is_file()):
            return None
        payload = DictionaryPayload(dic=dic_path.read_bytes(), aff=aff_path.read_bytes())
        return payload if payload else None

    def _write_cached(self, dic_path: Path, aff_path: Path, payload: DictionaryPayload) -> None:
        self.cache_dir.mkdir(parents=True, exist_ok=True)
        dic_path.write_bytes(payload.dic)
        aff_path.write_bytes(payload.aff)

    async def _download(self, language: str) -> DictionaryPayload:
        timeout = aiohttp.ClientTimeout(total=self.timeout_seconds)
        if self._http_session is not None:
            return await self._download_with(self._http_session, language, timeout)

        async with aiohttp.ClientSession() as session:
            return await self._download_with(session, language, timeout)

    async def _download_with(
        self,
        session: aiohttp.ClientSession,
        language: str,
        timeout: aiohttp.ClientTimeout,
    ) -> DictionaryPayload:
        contents: dict[str, bytes] = {}
        for extension in DICTIONARY_EXTENSIONS:
            url = self.url_template.format(language=language, extension=extension)
            try:
                async with session.get(url, timeout=timeout) as response:
                    if response.status != 200:
                        raise_dictionary_fetch_error(
                            operation="download_dictionary",
                            language=language,
                            message=f"Dictionary download returned HTTP {response.status}",
                            url=url,
                            status_code=response.status,
                        )
                    contents[extension] = await response.read()
            except (aiohttp.ClientError, asyncio.TimeoutError) as e:
                raise_dictionary_fetch_error(
                    operation="download_dictionary",
                    language=language,
                    message=f"Dictionary download failed: {e}",
                    url=url,
                )

        payload = DictionaryPayload(dic=contents["dic"], aff=contents["aff"])
        if not payload:
            raise_dictionary_fetch_error(
                operation="download_dictionary",
                language=language,
                message=f"Downloaded dictionary for {language} is empty",
            )
        return payload
