from __future__ import annotations

import logging
import os
import random
import threading
import time
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any, Mapping

import requests

from tmdb_metadata.utils.cancellation import CancellationToken, OperationCancelled, raise_if_cancelled

TMDB_API_BASE_URL = "https://api.themoviedb.org/3"

logger = logging.getLogger(__name__)


class TmdbClientError(RuntimeError):
    def __init__(self, message: str, *, status_code: int | None = None, body_snippet: str | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body_snippet = body_snippet


def resolve_api_key(api_key: str | None = None) -> str | None:
    """
    Best-effort API key resolution for callers that want to continue when the key is missing.
    """

    resolved = (api_key or os.getenv("TMDB_API_KEY") or "").strip()
    return resolved or None


def resolve_bearer_token(bearer_token: str | None = None) -> str | None:
    resolved = (bearer_token or os.getenv("TMDB_BEARER") or "").strip()
    return resolved or None


def _auth(api_key: str | None, bearer_token: str | None) -> tuple[dict[str, str], dict[str, str]]:
    key = resolve_api_key(api_key)
    bearer = resolve_bearer_token(bearer_token)
    if not key and not bearer:
        raise RuntimeError("TMDB_BEARER or TMDB_API_KEY must be set.")
    params = {"api_key": key} if key else {}
    headers = {"Authorization": f"Bearer {bearer}"} if bearer else {}
    return params, headers


def _sleep(delay: float, cancel_token: CancellationToken | None) -> None:
    if cancel_token is None:
        time.sleep(delay)
        return
    if cancel_token.wait(delay):
        cancel_token.raise_if_cancelled()


def _close_quietly(future: Future) -> None:
    if future.cancelled() or future.exception() is not None:
        return
    future.result().close()


def _get(
    session: requests.Session,
    url: str,
    *,
    cancel_token: CancellationToken | None,
    **kwargs: Any,
) -> requests.Response:
    """
    `session.get` that returns as soon as `cancel_token` fires.

    The request runs on a worker thread. On cancel the session is closed, any
    response that still arrives is closed, and `OperationCancelled` is raised
    without waiting for the worker.
    """

    if cancel_token is None:
        return session.get(url, **kwargs)
    cancel_token.raise_if_cancelled()

    done = threading.Event()
    executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="tmdb-get")
    future = executor.submit(session.get, url, **kwargs)
    future.add_done_callback(lambda _: done.set())
    unregister = cancel_token.register(done.set)
    try:
        done.wait()
    finally:
        unregister()

    if cancel_token.cancelled:
        session.close()
        future.add_done_callback(_close_quietly)
        executor.shutdown(wait=False, cancel_futures=True)
        raise OperationCancelled("TMDb request cancelled by caller.")

    executor.shutdown(wait=False)
    return future.result()


def _request_json(
    session: requests.Session,
    url: str,
    *,
    params: Mapping[str, Any] | None = None,
    headers: Mapping[str, str] | None = None,
    timeout_seconds: float = 20.0,
    cancel_token: CancellationToken | None = None,
) -> dict[str, Any]:
    request_headers = {
        "accept": "application/json",
        "user-agent": "Mozilla/5.0",
        **dict(headers or {}),
    }
    max_attempts = 3

    last_response: requests.Response | None = None
    for attempt in range(max_attempts):
        raise_if_cancelled(cancel_token)
        try:
            resp = _get(
                session,
                url,
                params=params,
                headers=request_headers,
                timeout=timeout_seconds,
                cancel_token=cancel_token,
            )
        except requests.RequestException as exc:
            if cancel_token is not None and cancel_token.cancelled:
                raise OperationCancelled("TMDb request cancelled by caller.") from exc
            if attempt < max_attempts - 1:
                delay = 1.0 * (2**attempt)
                jitter = random.uniform(0.0, delay * 0.25)
                logger.warning(f"TMDb request to {url} failed ({exc}); retrying in {delay + jitter:.1f}s")
                _sleep(delay + jitter, cancel_token)
                continue
            raise TmdbClientError(f"TMDb request failed: {exc}") from exc

        raise_if_cancelled(cancel_token)
        last_response = resp
        if resp.status_code == 200:
            break

        retryable = resp.status_code == 429 or 500 <= resp.status_code < 600
        if retryable and attempt < max_attempts - 1:
            delay = 1.0 * (2**attempt)
            retry_after = (resp.headers.get("Retry-After") or "").strip()
            if retry_after.isdigit():
                delay = max(delay, float(retry_after))
            jitter = random.uniform(0.0, delay * 0.25)
            logger.warning(f"TMDb returned HTTP {resp.status_code} for {url}; retrying in {delay + jitter:.1f}s")
            _sleep(delay + jitter, cancel_token)
            continue

        raise TmdbClientError(
            f"TMDb request failed with HTTP {resp.status_code}.",
            status_code=resp.status_code,
            body_snippet=(resp.text or "")[:400],
        )

    if last_response is None:
        raise TmdbClientError("TMDb request failed (no response).")
    resp = last_response

    try:
        payload = resp.json()
    except ValueError as exc:
        raise TmdbClientError(
            "TMDb returned non-JSON response.",
            status_code=resp.status_code,
            body_snippet=(resp.text or "")[:400],
        ) from exc

    if not isinstance(payload, dict):
        raise TmdbClientError("TMDb returned unexpected JSON shape (not an object).")
    return payload


def _search(
    path: str,
    query: str,
    *,
    language: str | None,
    api_key: str | None,
    bearer_token: str | None,
    session: requests.Session | None,
    cancel_token: CancellationToken | None,
) -> list[dict[str, Any]]:
    params, headers = _auth(api_key, bearer_token)
    params["query"] = query
    if language:
        params["language"] = language
    session = session or requests.Session()
    payload = _request_json(
        session,
        f"{TMDB_API_BASE_URL}/search/{path}",
        params=params,
        headers=headers,
        cancel_token=cancel_token,
    )
    results = payload.get("results")
    if not isinstance(results, list):
        return []
    return [r for r in results if isinstance(r, dict)]


def search_person(
    name: str,
    *,
    language: str | None = None,
    api_key: str | None = None,
    bearer_token: str | None = None,
    session: requests.Session | None = None,
    cancel_token: CancellationToken | None = None,
) -> list[dict[str, Any]]:
    """
    Search TMDb people by name via `/search/person`.

    Results are returned in TMDb's own relevance order; an empty list means no match.
    """

    return _search(
        "person",
        name,
        language=language,
        api_key=api_key,
        bearer_token=bearer_token,
        session=session,
        cancel_token=cancel_token,
    )


def search_tv(
    name: str,
    *,
    language: str | None = None,
    api_key: str | None = None,
    bearer_token: str | None = None,
    session: requests.Session | None = None,
    cancel_token: CancellationToken | None = None,
) -> list[dict[str, Any]]:
    return _search(
        "tv",
        name,
        language=language,
        api_key=api_key,
        bearer_token=bearer_token,
        session=session,
        cancel_token=cancel_token,
    )


def _fetch_or_none(
    url: str,
    params: dict[str, Any],
    headers: dict[str, str],
    *,
    session: requests.Session | None,
    cancel_token: CancellationToken | None,
) -> dict[str, Any] | None:
    session = session or requests.Session()
    try:
        return _request_json(session, url, params=params, headers=headers, cancel_token=cancel_token)
    except TmdbClientError as exc:
        if exc.status_code == 404:
            return None
        raise


def fetch_person_details(
    person_id: int,
    *,
    language: str | None = None,
    append_to_response: list[str] | None = None,
    api_key: str | None = None,
    bearer_token: str | None = None,
    session: requests.Session | None = None,
    cancel_token: CancellationToken | None = None,
) -> dict[str, Any] | None:
    """
    Fetch a person payload from `/3/person/{id}`.

    Returns None when TMDb has no such person (HTTP 404).
    """

    params, headers = _auth(api_key, bearer_token)
    if language:
        params["language"] = language
    append_parts = [p.strip() for p in (append_to_response or []) if isinstance(p, str) and p.strip()]
    if append_parts:
        params["append_to_response"] = ",".join(append_parts)
    url = f"{TMDB_API_BASE_URL}/person/{int(person_id)}"
    return _fetch_or_none(url, params, headers, session=session, cancel_token=cancel_token)


def fetch_tv_season_details(
    tv_id: int,
    season_number: int,
    *,
    language: str | None = None,
    include_image_language: str | None = None,
    append_to_response: list[str] | None = None,
    api_key: str | None = None,
    bearer_token: str | None = None,
    session: requests.Session | None = None,
    cancel_token: CancellationToken | None = None,
) -> dict[str, Any] | None:
    """
    Fetch a TV season payload from `/3/tv/{id}/season/{season_number}`.

    Returns None when TMDb has no such season (HTTP 404).
    """

    params, headers = _auth(api_key, bearer_token)
    if language:
        params["language"] = language
    if include_image_language:
        params["include_image_language"] = include_image_language
    append_parts = [p.strip() for p in (append_to_response or []) if isinstance(p, str) and p.strip()]
    if append_parts:
        params["append_to_response"] = ",".join(append_parts)
    url = f"{TMDB_API_BASE_URL}/tv/{int(tv_id)}/season/{int(season_number)}"
    return _fetch_or_none(url, params, headers, session=session, cancel_token=cancel_token)


def fetch_image_response(
    url: str,
    *,
    session: requests.Session | None = None,
    timeout_seconds: float = 30.0,
    cancel_token: CancellationToken | None = None,
) -> requests.Response:
    """
    Forward an image URL to a plain HTTP GET and return the raw streamed response.

    No status handling happens here; the caller owns the response and must close it.
    """

    raise_if_cancelled(cancel_token)
    session = session or requests.Session()
    try:
        resp = _get(session, url, stream=True, timeout=timeout_seconds, cancel_token=cancel_token)
    except requests.RequestException as exc:
        if cancel_token is not None and cancel_token.cancelled:
            raise OperationCancelled("Image request cancelled by caller.") from exc
        raise TmdbClientError(f"Image request failed: {exc}") from exc
    return resp
