"""
Page cache for public routes.

Public views store their rendered JSON under the request path; CMS mutations
drop those paths through invalidate(). The backend is chosen by
PAGE_CACHE_BACKEND: "simple" keeps entries in the worker process, "redis"
shares them between workers.
"""
import json
import logging
import threading
import time
from functools import wraps

import redis
from flask import current_app, jsonify, request

logger = logging.getLogger(__name__)


def _check_path(path):
    if not isinstance(path, str) or not path.startswith('/'):
        raise ValueError(f'Cache path must be an absolute route path, got {path!r}')
    return path


class PageCache:
    """Interface shared by the cache backends"""

    def get(self, path):
        raise NotImplementedError

    def set(self, path, value):
        raise NotImplementedError

    def invalidate(self, path):
        """Drop the cached output for path. Idempotent."""
        raise NotImplementedError

    def clear(self):
        raise NotImplementedError


class SimplePageCache(PageCache):
    """Per-process dict cache with TTL"""

    def __init__(self, ttl=300):
        self.ttl = ttl
        self._entries = {}
        self._lock = threading.Lock()

    def get(self, path):
        with self._lock:
            entry = self._entries.get(_check_path(path))
            if entry is None:
                return None
            expires_at, value = entry
            if self.ttl and expires_at < time.monotonic():
                del self._entries[path]
                return None
            return value

    def set(self, path, value):
        with self._lock:
            self._entries[_check_path(path)] = (time.monotonic() + self.ttl, value)

    def invalidate(self, path):
        with self._lock:
            self._entries.pop(_check_path(path), None)

    def clear(self):
        with self._lock:
            self._entries.clear()


class RedisPageCache(PageCache):
    """Redis-backed cache; values are stored as JSON with an expiry"""

    def __init__(self, client, prefix='cms:page:', ttl=300):
        self.client = client
        self.prefix = prefix
        self.ttl = ttl

    @classmethod
    def from_url(cls, url, **kwargs):
        return cls(redis.Redis.from_url(url, decode_responses=True), **kwargs)

    def _key(self, path):
        return f'{self.prefix}{_check_path(path)}'

    def get(self, path):
        value = self.client.get(self._key(path))
        if value is None:
            return None
        return json.loads(value)

    def set(self, path, value):
        self.client.set(self._key(path), json.dumps(value), ex=self.ttl)

    def invalidate(self, path):
        self.client.delete(self._key(path))

    def clear(self):
        for key in self.client.scan_iter(match=f'{self.prefix}*'):
            self.client.delete(key)


def init_page_cache(app):
    """Create the configured backend and attach it to app.extensions"""
    backend = app.config.get('PAGE_CACHE_BACKEND', 'simple')
    ttl = app.config.get('PAGE_CACHE_TTL', 300)
    if backend == 'redis':
        cache = RedisPageCache.from_url(
            app.config['REDIS_URL'],
            prefix=app.config.get('PAGE_CACHE_PREFIX', 'cms:page:'),
            ttl=ttl,
        )
    elif backend == 'simple':
        cache = SimplePageCache(ttl=ttl)
    else:
        raise RuntimeError(f'Unknown PAGE_CACHE_BACKEND: {backend!r}')
    app.extensions['page_cache'] = cache
    app.logger.info("Page cache backend: %s", backend)
    return cache


def get_page_cache():
    return current_app.extensions['page_cache']


def cached_page(view):
    """Serve a JSON view from the page cache, keyed by request path.

    The view returns a JSON-serialisable payload; a (payload, status) tuple
    with a non-200 status bypasses the cache.
    """
    @wraps(view)
    def decorated_function(*args, **kwargs):
        cache = get_page_cache()
        path = request.path
        try:
            hit = cache.get(path)
        except redis.RedisError as e:
            logger.warning("Page cache read failed for %s: %s", path, e)
            hit = None
        if hit is not None:
            return jsonify(hit)

        result = view(*args, **kwargs)
        if isinstance(result, tuple):
            payload, status = result
            return jsonify(payload), status
        try:
            cache.set(path, result)
        except redis.RedisError as e:
            logger.warning("Page cache write failed for %s: %s", path, e)
        return jsonify(result)
    return decorated_function
