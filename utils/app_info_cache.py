import json
import os
import shutil

from utils.logging_setup import get_logger

logger = get_logger(__name__)


class AppInfoCache:
    CACHE_LOC = os.path.join(os.path.dirname(os.path.abspath(os.path.dirname(__file__))), "app_info_cache.json")
    INFO_KEY = "info"

    def __init__(self, cache_loc=None):
        self.cache_loc = cache_loc or AppInfoCache.CACHE_LOC
        self._cache = {AppInfoCache.INFO_KEY: {}}
        self.load()

    def store(self):
        try:
            with open(self.cache_loc, "w", encoding="utf-8") as f:
                json.dump(self._cache, f, ensure_ascii=False, indent=2)
        except Exception as e:
            logger.error(f"Error storing cache: {e}")
            raise e

    def _try_load_cache_from_file(self, path):
        """Attempt to load the cache from the given file path. Raises on failure."""
        with open(path, "r", encoding="utf-8") as f:
            cache = json.load(f)
        if not isinstance(cache, dict):
            raise Exception(f"Unexpected cache contents in {path}")
        return cache

    def load(self):
        # Try the cache file and its backups in order
        cache_paths = [
            self.cache_loc,
            self.cache_loc + ".bak",
            self.cache_loc + ".bak2"
        ]
        any_exist = any(os.path.exists(path) for path in cache_paths)
        if not any_exist:
            logger.info(f"No cache file found at {self.cache_loc}, creating new cache")
            return

        for path in cache_paths:
            if os.path.exists(path):
                try:
                    self._cache = self._try_load_cache_from_file(path)
                    # Only shift backups if we loaded from the main file
                    if path == self.cache_loc:
                        text = f"Loaded cache from {self.cache_loc}, shifted backups to {cache_paths[1]}"
                        if os.path.exists(cache_paths[1]):
                            shutil.copy2(cache_paths[1], cache_paths[2])
                            text += f" and {cache_paths[2]}"
                        shutil.copy2(self.cache_loc, cache_paths[1])
                        logger.info(text)
                    else:
                        logger.warning(f"Loaded cache from backup: {path}")
                    return
                except Exception as e:
                    logger.error(f"Failed to load cache from {path}: {e}")
                    continue
        # If we get here, all attempts failed (but at least one file existed)
        raise Exception(f"Failed to load cache from all locations: {cache_paths}")

    def set(self, key, value):
        if AppInfoCache.INFO_KEY not in self._cache:
            self._cache[AppInfoCache.INFO_KEY] = {}
        self._cache[AppInfoCache.INFO_KEY][key] = value

    def get(self, key, default_val=None):
        if AppInfoCache.INFO_KEY not in self._cache or key not in self._cache[AppInfoCache.INFO_KEY]:
            return default_val
        return self._cache[AppInfoCache.INFO_KEY][key]
