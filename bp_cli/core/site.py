"""Site context switching for multisite networks.

Some resources (email templates in particular) live on the network's
primary site only.  :class:`SiteContext` tracks which site requests should
target and lets callers switch to another site for the duration of a
``with`` block; the previous site is always restored on exit, whether the
block returns normally, returns early or raises.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator, List

from loguru import logger

from .config import Site, get_site, load_config


class SiteContext:
    def __init__(self, current: Site, root: Site) -> None:
        self._stack: List[Site] = [current]
        self.root = root

    @property
    def current(self) -> Site:
        return self._stack[-1]

    def is_root(self) -> bool:
        return self.current.url == self.root.url

    @contextmanager
    def switch_to(self, site: Site) -> Iterator[Site]:
        logger.debug("Switching site context to {}", site.url)
        self._stack.append(site)
        try:
            yield site
        finally:
            self._stack.pop()
            logger.debug("Restored site context to {}", self.current.url)

    @contextmanager
    def on_root(self) -> Iterator[Site]:
        """Run the block against the primary site, switching only if needed."""
        if self.is_root():
            yield self.current
            return
        with self.switch_to(self.root) as site:
            yield site


def get_site_context() -> SiteContext:
    """Build a context for the configured site.

    ``root_url`` only matters on multisite networks; when it is missing the
    current site is treated as the primary one.
    """
    current = get_site()
    root_url = load_config().get("root_url")
    root = Site(root_url.rstrip("/"), current.auth) if root_url else current
    return SiteContext(current, root)
