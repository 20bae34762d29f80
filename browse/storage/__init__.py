"""Storage module for the content database.

content.db holds the category tree and the four content collections
(articles, lectures, presentations, events). The browse and sitemap views
only ever read a full snapshot of it (see storage/repository.py).
"""

from storage.manager import StorageManager

__all__ = ["StorageManager"]
