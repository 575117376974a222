"""Post statistics service."""

from bloglist.domain import list_helper
from bloglist.repositories.memory import InMemoryStore
from bloglist.schemas.stats import PostStatistics


class StatisticsService:
    def __init__(self, store: InMemoryStore) -> None:
        self._store = store

    def summarize(self) -> PostStatistics:
        posts = self._store.list_posts()
        return PostStatistics(
            total_likes=list_helper.total_likes(posts),
            favorite_post=list_helper.favorite_post(posts),
            most_posts=list_helper.author_with_most_posts(posts),
            most_likes=list_helper.author_with_most_likes(posts),
        )
