"""Post documents: newest-first listing, author cascade, likes and comments."""

from typing import Any, List, Optional

from devconnector.models import Post
from devconnector.repositories.base import ListMutation, Repository, parse_id


class PostRepository(Repository[Post]):
    model = Post

    async def list_recent(self) -> List[Post]:
        return await self.find(order_by=(Post.date.desc(),))

    async def delete_by_user(self, user_id: Any) -> int:
        pk = parse_id(user_id)
        if pk is None:
            return 0
        return await self.delete_where(Post.user_id == pk)

    async def mutate_likes(self, post_id: Any, mutate: ListMutation) -> Optional[Post]:
        pk = parse_id(post_id)
        if pk is None:
            return None
        return await self._mutate_list("likes", mutate, Post.id == pk)

    async def mutate_comments(self, post_id: Any, mutate: ListMutation) -> Optional[Post]:
        pk = parse_id(post_id)
        if pk is None:
            return None
        return await self._mutate_list("comments", mutate, Post.id == pk)
