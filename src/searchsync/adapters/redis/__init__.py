"""Redis adapter – deferred search sync queue."""
from searchsync.adapters.redis.task_queue import RedisTaskQueue

__all__ = ["RedisTaskQueue"]
