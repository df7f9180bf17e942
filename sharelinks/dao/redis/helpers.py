import functools
import redis
from typing import TypeVar, Any
from collections.abc import Callable

from sharelinks.dao.exceptions import DataStoreError


__all__ = []

F = TypeVar('F', bound=Callable[..., Any])


def _redis_location(client: redis.Redis) -> str:
    info = client.connection_pool.connection_kwargs
    return f"{info.get('host')}:{info.get('port')}/{info.get('db')}"


def handle_redis_connection_error[F](method: F) -> F:
    """Wrap Redis-interacting DAO methods to handle data store errors

    Connection errors and timeouts name the Redis location in the raised
    DataStoreError; any other Redis error is reported without details.
    Credentials are never part of the message.

    Args:
        method (Callable[..., Any]):
            DAO method performing Redis operations which may raise redis.exceptions.RedisError.

    Returns:
        Callable[..., Any]:
            Wrapped method which raises DataStoreError on any Redis failure.

    Example:
        >>> @handle_redis_connection_error
        ... def get_record(self, share_id):
        ...     return self.redis.get(self.keys.share_key(share_id))
    """

    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        try:
            return method(self, *args, **kwargs)
        except redis.exceptions.TimeoutError as e:
            raise DataStoreError(f'Timed out talking to Redis at {_redis_location(self.redis)}.') from e
        except redis.exceptions.ConnectionError as e:
            raise DataStoreError(f"Can't connect to Redis at {_redis_location(self.redis)}.") from e
        except redis.exceptions.RedisError as e:
            raise DataStoreError(f'Redis command failed ({type(e).__name__}).') from e

    return wrapper
