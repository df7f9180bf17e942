"""Check that the share link service works against a Redis running on your local machine

Connection details (defaults):
- redis: 127.0.0.1:6379
- redisinsight: 127.0.0.1:5540

The script issues a share link for a sample schedule URL, resolves it back
and prints both. You can also access the Redis Insight UI at localhost:5540
and inspect the `share:<share id>` key (TTL 90 days).

CLI usage:
    $ python local_healthcheck.py
    $ python local_healthcheck.py --host 127.0.0.1 --port 6380
    $ python local_healthcheck.py --config config/local.yaml
"""

import argparse

from sharelinks.models import OriginContext
from sharelinks.dao.redis import ShareLinkRedisDAO
from sharelinks.links import LinkIssuer, LinkResolver
from sharelinks.utils import load_config_file, RedisConfig, AllowListConfig, initialize_logging


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog='local_healthcheck.py',
        description='Issue and resolve a share link against a local Redis',
    )
    parser.add_argument('--host', default='localhost', help='Redis host (default: localhost)')
    parser.add_argument('--port', type=int, default=6379, help='Redis port (default: 6379)')
    parser.add_argument('--db', type=int, default=0, help='Redis database index (default: 0)')
    parser.add_argument('--config', default=None, help='YAML document shaped like the AppConfig document (overrides --host/--port/--db)')
    parser.add_argument('--origin', default='http://localhost:3000', help='Origin the sample schedule URL lives on')
    args = parser.parse_args(argv)

    initialize_logging()

    if args.config:
        app_config = load_config_file(args.config, 'issue_link')
        redis_config = RedisConfig.from_dict(app_config.get('redis'))
        allow_list = AllowListConfig.from_dict(app_config.get('allow_list'))
    else:
        redis_config = RedisConfig.from_dict({'host': args.host, 'port': args.port, 'db': args.db})
        allow_list = AllowListConfig()

    dao = ShareLinkRedisDAO(**redis_config.dao_kwargs())
    origin = OriginContext(origin=args.origin, base_url=args.origin)

    issued = LinkIssuer(dao, allow_list).issue(f'{args.origin}/shared/healthcheck?source=cli', origin)
    print(f'Issued  {issued.short_url} (expires {issued.to_dict()["expiresAt"]})')

    long_url = LinkResolver(dao).resolve(issued.share_id)
    print(f'Resolved {issued.share_id} -> {long_url}')


if __name__ == '__main__':
    main()
