# shop_admin/workers/media_worker.py
"""
Runs the rq worker that consumes Cloudinary cleanup jobs:

    python -m shop_admin.workers.media_worker
"""
from redis import Redis
from rq import Queue, Worker

from ..config import Config
from ..utils.logger import Log


def build_worker(connection=None):
    connection = connection or Redis(host=Config.REDIS_HOST, port=int(Config.REDIS_PORT))
    queue = Queue(Config.MEDIA_QUEUE_NAME, connection=connection)
    return Worker([queue], connection=connection)


def main():
    worker = build_worker()
    Log.info(f"[media-worker] listening on queue={Config.MEDIA_QUEUE_NAME}")
    worker.work()


if __name__ == "__main__":
    main()
