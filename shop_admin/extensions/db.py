from pymongo import MongoClient, ASCENDING
from redis import Redis
from rq import Queue


class MongoDB:
    def __init__(self):
        self.client = None
        self.db = None

    def init_app(self, app, client=None):
        db_name = app.config.get("DB_NAME", "shop_admin")

        self.client = client or MongoClient(app.config["MONGO_URI"])
        self.db = self.client[db_name]
        app.mongo = self.db

        # -------------------------------------------------
        # CREATE INDEXES (runs once on startup)
        # -------------------------------------------------
        self.db.stores.create_index([("user_id", ASCENDING)])
        self.db.billboards.create_index([("store_id", ASCENDING)])
        self.db.categories.create_index([("store_id", ASCENDING)])
        self.db.categories.create_index([("billboard_id", ASCENDING)])
        self.db.sizes.create_index([("store_id", ASCENDING)])
        self.db.colors.create_index([("store_id", ASCENDING)])
        self.db.products.create_index([("store_id", ASCENDING), ("category_id", ASCENDING)])
        self.db.images.create_index([("product_id", ASCENDING)])
        self.db.product_variations.create_index([("product_id", ASCENDING)])
        self.db.order_items.create_index([("product_variation_id", ASCENDING)])
        self.db.order_items.create_index([("order_id", ASCENDING)])
        self.db.orders.create_index([("store_id", ASCENDING), ("created_at", -1)])

    def get_collection(self, name):
        if self.db is None:
            raise RuntimeError("MongoDB not initialized")
        return self.db[name]


class RedisConnection:
    def __init__(self):
        self.connection = None
        self.queue = None

    def init_app(self, app):
        host = app.config.get("REDIS_HOST", "localhost")
        port = int(app.config.get("REDIS_PORT", 6379))
        self.connection = Redis(host=host, port=port)
        self.queue = Queue(app.config.get("MEDIA_QUEUE_NAME", "media"), connection=self.connection)
        app.queue = self.queue

# Export the instances
db = MongoDB()
redis_connection = RedisConnection()
