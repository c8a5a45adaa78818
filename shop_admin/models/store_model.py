# shop_admin/models/store_model.py

from ..extensions.db import db
from ..utils.helpers import to_object_id
from .base_model import BaseModel


class Store(BaseModel):
    """
    A store owned by one user of the identity provider. Every other
    back-office record hangs off a store.
    """

    collection_name = "stores"
    object_id_fields = ()

    # Collections whose records block deleting the store
    DEPENDENT_COLLECTIONS = ("products", "categories", "billboards", "sizes", "colors")

    def __init__(self, name, user_id):
        super().__init__(name=name, user_id=str(user_id))

    @classmethod
    def get_by_id_and_user(cls, store_id, user_id):
        store_id_obj = to_object_id(store_id)
        if store_id_obj is None:
            return None
        return cls.collection().find_one({"_id": store_id_obj, "user_id": str(user_id)})

    @classmethod
    def get_by_user_id(cls, user_id):
        cursor = cls.collection().find({"user_id": str(user_id)}).sort([("created_at", 1)])
        return list(cursor)

    @classmethod
    def dependent_collections(cls, store_id):
        """Names of collections that still hold records of this store."""
        store_id_obj = to_object_id(store_id)
        return [
            name for name in cls.DEPENDENT_COLLECTIONS
            if db.get_collection(name).count_documents({"store_id": store_id_obj}, limit=1)
        ]
