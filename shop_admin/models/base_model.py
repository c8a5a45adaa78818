# shop_admin/models/base_model.py

from datetime import datetime

from pymongo import ReturnDocument

from ..extensions.db import db
from ..utils.helpers import to_object_id


class BaseModel:
    """
    A base class for models providing common CRUD operations.

    Documents of store-scoped models carry a `store_id`; every lookup that
    receives a store id filters on it so one store can never read or write
    another store's records.
    """
    collection_name = None

    # Fields stored as ObjectId references
    object_id_fields = ("store_id",)

    def __init__(self, **kwargs):
        now = datetime.now()
        self.created_at = now
        self.updated_at = now

        # Initialize model attributes based on kwargs
        for key, value in kwargs.items():
            if key in self.object_id_fields:
                value = to_object_id(value)
            setattr(self, key, value)

    def to_dict(self):
        """
        Convert the model object to a dictionary representation.
        """
        return {key: getattr(self, key) for key in self.__dict__}

    def save(self):
        """
        Insert the model and return the stored document.
        """
        collection = db.get_collection(self.collection_name)
        document = self.to_dict()
        result = collection.insert_one(document)
        document["_id"] = result.inserted_id
        return document

    @classmethod
    def collection(cls):
        return db.get_collection(cls.collection_name)

    @classmethod
    def _scoped_query(cls, record_id, store_id=None):
        record_id_obj = to_object_id(record_id)
        if record_id_obj is None:
            return None
        query = {"_id": record_id_obj}
        if store_id is not None:
            store_id_obj = to_object_id(store_id)
            if store_id_obj is None:
                return None
            query["store_id"] = store_id_obj
        return query

    @classmethod
    def get_by_id(cls, record_id, store_id=None):
        """
        Retrieve a record by its ID, optionally restricted to a store.
        Invalid ids are treated as "not found".
        """
        query = cls._scoped_query(record_id, store_id)
        if query is None:
            return None
        return cls.collection().find_one(query)

    @classmethod
    def get_by_store_id(cls, store_id, extra_query=None, sort=None):
        """
        Retrieve all records of a store, newest first unless told otherwise.
        """
        store_id_obj = to_object_id(store_id)
        if store_id_obj is None:
            return []

        query = {"store_id": store_id_obj}
        if extra_query:
            query.update(extra_query)

        cursor = cls.collection().find(query).sort(sort or [("created_at", -1)])
        return list(cursor)

    @classmethod
    def update(cls, record_id, store_id=None, **updates):
        """
        Update a record and return the document as it is after the update,
        or None when no record matched.
        """
        query = cls._scoped_query(record_id, store_id)
        if query is None:
            return None

        for key in cls.object_id_fields:
            if key in updates:
                updates[key] = to_object_id(updates[key])
        updates["updated_at"] = datetime.now()

        return cls.collection().find_one_and_update(
            query,
            {"$set": updates},
            return_document=ReturnDocument.AFTER,
        )

    @classmethod
    def delete(cls, record_id, store_id=None):
        """
        Delete a record by its ID and return the removed document (None if absent).
        """
        query = cls._scoped_query(record_id, store_id)
        if query is None:
            return None
        return cls.collection().find_one_and_delete(query)

    @classmethod
    def exists(cls, query):
        return cls.collection().count_documents(query, limit=1) > 0
