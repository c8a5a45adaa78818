from .base_model import BaseModel
from ..utils.helpers import to_object_id


class Billboard(BaseModel):
    """A hero banner (label + image) that categories display."""

    collection_name = "billboards"

    def __init__(self, store_id, label, image_url):
        super().__init__(store_id=store_id, label=label, image_url=image_url)

    @classmethod
    def is_in_use(cls, billboard_id):
        from .category_model import Category
        return Category.exists({"billboard_id": to_object_id(billboard_id)})
